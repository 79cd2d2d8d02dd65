# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Volume mount augmenters for Deployment-like resources.

Each function mounts one volume into every container of the pod template and
adds the matching volume to the pod spec exactly once. Init containers are
left alone. The input resource is never modified.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from kubeassembler.exceptions import MissingFieldError
from kubeassembler.manifests.formatter import config_hash
from kubeassembler.manifests.merge import append, get_path
from kubeassembler.manifests.schema import KubeSchema

logger = logging.getLogger(__name__)

Resource = dict[str, Any]


def _mount_everywhere(
    schema: KubeSchema,
    resource: Resource,
    volume_mount: dict[str, Any],
    volume: dict[str, Any],
    annotations: Optional[dict[str, str]] = None,
) -> Resource:
    pod_spec: dict[str, Any] = {"volumes": append([volume])}
    containers = get_path(resource, "spec.template.spec.containers")
    if isinstance(containers, list):
        pod_spec["containers"] = [schema.merge(c, {"volumeMounts": append([volume_mount])}) for c in containers]

    template: dict[str, Any] = {"spec": pod_spec}
    if annotations:
        template["metadata"] = {"annotations": annotations}

    logger.debug(
        "Mounting volume '%s' at %s into %d container(s) of %s/%s",
        volume.get("name"),
        volume_mount.get("mountPath"),
        len(containers) if isinstance(containers, list) else 0,
        resource.get("kind"),
        get_path(resource, "metadata.name"),
    )
    return schema.merge(resource, {"spec": {"template": template}})


def config_map_volume_mount(
    resource: Resource,
    config_map: Resource,
    path: str,
    volume_mount_mixin: Optional[dict[str, Any]] = None,
    schema: Optional[KubeSchema] = None,
) -> Resource:
    """
    Mount a ConfigMap and pin its content hash on the pod template.

    The pod template gains the annotation ``<name>-hash`` so that any change
    to the ConfigMap changes the template and rolls the pods.

    Args:
        resource: Deployment-like resource
        config_map: Full ConfigMap object; its ``metadata.name`` names the volume
        path: Mount path inside each container
        volume_mount_mixin: Optional fragment merged into each VolumeMount
        schema: Object constructors, defaults to ``KubeSchema()``

    Returns:
        Updated resource

    Raises:
        MissingFieldError: If the ConfigMap has no ``metadata.name``.
    """
    schema = schema or KubeSchema()
    name = get_path(config_map, "metadata.name")
    if not name:
        raise MissingFieldError("metadata.name", config_map.get("kind") or "ConfigMap")
    mount = schema.merge(schema.volume_mount(name, path), volume_mount_mixin)
    volume = schema.volume_from_config_map(name, name)
    return _mount_everywhere(schema, resource, mount, volume, annotations={f"{name}-hash": config_hash(config_map)})


def config_volume_mount(
    resource: Resource,
    name: str,
    path: str,
    volume_mount_mixin: Optional[dict[str, Any]] = None,
    schema: Optional[KubeSchema] = None,
) -> Resource:
    """Mount the ConfigMap called ``name`` without tracking its content."""
    schema = schema or KubeSchema()
    mount = schema.merge(schema.volume_mount(name, path), volume_mount_mixin)
    return _mount_everywhere(schema, resource, mount, schema.volume_from_config_map(name, name))


def host_volume_mount(
    resource: Resource,
    name: str,
    host_path: str,
    path: str,
    read_only: bool = False,
    volume_mount_mixin: Optional[dict[str, Any]] = None,
    schema: Optional[KubeSchema] = None,
) -> Resource:
    schema = schema or KubeSchema()
    mount = schema.merge(schema.volume_mount(name, path, read_only=read_only), volume_mount_mixin)
    return _mount_everywhere(schema, resource, mount, schema.volume_from_host_path(name, host_path))


def pvc_volume_mount(
    resource: Resource,
    pvc_name: str,
    path: str,
    read_only: bool = False,
    volume_mount_mixin: Optional[dict[str, Any]] = None,
    schema: Optional[KubeSchema] = None,
) -> Resource:
    """Mount the PersistentVolumeClaim ``pvc_name``; the volume takes the claim's name."""
    schema = schema or KubeSchema()
    mount = schema.merge(schema.volume_mount(pvc_name, path, read_only=read_only), volume_mount_mixin)
    return _mount_everywhere(schema, resource, mount, schema.volume_from_pvc(pvc_name, pvc_name))


def secret_volume_mount(
    resource: Resource,
    name: str,
    path: str,
    default_mode: Optional[int] = None,
    volume_mount_mixin: Optional[dict[str, Any]] = None,
    schema: Optional[KubeSchema] = None,
) -> Resource:
    """
    Mount the Secret called ``name``.

    ``default_mode`` is the file permission of the projected keys, given as an
    int (``0o400`` == 256). It falls back to ``settings.secret_default_mode``.
    """
    schema = schema or KubeSchema()
    if default_mode is None:
        default_mode = schema.settings.secret_default_mode
    mount = schema.merge(schema.volume_mount(name, path), volume_mount_mixin)
    volume = schema.volume_from_secret(name, name, default_mode=default_mode)
    return _mount_everywhere(schema, resource, mount, volume)


def empty_volume_mount(
    resource: Resource,
    name: str,
    path: str,
    volume_mount_mixin: Optional[dict[str, Any]] = None,
    volume_mixin: Optional[dict[str, Any]] = None,
    schema: Optional[KubeSchema] = None,
) -> Resource:
    """Mount a fresh emptyDir; ``volume_mixin`` can set e.g. ``{"emptyDir": {"medium": "Memory"}}``."""
    schema = schema or KubeSchema()
    mount = schema.merge(schema.volume_mount(name, path), volume_mount_mixin)
    volume = schema.merge(schema.volume_from_empty_dir(name), volume_mixin)
    return _mount_everywhere(schema, resource, mount, volume)
