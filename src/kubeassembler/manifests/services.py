# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from kubeassembler.exceptions import MissingFieldError
from kubeassembler.manifests.merge import get_path
from kubeassembler.manifests.schema import KubeSchema

logger = logging.getLogger(__name__)


def service_for(
    deployment: dict[str, Any],
    ignored_labels: Iterable[str] = (),
    name_format: Optional[str] = None,
    schema: Optional[KubeSchema] = None,
) -> dict[str, Any]:
    """
    Derive a Service exposing every named container port of a Deployment.

    Args:
        deployment: Deployment-shaped resource
        ignored_labels: Pod template label keys left out of the selector
        name_format: %-style template for port names, receives ``container`` and ``port``.
                     Defaults to ``settings.service_name_format`` ("%(container)s-%(port)s").
        schema: Object constructors, defaults to ``KubeSchema()``

    Returns:
        Service resource named after the deployment and labelled ``name=<deployment name>``

    Raises:
        MissingFieldError: If the deployment has no ``metadata.name`` or a
            container port lacks ``name`` or ``containerPort``.
    """
    schema = schema or KubeSchema()
    name_format = name_format or schema.settings.service_name_format
    name = get_path(deployment, "metadata.name")
    if not name:
        raise MissingFieldError("metadata.name", deployment.get("kind"))

    ignored = set(ignored_labels)
    labels = get_path(deployment, "spec.template.metadata.labels") or {}
    selector = {k: v for k, v in labels.items() if k not in ignored}

    ports = []
    for container in get_path(deployment, "spec.template.spec.containers") or []:
        for port in container.get("ports") or []:
            if "containerPort" not in port:
                raise MissingFieldError(
                    f"spec.template.spec.containers[{container.get('name')}].ports[].containerPort",
                    deployment.get("kind"),
                )
            if not port.get("name"):
                raise MissingFieldError(
                    f"spec.template.spec.containers[{container.get('name')}].ports[].name",
                    deployment.get("kind"),
                )
            port_name = name_format % {"container": container.get("name"), "port": port["name"]}
            sp = schema.service_port(port_name, port["containerPort"], port["containerPort"])
            if "protocol" in port:
                sp["protocol"] = port["protocol"]
            ports.append(sp)

    metadata: dict[str, Any] = {"labels": {"name": name}}
    namespace = get_path(deployment, "metadata.namespace")
    if namespace:
        metadata["namespace"] = namespace
    service = schema.merge(schema.service(name, selector, ports), {"metadata": metadata})
    logger.debug("Derived service %s with %d port(s)", name, len(ports))
    return service
