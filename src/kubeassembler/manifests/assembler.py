# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Assembler: one object binding a schema and settings to every helper.

    asm = Assembler()
    deploy = asm.schema.deployment("api", [asm.schema.container("web", "nginx", ports=[...])])
    deploy = asm.config_map_volume_mount(deploy, config_map, "/etc/api")
    deploy = asm.anti_affinity(deploy)
    print(asm.to_yaml_stream([deploy, asm.service_for(deploy)]))
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from kubeassembler.config import AssemblerSettings
from kubeassembler.exceptions import ManifestError
from kubeassembler.manifests import flags, formatter, resources, scheduling, services, volumes
from kubeassembler.manifests.rbac import RBACBundle
from kubeassembler.manifests.rbac import namespaced_rbac as build_namespaced_rbac
from kubeassembler.manifests.rbac import rbac as build_rbac
from kubeassembler.manifests.schema import KubeSchema

Resource = dict[str, Any]


class Assembler:
    """
    Helpers bound to one schema and one settings object.

    An injected schema carries its own settings; passing different ``settings``
    alongside it raises ``ManifestError`` so every helper sees the same values.
    """

    def __init__(self, schema: Optional[KubeSchema] = None, settings: Optional[AssemblerSettings] = None):
        if schema is None:
            schema = KubeSchema(settings)
        schema_settings = getattr(schema, "settings", None)
        if settings is not None and schema_settings is not None and settings != schema_settings:
            raise ManifestError("settings differ from the injected schema's settings, pass only one of them")
        self.schema = schema
        self.settings = schema_settings or settings or AssemblerSettings()

    def merge(self, base: Any, *overlays: Any) -> Any:
        return self.schema.merge(base, *overlays)

    # ---- flags ----

    def map_to_flags(self, mapping: Mapping[str, Any], prefix: Optional[str] = None) -> list[str]:
        return flags.map_to_flags(mapping, self.settings.flag_prefix if prefix is None else prefix)

    # ---- composite builders ----

    def service_for(
        self, deployment: Resource, ignored_labels: Iterable[str] = (), name_format: Optional[str] = None
    ) -> Resource:
        return services.service_for(
            deployment,
            ignored_labels=ignored_labels,
            name_format=name_format or self.settings.service_name_format,
            schema=self.schema,
        )

    def rbac(self, name: str, rules: Iterable[dict[str, Any]], namespace: str) -> RBACBundle:
        return build_rbac(name, rules, namespace, schema=self.schema)

    def namespaced_rbac(self, name: str, rules: Iterable[dict[str, Any]], namespace: str) -> RBACBundle:
        return build_namespaced_rbac(name, rules, namespace, schema=self.schema)

    # ---- volumes ----

    def config_map_volume_mount(
        self, resource: Resource, config_map: Resource, path: str, volume_mount_mixin: Optional[dict] = None
    ) -> Resource:
        return volumes.config_map_volume_mount(resource, config_map, path, volume_mount_mixin, schema=self.schema)

    def config_volume_mount(
        self, resource: Resource, name: str, path: str, volume_mount_mixin: Optional[dict] = None
    ) -> Resource:
        return volumes.config_volume_mount(resource, name, path, volume_mount_mixin, schema=self.schema)

    def host_volume_mount(
        self,
        resource: Resource,
        name: str,
        host_path: str,
        path: str,
        read_only: bool = False,
        volume_mount_mixin: Optional[dict] = None,
    ) -> Resource:
        return volumes.host_volume_mount(
            resource, name, host_path, path, read_only, volume_mount_mixin, schema=self.schema
        )

    def pvc_volume_mount(
        self,
        resource: Resource,
        pvc_name: str,
        path: str,
        read_only: bool = False,
        volume_mount_mixin: Optional[dict] = None,
    ) -> Resource:
        return volumes.pvc_volume_mount(resource, pvc_name, path, read_only, volume_mount_mixin, schema=self.schema)

    def secret_volume_mount(
        self,
        resource: Resource,
        name: str,
        path: str,
        default_mode: Optional[int] = None,
        volume_mount_mixin: Optional[dict] = None,
    ) -> Resource:
        if default_mode is None:
            default_mode = self.settings.secret_default_mode
        return volumes.secret_volume_mount(resource, name, path, default_mode, volume_mount_mixin, schema=self.schema)

    def empty_volume_mount(
        self,
        resource: Resource,
        name: str,
        path: str,
        volume_mount_mixin: Optional[dict] = None,
        volume_mixin: Optional[dict] = None,
    ) -> Resource:
        return volumes.empty_volume_mount(resource, name, path, volume_mount_mixin, volume_mixin, schema=self.schema)

    # ---- resources ----

    def resources_requests(self, cpu: Optional[str] = None, memory: Optional[str] = None) -> dict[str, Any]:
        return resources.resources_requests(cpu, memory)

    def resources_limits(self, cpu: Optional[str] = None, memory: Optional[str] = None) -> dict[str, Any]:
        return resources.resources_limits(cpu, memory)

    def with_container_resources(
        self, resource: Resource, requests: Optional[dict] = None, limits: Optional[dict] = None
    ) -> Resource:
        return resources.with_container_resources(resource, requests=requests, limits=limits)

    # ---- scheduling ----

    def anti_affinity(self, resource: Resource) -> Resource:
        return scheduling.anti_affinity(resource, schema=self.schema)

    def anti_affinity_stateful_set(self, resource: Resource) -> Resource:
        return scheduling.anti_affinity_stateful_set(resource, schema=self.schema)

    def pod_priority(self, resource: Resource, priority_class: str) -> Resource:
        return scheduling.pod_priority(resource, priority_class, schema=self.schema)

    # ---- output ----

    @staticmethod
    def to_yaml(obj: Any) -> str:
        return formatter.to_yaml(obj)

    @staticmethod
    def to_yaml_stream(objs: Iterable[Any]) -> str:
        return formatter.to_yaml_stream(objs)
