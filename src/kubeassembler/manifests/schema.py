# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Constructors for the Kubernetes object kinds the assembler produces.

``KubeSchema`` is injected into ``Assembler``; any object exposing the same
methods can stand in for it (tests pass a recording mock). Every method
returns a fresh plain dict.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from kubeassembler.config import AssemblerSettings
from kubeassembler.manifests.merge import deep_merge


class KubeSchema:
    def __init__(self, settings: Optional[AssemblerSettings] = None):
        self.settings = settings or AssemblerSettings()

    def merge(self, base: Any, *overlays: Any) -> Any:
        return deep_merge(base, *overlays)

    def _object(self, kind: str, name: str, namespace: Optional[str] = None) -> dict[str, Any]:
        metadata: dict[str, Any] = {"name": name}
        if namespace is not None:
            metadata["namespace"] = namespace
        return {
            "apiVersion": self.settings.api_version(kind),
            "kind": kind,
            "metadata": metadata,
        }

    # ---- workloads ----

    def _workload(
        self, kind: str, name: str, containers: Iterable[dict[str, Any]], replicas: Optional[int], labels: Optional[dict]
    ) -> dict[str, Any]:
        pod_labels = dict(labels) if labels is not None else {"name": name}
        obj = self._object(kind, name)
        spec: dict[str, Any] = {}
        if replicas is not None:
            spec["replicas"] = replicas
        spec["selector"] = {"matchLabels": dict(pod_labels)}
        spec["template"] = {
            "metadata": {"labels": pod_labels},
            "spec": {"containers": [dict(c) for c in containers]},
        }
        obj["spec"] = spec
        return obj

    def deployment(
        self,
        name: str,
        containers: Iterable[dict[str, Any]] = (),
        replicas: Optional[int] = 1,
        labels: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Deployment whose pod template is labelled ``name=<name>`` unless ``labels`` is given."""
        return self._workload("Deployment", name, containers, replicas, labels)

    def stateful_set(
        self,
        name: str,
        containers: Iterable[dict[str, Any]] = (),
        replicas: Optional[int] = 1,
        labels: Optional[dict[str, str]] = None,
        service_name: Optional[str] = None,
    ) -> dict[str, Any]:
        obj = self._workload("StatefulSet", name, containers, replicas, labels)
        obj["spec"]["serviceName"] = service_name or name
        return obj

    def container(
        self, name: str, image: Optional[str] = None, ports: Iterable[dict[str, Any]] = ()
    ) -> dict[str, Any]:
        c: dict[str, Any] = {"name": name}
        if image is not None:
            c["image"] = image
        ports = [dict(p) for p in ports]
        if ports:
            c["ports"] = ports
        return c

    def container_port(self, name: str, port: int, protocol: Optional[str] = None) -> dict[str, Any]:
        p: dict[str, Any] = {"name": name, "containerPort": port}
        if protocol is not None:
            p["protocol"] = protocol
        return p

    def config_map(
        self, name: str, data: Optional[dict[str, str]] = None, namespace: Optional[str] = None
    ) -> dict[str, Any]:
        obj = self._object("ConfigMap", name, namespace)
        obj["data"] = dict(data or {})
        return obj

    # ---- services ----

    def service(
        self, name: str, selector: dict[str, str], ports: Iterable[dict[str, Any]]
    ) -> dict[str, Any]:
        obj = self._object("Service", name)
        obj["spec"] = {"selector": dict(selector), "ports": list(ports)}
        return obj

    def service_port(self, name: str, port: int, target_port: Any) -> dict[str, Any]:
        return {"name": name, "port": port, "targetPort": target_port}

    # ---- rbac ----

    def service_account(self, name: str, namespace: Optional[str] = None) -> dict[str, Any]:
        return self._object("ServiceAccount", name, namespace)

    def cluster_role(self, name: str, rules: Iterable[dict[str, Any]] = ()) -> dict[str, Any]:
        obj = self._object("ClusterRole", name)
        obj["rules"] = list(rules)
        return obj

    def role(self, name: str, rules: Iterable[dict[str, Any]] = (), namespace: Optional[str] = None) -> dict[str, Any]:
        obj = self._object("Role", name, namespace)
        obj["rules"] = list(rules)
        return obj

    def role_ref(self, kind: str, name: str) -> dict[str, Any]:
        return {"apiGroup": self.settings.rbac_api_group, "kind": kind, "name": name}

    def subject(self, kind: str, name: str, namespace: Optional[str] = None) -> dict[str, Any]:
        s: dict[str, Any] = {"kind": kind, "name": name}
        if namespace is not None:
            s["namespace"] = namespace
        return s

    def cluster_role_binding(
        self, name: str, role_ref: dict[str, Any], subjects: Iterable[dict[str, Any]]
    ) -> dict[str, Any]:
        obj = self._object("ClusterRoleBinding", name)
        obj["roleRef"] = role_ref
        obj["subjects"] = list(subjects)
        return obj

    def role_binding(
        self,
        name: str,
        role_ref: dict[str, Any],
        subjects: Iterable[dict[str, Any]],
        namespace: Optional[str] = None,
    ) -> dict[str, Any]:
        obj = self._object("RoleBinding", name, namespace)
        obj["roleRef"] = role_ref
        obj["subjects"] = list(subjects)
        return obj

    # ---- volumes ----

    def volume_mount(self, name: str, mount_path: str, read_only: Optional[bool] = None) -> dict[str, Any]:
        vm: dict[str, Any] = {"name": name, "mountPath": mount_path}
        if read_only is not None:
            vm["readOnly"] = read_only
        return vm

    def volume_from_config_map(self, name: str, config_map_name: str) -> dict[str, Any]:
        return {"name": name, "configMap": {"name": config_map_name}}

    def volume_from_secret(self, name: str, secret_name: str, default_mode: Optional[int] = None) -> dict[str, Any]:
        source: dict[str, Any] = {"secretName": secret_name}
        if default_mode is not None:
            source["defaultMode"] = default_mode
        return {"name": name, "secret": source}

    def volume_from_host_path(self, name: str, host_path: str) -> dict[str, Any]:
        return {"name": name, "hostPath": {"path": host_path}}

    def volume_from_pvc(self, name: str, claim_name: str) -> dict[str, Any]:
        return {"name": name, "persistentVolumeClaim": {"claimName": claim_name}}

    def volume_from_empty_dir(self, name: str) -> dict[str, Any]:
        return {"name": name, "emptyDir": {}}

    # ---- scheduling ----

    def pod_anti_affinity_term(self, match_labels: dict[str, str], topology_key: Optional[str] = None) -> dict[str, Any]:
        return {
            "labelSelector": {"matchLabels": dict(match_labels)},
            "topologyKey": topology_key or self.settings.topology_key,
        }
