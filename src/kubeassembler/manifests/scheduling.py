# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Pod placement: anti-affinity and priority classes."""

from __future__ import annotations

import logging
from typing import Any, Optional

from kubeassembler.exceptions import ManifestError, MissingLabelError
from kubeassembler.manifests.merge import get_path
from kubeassembler.manifests.schema import KubeSchema

logger = logging.getLogger(__name__)

_ANTI_AFFINITY_KINDS = ("Deployment", "StatefulSet")


def _anti_affinity(resource: dict[str, Any], schema: KubeSchema) -> dict[str, Any]:
    name = get_path(resource, "spec.template.metadata.labels.name")
    if name is None:
        raise MissingLabelError("name", resource.get("kind"))
    term = schema.pod_anti_affinity_term({"name": name})
    logger.debug("Spreading pods labelled name=%s across %s", name, term["topologyKey"])
    # A plain list replaces any previous required terms.
    overlay = {
        "spec": {
            "template": {
                "spec": {
                    "affinity": {
                        "podAntiAffinity": {"requiredDuringSchedulingIgnoredDuringExecution": [term]},
                    }
                }
            }
        }
    }
    return schema.merge(resource, overlay)


def anti_affinity(resource: dict[str, Any], schema: Optional[KubeSchema] = None) -> dict[str, Any]:
    """
    Forbid two pods of the workload from landing on the same node.

    Requires the pod template label ``name``; raises ``MissingLabelError``
    without it rather than emitting a selector that matches nothing.
    """
    kind = resource.get("kind")
    if kind not in _ANTI_AFFINITY_KINDS:
        raise ManifestError(f"anti_affinity expects one of {', '.join(_ANTI_AFFINITY_KINDS)}, got {kind!r}")
    return _anti_affinity(resource, schema or KubeSchema())


def anti_affinity_stateful_set(resource: dict[str, Any], schema: Optional[KubeSchema] = None) -> dict[str, Any]:
    if resource.get("kind") != "StatefulSet":
        raise ManifestError(f"anti_affinity_stateful_set expects a StatefulSet, got {resource.get('kind')!r}")
    return _anti_affinity(resource, schema or KubeSchema())


def pod_priority(
    resource: dict[str, Any], priority_class: str, schema: Optional[KubeSchema] = None
) -> dict[str, Any]:
    schema = schema or KubeSchema()
    return schema.merge(resource, {"spec": {"template": {"spec": {"priorityClassName": priority_class}}}})
