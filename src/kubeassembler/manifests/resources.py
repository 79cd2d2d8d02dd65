# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Container resource requests and limits."""

from __future__ import annotations

import logging
from typing import Any, Optional

from kubeassembler.manifests.merge import deep_merge, get_path

logger = logging.getLogger(__name__)


def _quantities(cpu: Optional[str], memory: Optional[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    if cpu is not None:
        out["cpu"] = cpu
    if memory is not None:
        out["memory"] = memory
    return out


def resources_requests(cpu: Optional[str] = None, memory: Optional[str] = None) -> dict[str, Any]:
    """
    Container mixin setting resource requests.

    Only the given quantities are set; with neither given the result is
    ``{"resources": {"requests": {}}}``, so check for emptiness, not absence.
    """
    return {"resources": {"requests": _quantities(cpu, memory)}}


def resources_limits(cpu: Optional[str] = None, memory: Optional[str] = None) -> dict[str, Any]:
    """Container mixin setting resource limits, same rules as ``resources_requests``."""
    return {"resources": {"limits": _quantities(cpu, memory)}}


def with_container_resources(
    resource: dict[str, Any],
    requests: Optional[dict[str, Any]] = None,
    limits: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Apply requests/limits to every container of a workload's pod template.

    Args:
        resource: Deployment-like resource
        requests: ``{"cpu": ..., "memory": ...}``, either key optional
        limits: Same shape as ``requests``

    Returns:
        Updated resource
    """
    mixins = []
    if requests is not None:
        mixins.append(resources_requests(requests.get("cpu"), requests.get("memory")))
    if limits is not None:
        mixins.append(resources_limits(limits.get("cpu"), limits.get("memory")))

    containers = get_path(resource, "spec.template.spec.containers")
    if not isinstance(containers, list) or not mixins:
        return deep_merge(resource)
    logger.debug("Setting resources on %d container(s) of %s", len(containers), get_path(resource, "metadata.name"))
    updated = [deep_merge(c, *mixins) for c in containers]
    return deep_merge(resource, {"spec": {"template": {"spec": {"containers": updated}}}})
