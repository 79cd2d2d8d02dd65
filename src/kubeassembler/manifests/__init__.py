# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Manifest assembly helpers.

This module exposes a single import surface so callers do not need to know
which file a helper lives in.
"""

from .assembler import Assembler
from .flags import map_to_flags
from .formatter import config_hash, iter_resources, to_yaml, to_yaml_stream
from .merge import Append, append, deep_merge, get_path
from .rbac import RBACBundle, namespaced_rbac, rbac
from .resources import resources_limits, resources_requests, with_container_resources
from .scheduling import anti_affinity, anti_affinity_stateful_set, pod_priority
from .schema import KubeSchema
from .services import service_for
from .volumes import (
    config_map_volume_mount,
    config_volume_mount,
    empty_volume_mount,
    host_volume_mount,
    pvc_volume_mount,
    secret_volume_mount,
)

__all__ = [
    "Append",
    "Assembler",
    "KubeSchema",
    "RBACBundle",
    "anti_affinity",
    "anti_affinity_stateful_set",
    "append",
    "config_hash",
    "config_map_volume_mount",
    "config_volume_mount",
    "deep_merge",
    "empty_volume_mount",
    "get_path",
    "host_volume_mount",
    "iter_resources",
    "map_to_flags",
    "namespaced_rbac",
    "pod_priority",
    "pvc_volume_mount",
    "rbac",
    "resources_limits",
    "resources_requests",
    "secret_volume_mount",
    "service_for",
    "to_yaml",
    "to_yaml_stream",
    "with_container_resources",
]
