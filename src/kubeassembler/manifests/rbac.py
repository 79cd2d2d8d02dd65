# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""ServiceAccount + role + binding triples sharing one name."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from kubeassembler.manifests.schema import KubeSchema

logger = logging.getLogger(__name__)

SUBJECT_KIND = "ServiceAccount"


@dataclass
class RBACBundle:
    """
    The three objects granting ``rules`` to a ServiceAccount.

    ``role`` is a ClusterRole and ``binding`` a ClusterRoleBinding for the
    cluster-scoped variant, Role and RoleBinding for the namespaced one.
    """

    service_account: dict[str, Any]
    role: dict[str, Any]
    binding: dict[str, Any]

    def resources(self) -> list[dict[str, Any]]:
        return [self.service_account, self.role, self.binding]


def rbac(
    name: str, rules: Iterable[dict[str, Any]], namespace: str, schema: Optional[KubeSchema] = None
) -> RBACBundle:
    """Cluster-wide permissions for the ServiceAccount ``name`` living in ``namespace``."""
    schema = schema or KubeSchema()
    rules = copy.deepcopy(list(rules))
    bundle = RBACBundle(
        service_account=schema.service_account(name),
        role=schema.cluster_role(name, rules),
        binding=schema.cluster_role_binding(
            name,
            role_ref=schema.role_ref("ClusterRole", name),
            subjects=[schema.subject(SUBJECT_KIND, name, namespace)],
        ),
    )
    logger.debug("Built cluster RBAC for %s/%s with %d rule(s)", namespace, name, len(rules))
    return bundle


def namespaced_rbac(
    name: str, rules: Iterable[dict[str, Any]], namespace: str, schema: Optional[KubeSchema] = None
) -> RBACBundle:
    """Same as ``rbac`` but every object, and the granted permissions, are confined to ``namespace``."""
    schema = schema or KubeSchema()
    rules = copy.deepcopy(list(rules))
    bundle = RBACBundle(
        service_account=schema.service_account(name, namespace=namespace),
        role=schema.role(name, rules, namespace=namespace),
        binding=schema.role_binding(
            name,
            role_ref=schema.role_ref("Role", name),
            subjects=[schema.subject(SUBJECT_KIND, name, namespace)],
            namespace=namespace,
        ),
    )
    logger.debug("Built namespaced RBAC for %s/%s with %d rule(s)", namespace, name, len(rules))
    return bundle
