# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Plan execution.

A plan lists base resources, the augmenter steps applied to each one, and
composite objects derived from them:

    resources:
      - id: api
        manifest: {...}
        steps:
          - secret_volume_mount: {name: tls, path: /etc/tls}
          - anti_affinity: {}
    derive:
      - service_for: {deployment: api}
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

from kubeassembler.exceptions import PlanError
from kubeassembler.manifests import Assembler, iter_resources

logger = logging.getLogger(__name__)

Resource = dict[str, Any]
StepFn = Callable[[Assembler, Resource, dict[str, Any], dict[str, Resource]], Resource]
DeriveFn = Callable[[Assembler, dict[str, Any], dict[str, Resource]], Any]


def _lookup(resolved: dict[str, Resource], ref: Any, what: str) -> Resource:
    if isinstance(ref, dict):
        return ref
    if ref not in resolved:
        known = ", ".join(resolved) or "none"
        raise PlanError(f"{what} refers to unknown resource id '{ref}'. Known ids: {known}.")
    return resolved[ref]


def _invoke(fn: Callable[..., Any], name: str, /, *args: Any, **kwargs: Any) -> Any:
    """Call ``fn`` after checking the plan supplied arguments it accepts."""
    try:
        inspect.signature(fn).bind(*args, **kwargs)
    except TypeError as exc:
        raise PlanError(f"bad arguments for '{name}': {exc}") from exc
    return fn(*args, **kwargs)


def _config_map_step(asm: Assembler, res: Resource, args: dict[str, Any], resolved: dict[str, Resource]) -> Resource:
    args = dict(args)
    config_map = _lookup(resolved, args.pop("config_map", None), "config_map_volume_mount.config_map")
    return _invoke(asm.config_map_volume_mount, "config_map_volume_mount", res, config_map, **args)


def _merge_step(asm: Assembler, res: Resource, args: dict[str, Any], resolved: dict[str, Resource]) -> Resource:
    return asm.merge(res, args)


def _bind(method: str) -> StepFn:
    def step(asm: Assembler, res: Resource, args: dict[str, Any], resolved: dict[str, Resource]) -> Resource:
        return _invoke(getattr(asm, method), method, res, **args)

    step.__name__ = method
    return step


STEPS: dict[str, StepFn] = {
    "config_map_volume_mount": _config_map_step,
    "config_volume_mount": _bind("config_volume_mount"),
    "host_volume_mount": _bind("host_volume_mount"),
    "pvc_volume_mount": _bind("pvc_volume_mount"),
    "secret_volume_mount": _bind("secret_volume_mount"),
    "empty_volume_mount": _bind("empty_volume_mount"),
    "container_resources": _bind("with_container_resources"),
    "anti_affinity": _bind("anti_affinity"),
    "anti_affinity_stateful_set": _bind("anti_affinity_stateful_set"),
    "pod_priority": _bind("pod_priority"),
    "merge": _merge_step,
}


def _service_for(asm: Assembler, args: dict[str, Any], resolved: dict[str, Resource]) -> Resource:
    args = dict(args)
    deployment = _lookup(resolved, args.pop("deployment", None), "service_for.deployment")
    return _invoke(asm.service_for, "service_for", deployment, **args)


def _rbac(asm: Assembler, args: dict[str, Any], resolved: dict[str, Resource]) -> Any:
    return _invoke(asm.rbac, "rbac", **args)


def _namespaced_rbac(asm: Assembler, args: dict[str, Any], resolved: dict[str, Resource]) -> Any:
    return _invoke(asm.namespaced_rbac, "namespaced_rbac", **args)


DERIVERS: dict[str, DeriveFn] = {
    "service_for": _service_for,
    "rbac": _rbac,
    "namespaced_rbac": _namespaced_rbac,
}


def _split_entry(entry: Any, where: str) -> tuple[str, dict[str, Any]]:
    if not isinstance(entry, dict) or len(entry) != 1:
        raise PlanError(f"{where}: each entry must be a single-key mapping like '{{anti_affinity: {{}}}}'")
    name, args = next(iter(entry.items()))
    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise PlanError(f"{where}: arguments of '{name}' must be a mapping")
    return name, args


def _call(fn: Callable[..., Any], where: str, *call_args: Any) -> Any:
    try:
        return fn(*call_args)
    except PlanError as exc:
        raise PlanError(f"{where}: {exc}") from exc


def run_plan(plan: dict[str, Any], assembler: Optional[Assembler] = None) -> list[Resource]:
    """
    Execute a parsed plan.

    Args:
        plan: Mapping with optional ``resources`` and ``derive`` lists
        assembler: Assembler to use, defaults to ``Assembler()``

    Returns:
        Resources in plan order followed by derived objects, flattened

    Raises:
        PlanError: On unknown steps, unknown ids or malformed entries.
    """
    asm = assembler or Assembler()
    resolved: dict[str, Resource] = {}
    output: list[Resource] = []

    for idx, entry in enumerate(plan.get("resources") or []):
        where = f"resources[{idx}]"
        if not isinstance(entry, dict) or not isinstance(entry.get("manifest"), dict):
            raise PlanError(f"{where}: expected a mapping with a 'manifest' mapping")
        res_id = entry.get("id") or (entry["manifest"].get("metadata") or {}).get("name") or f"resource-{idx}"
        if res_id in resolved:
            raise PlanError(f"{where}: duplicate resource id '{res_id}'")
        resource = asm.merge(entry["manifest"])
        for step_idx, step in enumerate(entry.get("steps") or []):
            step_where = f"{where}.steps[{step_idx}]"
            name, args = _split_entry(step, step_where)
            fn = STEPS.get(name)
            if fn is None:
                raise PlanError(f"{step_where}: unknown step '{name}'. Supported: {', '.join(sorted(STEPS))}.")
            logger.info("Applying %s to %s", name, res_id)
            resource = _call(fn, step_where, asm, resource, args, resolved)
        resolved[res_id] = resource
        output.append(resource)

    for idx, entry in enumerate(plan.get("derive") or []):
        where = f"derive[{idx}]"
        name, args = _split_entry(entry, where)
        fn = DERIVERS.get(name)
        if fn is None:
            raise PlanError(f"{where}: unknown builder '{name}'. Supported: {', '.join(sorted(DERIVERS))}.")
        logger.info("Deriving %s", name)
        output.extend(iter_resources(_call(fn, where, asm, args, resolved)))

    return output
