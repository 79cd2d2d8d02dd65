# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Plan file loading.

Plans are YAML. Files ending in ``.j2`` are first rendered as Jinja2
templates with the variables given on the command line (``--set KEY=VALUE``),
so one plan can describe several environments.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import yaml
from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError

from kubeassembler.exceptions import PlanError

logger = logging.getLogger(__name__)

_JINJA_ENV = Environment(undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)


def _cast_literal(s: str) -> Any:
    """
    Lightweight casting via YAML loader to get bool/int/float.

    Args:
        s: String value to cast

    Returns:
        Casted value (bool, int, float, or original string)
    """
    try:
        return yaml.safe_load(s)
    except yaml.YAMLError:
        return s


def _assign_path(target: dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = [p for p in dotted_key.split(".") if p]
    if not parts:
        return
    node = target
    for segment in parts[:-1]:
        next_node = node.setdefault(segment, {})
        if not isinstance(next_node, dict):
            next_node = {}
            node[segment] = next_node
        node = next_node
    node[parts[-1]] = value


def parse_set_args(items: list[str]) -> dict[str, Any]:
    """
    Parse ``KEY=VALUE`` strings into a nested mapping.

    Dotted keys nest (``image.tag=1.2`` -> ``{"image": {"tag": 1.2}}``);
    values are cast through the YAML loader. Items without ``=`` are skipped.
    """
    values: dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            logger.warning("Ignoring override without '=': %s", item)
            continue
        key, val = item.split("=", 1)
        _assign_path(values, key.strip(), _cast_literal(val))
    return values


def render_plan_text(text: str, variables: Optional[dict[str, Any]] = None, source: str = "<plan>") -> str:
    try:
        return _JINJA_ENV.from_string(text).render(**(variables or {}))
    except (TemplateSyntaxError, UndefinedError) as exc:
        raise PlanError(f"{source}: {exc}") from exc


def parse_plan(text: str, source: str = "<plan>") -> dict[str, Any]:
    try:
        plan = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise PlanError(f"{source}: invalid YAML: {exc}") from exc
    if plan is None:
        plan = {}
    if not isinstance(plan, dict):
        raise PlanError(f"{source}: plan must be a YAML mapping with 'resources' and/or 'derive'")
    unknown = sorted(set(plan) - {"resources", "derive"})
    if unknown:
        raise PlanError(f"{source}: unknown top-level keys: {', '.join(unknown)}")
    return plan


def load_plan(path: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """
    Read a plan file, rendering it with Jinja2 when its name ends in ``.j2``.

    Args:
        path: Plan file path
        variables: Template variables

    Returns:
        Parsed plan mapping

    Raises:
        FileNotFoundError: If the file does not exist.
        PlanError: If rendering or parsing fails.
    """
    if not os.path.isabs(path):
        path = os.path.abspath(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Plan file not found: {path}")
    with open(path, encoding="utf-8") as f:
        text = f.read()

    if path.endswith(".j2"):
        text = render_plan_text(text, variables, source=path)
    elif variables:
        logger.warning("Plan %s is not a .j2 template, ignoring %d variable(s)", path, len(variables))
    return parse_plan(text, source=path)
