# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Structural merge for resource fragments.

Conflict policy applied by ``deep_merge``:

- mappings on both sides are merged key by key, recursively;
- a list wrapped in ``Append`` is appended to the list already present;
- everything else (scalars, plain lists) is replaced by the right operand.

Operands are never modified and the result never contains ``Append``
markers, so it can go straight to the YAML formatter.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable

_MISSING = object()


class Append(list):
    """List marker: merge by appending to the existing list instead of replacing it."""

    def __repr__(self) -> str:
        return f"Append({list.__repr__(self)})"


def append(items: Iterable[Any]) -> Append:
    return Append(items)


def deep_merge(base: Any, *overlays: Any) -> Any:
    """
    Merge ``overlays`` into ``base`` from left to right.

    Args:
        base: Starting object (usually a resource dict)
        overlays: Fragments to merge on top, the rightmost wins on conflicts

    Returns:
        A new object; neither ``base`` nor any overlay is modified
    """
    result = _normalize(base)
    for overlay in overlays:
        if overlay is None:
            continue
        result = _merge(result, overlay)
    return result


def _merge(left: Any, right: Any) -> Any:
    if isinstance(right, Append):
        head = list(left) if isinstance(left, list) else []
        return head + [_normalize(item) for item in right]
    if isinstance(left, dict) and isinstance(right, dict):
        out = dict(left)
        for key, value in right.items():
            out[key] = _merge(out[key], value) if key in out else _normalize(value)
        return out
    return _normalize(right)


def _normalize(value: Any) -> Any:
    """Deep copy ``value``, turning ``Append`` markers into plain lists."""
    if isinstance(value, dict):
        return {k: _normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    return copy.deepcopy(value)


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    """Read a dotted path from nested mappings, returning ``default`` when any segment is absent."""
    cur = obj
    for part in path.split("."):
        if not isinstance(cur, dict):
            return default
        cur = cur.get(part, _MISSING)
        if cur is _MISSING:
            return default
    return cur
