# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""YAML output for assembled resources."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Iterable, Iterator

import yaml


def to_yaml(obj: Any) -> str:
    """
    Serialize one resource as a YAML document.

    Keys keep their insertion order and long strings are not folded, so the
    output reads like a hand-written manifest. Nothing is validated.
    Bundles (anything with ``resources()``) become a multi-document stream.
    """
    if hasattr(obj, "resources"):
        return to_yaml_stream(obj)
    return yaml.safe_dump(obj, sort_keys=False, default_flow_style=False, width=4096)


def iter_resources(objs: Any) -> Iterator[dict[str, Any]]:
    """Flatten lists and bundles (anything with ``resources()``) into individual resources."""
    if objs is None:
        return
    if isinstance(objs, dict):
        yield objs
        return
    if hasattr(objs, "resources"):
        yield from iter_resources(objs.resources())
        return
    for item in objs:
        yield from iter_resources(item)


def to_yaml_stream(objs: Iterable[Any]) -> str:
    """Serialize resources as a ``---`` separated multi-document stream."""
    docs = list(iter_resources(objs))
    if not docs:
        return ""
    return yaml.safe_dump_all(
        docs, sort_keys=False, default_flow_style=False, width=4096, explicit_start=True
    )


def config_hash(obj: Any) -> str:
    """
    MD5 hex digest of ``obj`` serialized as canonical JSON (sorted keys, compact).

    Scalars JSON has no type for (dates and timestamps from unquoted YAML) hash
    by their ``str()``.
    """
    payload = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.md5(payload.encode("utf-8")).hexdigest()
