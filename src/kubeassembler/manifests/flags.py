# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, Mapping


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def map_to_flags(mapping: Mapping[str, Any], prefix: str = "-") -> list[str]:
    """
    Convert a mapping into command line flags.

    ``{"log.level": "info", "port": 80}`` becomes ``["-log.level=info", "-port=80"]``.
    Keys keep the mapping's order; keys whose value is None are skipped.
    """
    return [f"{prefix}{key}={_format_value(value)}" for key, value in mapping.items() if value is not None]
