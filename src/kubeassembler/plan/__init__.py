# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from .loader import load_plan, parse_plan, parse_set_args, render_plan_text
from .runner import DERIVERS, STEPS, run_plan

__all__ = [
    "DERIVERS",
    "STEPS",
    "load_plan",
    "parse_plan",
    "parse_set_args",
    "render_plan_text",
    "run_plan",
]
