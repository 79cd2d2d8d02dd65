# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Command line interface for kubeassembler.

    kube-assembler render plan.yaml.j2 --set env=prod --output build/prod.yaml
    kube-assembler flags log.level=info
"""

from kubeassembler.cli.main import configure_parser, main, run

__all__ = [
    "configure_parser",
    "main",
    "run",
]
