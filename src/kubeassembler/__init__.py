# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
kubeassembler: compose Kubernetes manifests from small pure helpers.

    from kubeassembler import Assembler

    asm = Assembler()
    deploy = asm.schema.deployment("api", [asm.schema.container("web", "nginx:1.27")])
    print(asm.to_yaml(asm.anti_affinity(deploy)))
"""

__version__ = "0.1.0"

from kubeassembler.config import AssemblerSettings, load_settings
from kubeassembler.exceptions import ManifestError, MissingFieldError, MissingLabelError, PlanError
from kubeassembler.manifests import Assembler, KubeSchema, RBACBundle

__all__ = [
    "Assembler",
    "AssemblerSettings",
    "KubeSchema",
    "ManifestError",
    "MissingFieldError",
    "MissingLabelError",
    "PlanError",
    "RBACBundle",
    "__version__",
    "load_settings",
]
