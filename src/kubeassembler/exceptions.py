# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised while assembling manifests."""

from __future__ import annotations


class ManifestError(ValueError):
    """Base exception for manifest assembly errors."""

    pass


class MissingFieldError(ManifestError):
    """Raised when a resource lacks a field an operation depends on."""

    def __init__(self, path: str, kind: str | None = None):
        self.path = path
        self.kind = kind
        where = f" on {kind}" if kind else ""
        super().__init__(f"Required field '{path}' is missing{where}")


class MissingLabelError(MissingFieldError):
    """Raised when the pod template lacks a label a scheduling rule selects on."""

    def __init__(self, label: str, kind: str | None = None):
        self.label = label
        super().__init__(f"spec.template.metadata.labels.{label}", kind)


class PlanError(ManifestError):
    """Raised when a plan file cannot be executed."""

    pass
