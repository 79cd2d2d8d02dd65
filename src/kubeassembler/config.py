# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Settings shared by the assembler, the plan runner and the CLI."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from functools import cache
from typing import Any, Optional

import yaml

from kubeassembler.exceptions import ManifestError

logger = logging.getLogger(__name__)

DEFAULTS_DIR = os.path.join(os.path.dirname(__file__), "manifests", "defaults")
DEFAULT_API_VERSIONS_PATH = os.path.join(DEFAULTS_DIR, "api_versions.yaml")


def _load_yaml_payload(path: str) -> Any:
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


@cache
def load_api_versions(path: str = DEFAULT_API_VERSIONS_PATH) -> dict[str, str]:
    payload = _load_yaml_payload(path)
    if not isinstance(payload, dict):
        raise TypeError(f"API version table must be a YAML mapping: {path}")
    versions = payload.get("api_versions", payload)
    if not isinstance(versions, dict):
        raise TypeError(f"API version table missing 'api_versions' mapping: {path}")
    return {str(kind): str(version) for kind, version in versions.items()}


@dataclass
class AssemblerSettings:
    """
    Defaults applied by the assembler when the caller does not pass a value.
    """

    service_name_format: str = "%(container)s-%(port)s"
    flag_prefix: str = "-"
    secret_default_mode: int = 0o400  # 256
    topology_key: str = "kubernetes.io/hostname"
    rbac_api_group: str = "rbac.authorization.k8s.io"
    api_versions: dict[str, str] = field(default_factory=lambda: dict(load_api_versions()))

    def api_version(self, kind: str) -> str:
        try:
            return self.api_versions[kind]
        except KeyError:
            raise ManifestError(f"No apiVersion configured for kind '{kind}'") from None


def load_settings(path: Optional[str] = None, overrides: Optional[dict[str, Any]] = None) -> AssemblerSettings:
    """
    Build settings from the packaged defaults, an optional YAML file and inline overrides.

    Args:
        path: Optional YAML file whose top-level keys are ``AssemblerSettings`` fields
        overrides: Optional mapping applied after the file

    Returns:
        AssemblerSettings instance

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ManifestError: If a key does not name a settings field.
    """
    values: dict[str, Any] = {}
    if path:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Settings file not found: {path}")
        payload = _load_yaml_payload(path)
        if not isinstance(payload, dict):
            raise ManifestError(f"Settings file must be a YAML mapping: {path}")
        values.update(payload)
    values.update(overrides or {})

    known = {f.name for f in dataclasses.fields(AssemblerSettings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ManifestError(f"Unknown settings: {', '.join(unknown)}. Supported: {', '.join(sorted(known))}.")

    api_versions = dict(load_api_versions())
    extra_versions = values.pop("api_versions", None) or {}
    if not isinstance(extra_versions, dict):
        raise ManifestError("'api_versions' must be a mapping of kind to apiVersion")
    api_versions.update({str(k): str(v) for k, v in extra_versions.items()})

    settings = AssemblerSettings(api_versions=api_versions, **values)
    logger.debug("Loaded settings from %s: %s", path or "defaults", settings)
    return settings
