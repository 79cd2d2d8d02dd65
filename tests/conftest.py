# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Global pytest configuration and fixtures.

Builders here return fresh objects on every call so tests can compare the
input of an operation with its output.
"""

from __future__ import annotations

import argparse
from typing import Any

import pytest

from kubeassembler.cli.main import configure_parser as configure_cli_parser
from kubeassembler.manifests import Assembler, KubeSchema


@pytest.fixture
def schema() -> KubeSchema:
    return KubeSchema()


@pytest.fixture
def assembler(schema) -> Assembler:
    return Assembler(schema=schema)


@pytest.fixture
def deployment_factory(schema):
    """Factory for Deployments; ``ports`` maps container name to a list of (port name, number[, protocol])."""

    def _factory(
        name: str = "api",
        ports: dict[str, list[tuple]] | None = None,
        labels: dict[str, str] | None = None,
        kind: str = "Deployment",
    ) -> dict[str, Any]:
        if ports is None:
            ports = {"web": [("http", 8080)]}
        containers = [
            schema.container(c_name, image=f"example/{c_name}:1.0", ports=[schema.container_port(*p) for p in c_ports])
            for c_name, c_ports in ports.items()
        ]
        if kind == "StatefulSet":
            return schema.stateful_set(name, containers, labels=labels)
        return schema.deployment(name, containers, labels=labels)

    return _factory


@pytest.fixture
def config_map(schema) -> dict[str, Any]:
    return schema.config_map("settings", {"app.yaml": "log_level: info\n"}, namespace="default")


@pytest.fixture
def cli_parser() -> argparse.ArgumentParser:
    """Pre-configured CLI parser for testing."""
    parser = argparse.ArgumentParser()
    configure_cli_parser(parser)
    return parser
