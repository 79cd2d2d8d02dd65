# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for YAML output."""

import datetime

import pytest
import yaml

from kubeassembler.manifests import append, config_hash, deep_merge, to_yaml, to_yaml_stream

pytestmark = pytest.mark.unit


class TestToYaml:
    def test_round_trips_through_yaml(self, deployment_factory):
        deployment = deployment_factory()
        assert yaml.safe_load(to_yaml(deployment)) == deployment

    def test_keeps_insertion_order(self, assembler, deployment_factory):
        text = to_yaml(assembler.service_for(deployment_factory()))
        top_level = [line.split(":")[0] for line in text.splitlines() if line and not line.startswith(" ")]
        assert top_level == ["apiVersion", "kind", "metadata", "spec"]

    def test_block_style_without_wrapping(self):
        long_value = "x" * 300
        text = to_yaml({"data": {"key": long_value}, "items": [1, 2]})
        assert f"key: {long_value}" in text
        assert "- 1" in text

    def test_merged_output_serializes(self):
        merged = deep_merge({"volumes": []}, {"volumes": append([{"name": "v"}])})
        assert yaml.safe_load(to_yaml(merged)) == {"volumes": [{"name": "v"}]}

    def test_rbac_bundle_serializes_as_stream(self, assembler):
        text = to_yaml(assembler.rbac("api", [], "default"))

        docs = list(yaml.safe_load_all(text))
        assert [d["kind"] for d in docs] == ["ServiceAccount", "ClusterRole", "ClusterRoleBinding"]
        assert text == to_yaml_stream(assembler.rbac("api", [], "default"))


class TestToYamlStream:
    def test_flattens_bundles_and_lists(self, assembler, deployment_factory):
        deployment = deployment_factory()
        bundle = assembler.namespaced_rbac("api", [], "default")

        text = to_yaml_stream([deployment, [assembler.service_for(deployment)], bundle])

        docs = list(yaml.safe_load_all(text))
        assert [d["kind"] for d in docs] == ["Deployment", "Service", "ServiceAccount", "Role", "RoleBinding"]
        assert text.startswith("---")

    def test_empty_stream(self):
        assert to_yaml_stream([]) == ""


class TestConfigHash:
    def test_md5_hex_digest(self):
        digest = config_hash({"b": 1, "a": [1, 2]})
        assert len(digest) == 32
        assert digest == config_hash({"a": [1, 2], "b": 1})

    def test_list_order_matters(self):
        assert config_hash({"a": [1, 2]}) != config_hash({"a": [2, 1]})

    def test_dates_from_yaml_hash(self):
        data = yaml.safe_load("since: 2024-01-01\n")
        assert isinstance(data["since"], datetime.date)
        assert config_hash(data) == config_hash({"since": "2024-01-01"})
