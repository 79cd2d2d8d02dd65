# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the structural merge helpers."""

import pytest

from kubeassembler.manifests.merge import Append, append, deep_merge, get_path

pytestmark = pytest.mark.unit


class TestDeepMerge:
    def test_scalars_right_operand_wins(self):
        assert deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_maps_merge_recursively(self):
        base = {"metadata": {"name": "api", "labels": {"app": "api"}}}
        result = deep_merge(base, {"metadata": {"labels": {"tier": "web"}}})
        assert result == {"metadata": {"name": "api", "labels": {"app": "api", "tier": "web"}}}

    def test_plain_list_replaces(self):
        assert deep_merge({"args": ["-a"]}, {"args": ["-b"]}) == {"args": ["-b"]}

    def test_append_marker_appends(self):
        assert deep_merge({"args": ["-a"]}, {"args": append(["-b"])}) == {"args": ["-a", "-b"]}

    def test_append_onto_missing_key(self):
        assert deep_merge({}, {"volumes": append([{"name": "v"}])}) == {"volumes": [{"name": "v"}]}

    def test_multiple_overlays_apply_left_to_right(self):
        result = deep_merge({"x": 1}, {"x": 2}, None, {"y": append([1])}, {"y": append([2])})
        assert result == {"x": 2, "y": [1, 2]}

    def test_operands_are_not_mutated(self):
        base = {"spec": {"items": [1]}}
        overlay = {"spec": {"items": append([2]), "extra": {"k": "v"}}}
        result = deep_merge(base, overlay)
        result["spec"]["extra"]["k"] = "changed"
        result["spec"]["items"].append(3)
        assert base == {"spec": {"items": [1]}}
        assert overlay["spec"]["extra"] == {"k": "v"}
        assert list(overlay["spec"]["items"]) == [2]

    def test_append_markers_do_not_leak(self):
        result = deep_merge({}, {"a": {"b": append([append([1])])}}, {"c": Append([2])})
        assert type(result["a"]["b"]) is list
        assert type(result["a"]["b"][0]) is list
        assert type(result["c"]) is list


class TestPaths:
    def test_get_path_present(self):
        assert get_path({"a": {"b": {"c": 3}}}, "a.b.c") == 3

    @pytest.mark.parametrize("obj", [{}, {"a": None}, {"a": {"b": "scalar"}}, {"a": []}])
    def test_get_path_missing_returns_default(self, obj):
        assert get_path(obj, "a.b.c", default="d") == "d"

    def test_get_path_keeps_falsy_values(self):
        assert get_path({"a": {"b": 0}}, "a.b", default=5) == 0
