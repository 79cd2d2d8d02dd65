# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for plan loading and execution."""

import pytest

from kubeassembler.exceptions import MissingLabelError, PlanError
from kubeassembler.manifests import Assembler, config_hash
from kubeassembler.plan import load_plan, parse_plan, parse_set_args, run_plan

pytestmark = pytest.mark.unit

PLAN = """
resources:
  - id: settings
    manifest:
      apiVersion: v1
      kind: ConfigMap
      metadata: {name: settings}
      data: {app.yaml: "log_level: info"}
  - id: api
    manifest:
      apiVersion: apps/v1
      kind: Deployment
      metadata: {name: api}
      spec:
        selector: {matchLabels: {name: api}}
        template:
          metadata: {labels: {name: api, version: v1}}
          spec:
            containers:
              - name: web
                image: example/api:1.0
                ports: [{name: http, containerPort: 8080}]
    steps:
      - config_map_volume_mount: {config_map: settings, path: /etc/api}
      - secret_volume_mount: {name: tls, path: /etc/tls}
      - container_resources: {requests: {cpu: 100m}}
      - anti_affinity: {}
      - pod_priority: {priority_class: high}
derive:
  - service_for: {deployment: api, ignored_labels: [version]}
  - namespaced_rbac:
      name: api
      namespace: default
      rules: [{apiGroups: [""], resources: [configmaps], verbs: [get]}]
"""

DATED_PLAN = """
resources:
  - id: settings
    manifest: {apiVersion: v1, kind: ConfigMap, metadata: {name: settings}, data: {since: 2024-01-01}}
  - id: api
    manifest:
      kind: Deployment
      metadata: {name: api}
      spec: {template: {spec: {containers: [{name: web}]}}}
    steps:
      - config_map_volume_mount: {config_map: settings, path: /etc/settings}
"""


class TestRunPlan:
    def test_full_plan(self):
        plan = parse_plan(PLAN)

        resources = run_plan(plan)

        assert [r["kind"] for r in resources] == [
            "ConfigMap",
            "Deployment",
            "Service",
            "ServiceAccount",
            "Role",
            "RoleBinding",
        ]
        config_map, deployment, service = resources[:3]
        pod = deployment["spec"]["template"]
        assert pod["metadata"]["annotations"] == {"settings-hash": config_hash(config_map)}
        assert [v["name"] for v in pod["spec"]["volumes"]] == ["settings", "tls"]
        assert pod["spec"]["containers"][0]["resources"] == {"requests": {"cpu": "100m"}}
        assert pod["spec"]["priorityClassName"] == "high"
        assert service["spec"]["selector"] == {"name": "api"}
        assert service["spec"]["ports"] == [{"name": "web-http", "port": 8080, "targetPort": 8080}]

    def test_service_sees_steps_applied_before_it(self):
        plan = parse_plan(PLAN)
        plan["resources"][1]["steps"].append({"merge": {"metadata": {"namespace": "prod"}}})

        resources = run_plan(plan)

        assert resources[2]["metadata"]["namespace"] == "prod"

    def test_id_defaults_to_metadata_name(self):
        plan = {
            "resources": [{"manifest": {"kind": "Deployment", "metadata": {"name": "worker"}, "spec": {}}}],
            "derive": [{"service_for": {"deployment": "worker"}}],
        }
        resources = run_plan(plan)
        assert resources[1]["metadata"]["name"] == "worker"

    def test_empty_plan(self):
        assert run_plan(parse_plan("")) == []

    @pytest.mark.parametrize(
        "plan,message",
        [
            ({"resources": [{"manifest": {"kind": "X"}, "steps": [{"explode": {}}]}]}, "unknown step"),
            ({"derive": [{"ingress_for": {}}]}, "unknown builder"),
            ({"derive": [{"service_for": {"deployment": "missing"}}]}, "unknown resource id 'missing'"),
            ({"resources": [{"manifest": {"kind": "X"}, "steps": [{"a": {}, "b": {}}]}]}, "single-key"),
            ({"resources": [{"manifest": {"kind": "X"}, "steps": [{"pod_priority": "high"}]}]}, "must be a mapping"),
            ({"resources": [{"manifest": {"kind": "X"}, "steps": [{"pod_priority": {"bogus": 1}}]}]}, "bad arguments"),
            ({"resources": [{"id": "a", "manifest": {}}, {"id": "a", "manifest": {}}]}, "duplicate"),
            ({"resources": ["not a mapping"]}, "manifest"),
        ],
    )
    def test_malformed_plans(self, plan, message):
        with pytest.raises(PlanError, match=message):
            run_plan(plan)

    def test_manifest_errors_propagate(self):
        plan = {"resources": [{"manifest": {"kind": "Deployment", "spec": {}}, "steps": [{"anti_affinity": {}}]}]}
        with pytest.raises(MissingLabelError) as exc_info:
            run_plan(plan)
        assert "labels.name" in str(exc_info.value)

    def test_bad_arguments_name_the_step(self):
        plan = {"resources": [{"manifest": {"kind": "X"}, "steps": [{"pod_priority": {"bogus": 1}}]}]}
        with pytest.raises(PlanError, match=r"resources\[0\]\.steps\[0\]: bad arguments for 'pod_priority'"):
            run_plan(plan)

    def test_type_errors_inside_steps_are_not_relabelled(self):
        class BrokenAssembler(Assembler):
            def pod_priority(self, resource, priority_class):
                raise TypeError("unsupported operand")

        plan = {"resources": [{"manifest": {"kind": "X"}, "steps": [{"pod_priority": {"priority_class": "high"}}]}]}
        with pytest.raises(TypeError, match="unsupported operand"):
            run_plan(plan, BrokenAssembler())

    def test_unquoted_dates_in_config_maps(self):
        plan = parse_plan(DATED_PLAN)
        _, deployment = run_plan(plan)
        annotations = deployment["spec"]["template"]["metadata"]["annotations"]
        assert annotations == {"settings-hash": config_hash(plan["resources"][0]["manifest"])}


class TestParsePlan:
    def test_rejects_unknown_top_level_keys(self):
        with pytest.raises(PlanError, match="outputs"):
            parse_plan("outputs: []\n")

    def test_rejects_non_mapping(self):
        with pytest.raises(PlanError, match="mapping"):
            parse_plan("- a\n")

    def test_rejects_invalid_yaml(self):
        with pytest.raises(PlanError, match="invalid YAML"):
            parse_plan("resources: [\n")


class TestLoadPlan:
    def test_plain_yaml(self, tmp_path):
        path = tmp_path / "plan.yaml"
        path.write_text(PLAN)
        assert len(load_plan(str(path))["resources"]) == 2

    def test_jinja_template(self, tmp_path):
        path = tmp_path / "plan.yaml.j2"
        path.write_text(
            "resources:\n"
            "{% for name in names %}\n"
            "  - manifest: {kind: ConfigMap, metadata: {name: {{ name }}-{{ env }}}}\n"
            "{% endfor %}\n"
        )

        plan = load_plan(str(path), {"names": ["a", "b"], "env": "prod"})

        assert [r["manifest"]["metadata"]["name"] for r in plan["resources"]] == ["a-prod", "b-prod"]

    def test_undefined_variable_is_an_error(self, tmp_path):
        path = tmp_path / "plan.yaml.j2"
        path.write_text("resources: [{manifest: {metadata: {name: '{{ missing }}'}}}]\n")
        with pytest.raises(PlanError, match="missing"):
            load_plan(str(path), {})

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_plan(str(tmp_path / "nope.yaml"))


class TestParseSetArgs:
    def test_nested_and_cast(self):
        values = parse_set_args(["env=prod", "image.tag=1.4.2", "replicas=3", "debug=true", "image.repo=example/api"])
        assert values == {
            "env": "prod",
            "image": {"tag": "1.4.2", "repo": "example/api"},
            "replicas": 3,
            "debug": True,
        }

    def test_skips_items_without_equals(self):
        assert parse_set_args(["novalue", "a=1"]) == {"a": 1}

    def test_value_may_contain_equals(self):
        assert parse_set_args(["flag=a=b"]) == {"flag": "a=b"}
