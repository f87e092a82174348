import pytest

from hppoperator.helper import (
    KUBEVIRT_PRIORITY_CLASS_NAME,
    OPERATOR_SELECTOR_LABEL,
    OperatorArgs,
    create_crd_def,
    create_operator_deployment,
)

DEPLOYMENT_YAML = """\
apiVersion: apps/v1
kind: Deployment
metadata:
  name: hostpath-provisioner-operator
spec:
  selector:
    matchLabels:
      name: hostpath-provisioner-operator
  template:
    metadata:
      labels:
        name: hostpath-provisioner-operator
    spec:
      containers:
      - name: hostpath-provisioner-operator
        image: old-image
        env:
        - name: VERBOSITY
          value: "0"
        - name: OPERATOR_IMAGE
          value: old
        - name: PROVISIONER_IMAGE
          value: old
        - name: CSI_SNAPSHOT_IMAGE
          value: old
        - name: UNRELATED
          value: keep
"""


def _args():
    return OperatorArgs(
        namespace="hpp-ns",
        image_pull_policy="Always",
        verbosity="3",
        operator_image="op-image",
        provisioner_image="prov-image",
        csi_snapshotter_image="snap-image",
    )


def _env(deployment):
    return {
        e["name"]: e.get("value")
        for e in deployment["spec"]["template"]["spec"]["containers"][0]["env"]
    }


def test_deployment_metadata_and_labels():
    deployment = create_operator_deployment(_args(), DEPLOYMENT_YAML)
    assert deployment["metadata"]["namespace"] == "hpp-ns"
    assert deployment["spec"]["selector"]["matchLabels"][OPERATOR_SELECTOR_LABEL] == ""
    assert deployment["spec"]["template"]["metadata"]["labels"][OPERATOR_SELECTOR_LABEL] == ""
    assert deployment["spec"]["template"]["spec"]["priorityClassName"] == KUBEVIRT_PRIORITY_CLASS_NAME


def test_container_image_and_pull_policy():
    container = create_operator_deployment(_args(), DEPLOYMENT_YAML)["spec"]["template"]["spec"]["containers"][0]
    assert container["image"] == "op-image"
    assert container["imagePullPolicy"] == "Always"


def test_env_variables_are_set():
    env = _env(create_operator_deployment(_args(), DEPLOYMENT_YAML))
    assert env["VERBOSITY"] == "3"
    assert env["OPERATOR_IMAGE"] == "op-image"
    assert env["PROVISIONER_IMAGE"] == "prov-image"
    assert env["CSI_SNAPSHOT_IMAGE"] == "snap-image"
    assert env["UNRELATED"] == "keep"
    assert env["PRIORITY_CLASS"] == KUBEVIRT_PRIORITY_CLASS_NAME


def test_env_names_not_in_manifest_are_not_added():
    env = _env(create_operator_deployment(_args(), DEPLOYMENT_YAML))
    assert "CSI_PROVISIONER_IMAGE" not in env
    assert "LIVENESS_PROBE_IMAGE" not in env


def test_empty_settings_drop_fields():
    deployment = create_operator_deployment(OperatorArgs(), DEPLOYMENT_YAML)
    container = deployment["spec"]["template"]["spec"]["containers"][0]
    assert "namespace" not in deployment["metadata"]
    assert "imagePullPolicy" not in container
    assert "image" not in container
    assert _env(deployment)["VERBOSITY"] is None


def test_deployment_without_containers_raises():
    with pytest.raises(ValueError):
        create_operator_deployment(_args(), "kind: Deployment\nspec: {}\n")


def test_invalid_yaml_raises():
    with pytest.raises(ValueError):
        create_operator_deployment(_args(), "a: [unclosed\n")


def test_crd_def_reads_first_document():
    text = "kind: CustomResourceDefinition\nmetadata:\n  name: first\n---\nkind: Other\n"
    crd = create_crd_def(text)
    assert crd == {"kind": "CustomResourceDefinition", "metadata": {"name": "first"}}


def test_crd_def_of_empty_text_is_empty():
    assert create_crd_def("") == {}


def test_crd_def_of_non_mapping_raises():
    with pytest.raises(ValueError):
        create_crd_def("- a\n- b\n")