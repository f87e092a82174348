"""Building the operator deployment and CRD from their YAML manifests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml

KUBEVIRT_PRIORITY_CLASS_NAME = "kubevirt-cluster-critical"
OPERATOR_SELECTOR_LABEL = "operator.hostpath-provisioner.kubevirt.io"


@dataclass
class OperatorArgs:
    """Settings for the operator deployment."""

    namespace: str = ""
    image_pull_policy: str = ""
    verbosity: str = ""
    operator_image: str = ""
    provisioner_image: str = ""
    csi_driver_image: str = ""
    csi_node_driver_registrar_image: str = ""
    csi_liveness_probe_image: str = ""
    csi_external_provisioner_image: str = ""
    csi_snapshotter_image: str = ""


def _load_first_document(text: str) -> dict[str, Any]:
    try:
        document = next(iter(yaml.safe_load_all(text)), None)
    except yaml.YAMLError as err:
        raise ValueError(f"invalid manifest: {err}") from err
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError("manifest is not a mapping")
    return document


def _set_or_drop(mapping: dict[str, Any], key: str, value: str) -> None:
    if value:
        mapping[key] = value
    else:
        mapping.pop(key, None)


def _submap(mapping: dict[str, Any], key: str) -> dict[str, Any]:
    if mapping.get(key) is None:
        mapping[key] = {}
    return mapping[key]


def _set_env_variable(env: list[dict[str, Any]], name: str, value: str) -> None:
    for entry in env:
        if entry.get("name") == name:
            _set_or_drop(entry, "value", value)


def create_operator_deployment(args: OperatorArgs, deployment_manifest: str) -> dict[str, Any]:
    """Return the operator Deployment from its YAML manifest, set up from ``args``.

    Raises ValueError if the manifest is invalid or has no container.
    """
    deployment = _load_first_document(deployment_manifest)
    spec = _submap(deployment, "spec")
    template = _submap(spec, "template")
    pod_spec = _submap(template, "spec")
    containers = pod_spec.get("containers") or []
    if not containers:
        raise ValueError("operator deployment has no containers")

    _set_or_drop(_submap(deployment, "metadata"), "namespace", args.namespace)
    _submap(_submap(spec, "selector"), "matchLabels")[OPERATOR_SELECTOR_LABEL] = ""
    _submap(_submap(template, "metadata"), "labels")[OPERATOR_SELECTOR_LABEL] = ""
    pod_spec["priorityClassName"] = KUBEVIRT_PRIORITY_CLASS_NAME

    container = containers[0]
    _set_or_drop(container, "image", args.operator_image)
    _set_or_drop(container, "imagePullPolicy", args.image_pull_policy)
    env = container.get("env") or []
    env.append({"name": "PRIORITY_CLASS", "value": KUBEVIRT_PRIORITY_CLASS_NAME})
    container["env"] = env

    for name, value in (
        ("VERBOSITY", args.verbosity),
        ("OPERATOR_IMAGE", args.operator_image),
        ("PROVISIONER_IMAGE", args.provisioner_image),
        ("CSI_PROVISIONER_IMAGE", args.csi_driver_image),
        ("NODE_DRIVER_REG_IMAGE", args.csi_node_driver_registrar_image),
        ("LIVENESS_PROBE_IMAGE", args.csi_liveness_probe_image),
        ("CSI_SIG_STORAGE_PROVISIONER_IMAGE", args.csi_external_provisioner_image),
        ("CSI_SNAPSHOT_IMAGE", args.csi_snapshotter_image),
    ):
        _set_env_variable(env, name, value)
    return deployment


def create_crd_def(crd_manifest: str) -> dict[str, Any]:
    """Return the CustomResourceDefinition held in the first document of ``crd_manifest``."""
    return _load_first_document(crd_manifest)