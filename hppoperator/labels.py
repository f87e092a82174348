"""Recommended labels for resources the operator manages."""

from __future__ import annotations

import os
from collections.abc import Mapping

MULTI_PURPOSE_HOSTPATH_PROVISIONER_NAME = "hostpath-provisioner"
PART_OF_LABEL_ENV_VAR_NAME = "INSTALLER_PART_OF_LABEL"
VERSION_LABEL_ENV_VAR_NAME = "INSTALLER_VERSION_LABEL"
APP_KUBERNETES_PART_OF_LABEL = "app.kubernetes.io/part-of"
APP_KUBERNETES_VERSION_LABEL = "app.kubernetes.io/version"
APP_KUBERNETES_MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
APP_KUBERNETES_COMPONENT_LABEL = "app.kubernetes.io/component"


def get_recommended_labels(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return a fresh dict of the recommended labels.

    The part-of and version labels are added only when the installer
    environment variables are set to a non-empty value.
    """
    env = os.environ if environ is None else environ
    labels = {
        "k8s-app": MULTI_PURPOSE_HOSTPATH_PROVISIONER_NAME,
        APP_KUBERNETES_MANAGED_BY_LABEL: "hostpath-provisioner-operator",
        APP_KUBERNETES_COMPONENT_LABEL: "storage",
    }
    part_of = env.get(PART_OF_LABEL_ENV_VAR_NAME, "")
    if part_of:
        labels[APP_KUBERNETES_PART_OF_LABEL] = part_of
    version = env.get(VERSION_LABEL_ENV_VAR_NAME, "")
    if version:
        labels[APP_KUBERNETES_VERSION_LABEL] = version
    return labels