"""SecurityContextConstraints manifests for the provisioner service accounts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hppoperator.labels import MULTI_PURPOSE_HOSTPATH_PROVISIONER_NAME, get_recommended_labels

FS_TYPE_HOST_PATH = "hostPath"
FS_TYPE_SECRET = "secret"
FS_TYPE_PROJECTED = "projected"
FS_TYPE_ALL = "*"
RUN_AS_ANY = "RunAsAny"

_DROPPED_CAPABILITIES = ("KILL", "MKNOD", "SETUID", "SETGID")


def _scc(
    name: str,
    namespace: str,
    sa_name: str,
    privileged: bool,
    volumes: list[str],
    environ: Mapping[str, str] | None,
) -> dict[str, Any]:
    return {
        "apiVersion": "security.openshift.io/v1",
        "kind": "SecurityContextConstraints",
        "metadata": {
            "name": name,
            "labels": get_recommended_labels(environ),
        },
        "priority": None,
        "allowPrivilegedContainer": privileged,
        "defaultAddCapabilities": None,
        "requiredDropCapabilities": list(_DROPPED_CAPABILITIES),
        "allowedCapabilities": None,
        "allowHostDirVolumePlugin": True,
        "volumes": volumes,
        "allowHostNetwork": False,
        "allowHostPorts": False,
        "allowHostPID": False,
        "allowHostIPC": False,
        "readOnlyRootFilesystem": False,
        "runAsUser": {"type": RUN_AS_ANY},
        "seLinuxContext": {"type": RUN_AS_ANY},
        "fsGroup": {"type": RUN_AS_ANY},
        "supplementalGroups": {"type": RUN_AS_ANY},
        "users": [f"system:serviceaccount:{namespace}:{sa_name}"],
        "groups": [],
    }


def security_context_constraints(
    namespace: str, sa_name: str, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return the SCC of the legacy provisioner: unprivileged, host path volumes allowed."""
    return _scc(
        MULTI_PURPOSE_HOSTPATH_PROVISIONER_NAME,
        namespace,
        sa_name,
        privileged=False,
        volumes=[FS_TYPE_HOST_PATH, FS_TYPE_SECRET, FS_TYPE_PROJECTED],
        environ=environ,
    )


def csi_security_context_constraints(
    namespace: str, sa_name: str, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return the SCC of the CSI driver: privileged, all volume types allowed."""
    return _scc(
        f"{MULTI_PURPOSE_HOSTPATH_PROVISIONER_NAME}-csi",
        namespace,
        sa_name,
        privileged=True,
        volumes=[FS_TYPE_ALL],
        environ=environ,
    )