"""RBAC manifests: cluster roles, roles and their bindings for the provisioner."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hppoperator.labels import MULTI_PURPOSE_HOSTPATH_PROVISIONER_NAME, get_recommended_labels

RBAC_API_GROUP = "rbac.authorization.k8s.io"
RBAC_API_VERSION = f"{RBAC_API_GROUP}/v1"


def _rule(api_group: str, resource: str, *verbs: str) -> dict[str, Any]:
    return {"apiGroups": [api_group], "resources": [resource], "verbs": list(verbs)}


def _binding(
    kind: str,
    role_kind: str,
    name: str,
    namespace: str | None,
    sa_name: str,
    subject_namespace: str,
    environ: Mapping[str, str] | None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    metadata["labels"] = get_recommended_labels(environ)
    subject: dict[str, Any] = {"kind": "ServiceAccount", "name": sa_name}
    if subject_namespace:
        subject["namespace"] = subject_namespace
    return {
        "apiVersion": RBAC_API_VERSION,
        "kind": kind,
        "metadata": metadata,
        "subjects": [subject],
        "roleRef": {"apiGroup": RBAC_API_GROUP, "kind": role_kind, "name": name},
    }


def cluster_role_binding(
    name: str, namespace: str, sa_name: str, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return a ClusterRoleBinding of the cluster role ``name`` to a service account."""
    return _binding("ClusterRoleBinding", "ClusterRole", name, None, sa_name, namespace, environ)


def role_binding(
    name: str, namespace: str, sa_name: str, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return a RoleBinding in ``namespace`` of the role ``name`` to a service account."""
    return _binding("RoleBinding", "Role", name, namespace, sa_name, namespace, environ)


def _cluster_role(
    name: str, rules: list[dict[str, Any]], environ: Mapping[str, str] | None
) -> dict[str, Any]:
    return {
        "apiVersion": RBAC_API_VERSION,
        "kind": "ClusterRole",
        "metadata": {"name": name, "labels": get_recommended_labels(environ)},
        "rules": rules,
    }


def provisioner_cluster_role(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return the ClusterRole of the legacy provisioner."""
    return _cluster_role(
        MULTI_PURPOSE_HOSTPATH_PROVISIONER_NAME,
        [
            _rule("", "persistentvolumes", "get", "list", "watch", "create", "delete"),
            _rule("", "persistentvolumeclaims", "get", "list", "watch", "update"),
            _rule("storage.k8s.io", "storageclasses", "get", "list", "watch"),
            _rule("", "events", "list", "watch", "create", "patch", "update"),
            _rule("", "nodes", "get"),
        ],
        environ,
    )


def snapshot_csi_cluster_rules() -> list[dict[str, Any]]:
    """Return the extra cluster rules the CSI driver needs for volume snapshots."""
    group = "snapshot.storage.k8s.io"
    return [
        _rule(group, "volumesnapshotclasses", "get", "list", "watch"),
        _rule(group, "volumesnapshots", "get"),
        _rule(
            group,
            "volumesnapshotcontents",
            "create", "get", "list", "watch", "update", "delete", "patch",
        ),
        _rule(group, "volumesnapshotcontents/status", "update", "patch"),
    ]


def csi_cluster_role(
    name: str, snapshot_enabled: bool = False, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return the ClusterRole of the CSI driver, with snapshot rules when enabled."""
    rules = [
        _rule("", "persistentvolumes", "get", "list", "watch", "create", "delete", "patch"),
        _rule("", "persistentvolumeclaims", "get", "list", "watch", "update"),
        _rule("storage.k8s.io", "storageclasses", "get", "list", "watch"),
        _rule("", "events", "list", "watch", "create", "patch", "update"),
        _rule("storage.k8s.io", "csinodes", "get", "list", "watch"),
        _rule("", "nodes", "get", "list", "watch"),
        _rule("storage.k8s.io", "volumeattachments", "get", "list", "watch", "patch"),
        _rule("storage.k8s.io", "volumeattachments/status", "patch"),
    ]
    if snapshot_enabled:
        rules.extend(snapshot_csi_cluster_rules())
    return _cluster_role(name, rules, environ)


def provisioner_role(
    name: str, namespace: str, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return the namespaced Role of the CSI driver."""
    return {
        "apiVersion": RBAC_API_VERSION,
        "kind": "Role",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "labels": get_recommended_labels(environ),
        },
        "rules": [
            _rule("coordination.k8s.io", "leases", "get", "update", "create"),
            _rule(
                "storage.k8s.io",
                "csistoragecapacities",
                "get", "list", "watch", "delete", "update", "create",
            ),
            _rule("", "pods", "get"),
        ],
    }