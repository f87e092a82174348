"""Resource naming, last-applied configuration and three-way merging of manifests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

CREATE_VERSION_LABEL = "hostpathprovisioner.kubevirt.io/createVersion"
UPDATE_VERSION_LABEL = "hostpathprovisioner.kubevirt.io/updateVersion"
LAST_APPLIED_CONFIG_ANNOTATION = "hostpathprovisioner.kubevirt.io/lastAppliedConfiguration"

SERVICE_ACCOUNT_NAMESPACE_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"
DEFAULT_NAMESPACE = "hostpath-provisioner"

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


class MergeError(Exception):
    """Raised when a desired manifest cannot be merged into the current one."""


def fnv_hash(s: str) -> str:
    """Return the 32-bit FNV-1a hash of ``s`` as 8 lower-case hex digits."""
    value = _FNV32_OFFSET
    for byte in s.encode("utf-8"):
        value ^= byte
        value = (value * _FNV32_PRIME) & 0xFFFFFFFF
    return f"{value:08x}"


def get_resource_name_with_max_length(base: str, suffix: str, max_length: int) -> str:
    """Join ``base`` and ``suffix`` with a dash, shortening with a hash to fit ``max_length``."""
    if max_length <= 0:
        return ""
    name = f"{base}-{suffix}"
    if len(name) <= max_length:
        return name

    base_length = max_length - 10 - len(suffix)
    if base_length < 0:
        # The suffix alone is too long: keep part of the base and a hash of the full name.
        prefix = base[: min(len(base), max(0, max_length - 9))]
        short_name = f"{prefix}-{fnv_hash(name)}"
        return short_name[: min(max_length, len(short_name))]

    return f"{base[:base_length]}-{fnv_hash(base)}-{suffix}"


def _metadata(obj: dict[str, Any]) -> dict[str, Any]:
    return obj.setdefault("metadata", {})


def merge_labels_and_annotations(src: dict[str, Any], dest: dict[str, Any]) -> None:
    """Copy the labels and annotations of ``src`` onto ``dest``, keeping extra ones of ``dest``."""
    src_meta = src.get("metadata") or {}
    for key in ("labels", "annotations"):
        values = src_meta.get(key) or {}
        if not values:
            continue
        dest_meta = _metadata(dest)
        if dest_meta.get(key) is None:
            dest_meta[key] = {}
        dest_meta[key].update(values)


def set_last_applied_configuration(obj: dict[str, Any]) -> None:
    """Store the JSON form of ``obj`` in its last-applied-configuration annotation."""
    serialized = json.dumps(obj, separators=(",", ":"), sort_keys=True)
    meta = _metadata(obj)
    if meta.get("annotations") is None:
        meta["annotations"] = {}
    meta["annotations"][LAST_APPLIED_CONFIG_ANNOTATION] = serialized


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise MergeError(f"unsupported value of type {type(value).__name__}")


def _json_equal(a: Any, b: Any) -> bool:
    kind = _kind(a)
    if kind != _kind(b):
        return False
    if kind == "object":
        return a.keys() == b.keys() and all(_json_equal(a[k], b[k]) for k in a)
    if kind == "array":
        return len(a) == len(b) and all(_json_equal(x, y) for x, y in zip(a, b))
    return a == b


def _create_merge_patch(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    patch: dict[str, Any] = {}
    for key, b_value in b.items():
        if key not in a:
            patch[key] = b_value
            continue
        a_value = a[key]
        if _kind(a_value) != _kind(b_value):
            patch[key] = b_value
        elif isinstance(a_value, dict):
            diff = _create_merge_patch(a_value, b_value)
            if diff:
                patch[key] = diff
        elif not _json_equal(a_value, b_value):
            patch[key] = b_value
    for key in a:
        if key not in b:
            patch[key] = None
    return patch


def _filter_nulls(patch: dict[str, Any], keep_null: bool) -> dict[str, Any]:
    filtered: dict[str, Any] = {}
    for key, value in patch.items():
        if value is None:
            if keep_null:
                filtered[key] = None
        elif isinstance(value, dict):
            if not value:
                # An explicitly empty map is a value, not an empty patch.
                if not keep_null:
                    filtered[key] = value
                continue
            sub = _filter_nulls(value, keep_null)
            if sub:
                filtered[key] = sub
        elif not keep_null:
            filtered[key] = value
    return filtered


def _has_conflicts(left: Any, right: Any) -> bool:
    if isinstance(left, dict):
        if not isinstance(right, dict):
            return True
        return any(_has_conflicts(v, right[k]) for k, v in left.items() if k in right)
    if isinstance(left, list):
        if not isinstance(right, list) or len(left) != len(right):
            return True
        return any(_has_conflicts(x, y) for x, y in zip(left, right))
    return not _json_equal(left, right)


def _prune_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [None if v is None else _prune_nulls(v) for v in value]
    return value


def _merge_docs(doc: dict[str, Any], patch: dict[str, Any]) -> None:
    for key, value in patch.items():
        if value is None:
            doc.pop(key, None)
            continue
        current = doc.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _merge_docs(current, value)
        elif isinstance(current, dict):
            doc[key] = copy.deepcopy(value)
        else:
            doc[key] = _prune_nulls(copy.deepcopy(value))


def _apply_merge_patch(doc: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(doc)
    _merge_docs(result, patch)
    return result


def _check_preconditions(patch: dict[str, Any]) -> None:
    for key in ("apiVersion", "kind"):
        if key in patch:
            raise MergeError(f"precondition failed: {key} may not be changed")
    metadata = patch.get("metadata")
    if isinstance(metadata, dict) and "name" in metadata:
        raise MergeError("precondition failed: metadata.name may not be changed")


def merge_object(desired: dict[str, Any], current: dict[str, Any]) -> dict[str, Any]:
    """Three-way merge ``desired`` into ``current`` using the last applied configuration.

    Fields set in ``desired`` win, fields dropped from ``desired`` since the last
    applied configuration are removed, and anything else added to ``current`` is
    kept. ``desired`` takes over the creation timestamp of ``current``; ``current``
    itself is left unchanged. Raises MergeError when the merge is not possible.
    """
    current_meta = current.get("metadata") or {}
    annotations = current_meta.get("annotations") or {}
    if LAST_APPLIED_CONFIG_ANNOTATION not in annotations:
        raise MergeError(
            f"{current.get('kind', '')} {current_meta.get('namespace', '')}/"
            f"{current_meta.get('name', '')} missing last applied config"
        )
    raw_original = annotations[LAST_APPLIED_CONFIG_ANNOTATION] or "{}"
    try:
        original = json.loads(raw_original)
    except json.JSONDecodeError as err:
        raise MergeError(f"invalid last applied config: {err}") from err
    if not isinstance(original, dict):
        raise MergeError("last applied config is not an object")

    desired_meta = _metadata(desired)
    if "creationTimestamp" in current_meta:
        desired_meta["creationTimestamp"] = current_meta["creationTimestamp"]
    else:
        desired_meta.pop("creationTimestamp", None)

    add_and_change = _filter_nulls(_create_merge_patch(current, desired), keep_null=False)
    deletions = _filter_nulls(_create_merge_patch(original, desired), keep_null=True)
    if _has_conflicts(add_and_change, deletions):
        raise MergeError("conflicting changes between current and desired state")
    patch = _apply_merge_patch(deletions, add_and_change)
    _check_preconditions(patch)
    return _apply_merge_patch(current, patch)


def get_namespace(path: str | Path = SERVICE_ACCOUNT_NAMESPACE_PATH) -> str:
    """Return the namespace stored in ``path``, or the default namespace."""
    try:
        namespace = Path(path).read_text(encoding="utf-8").strip()
    except OSError:
        return DEFAULT_NAMESPACE
    return namespace or DEFAULT_NAMESPACE