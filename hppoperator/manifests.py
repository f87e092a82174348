"""Writing manifests as YAML documents, without server-populated fields."""

from __future__ import annotations

import json
from typing import Any, TextIO

import yaml


def _remove_nested(obj: Any, *path: str) -> None:
    """Remove the field at ``path``; do nothing if a step is missing or not a mapping."""
    current = obj
    for key in path[:-1]:
        if not isinstance(current, dict):
            return
        current = current.get(key)
    if isinstance(current, dict):
        current.pop(path[-1], None)


def _nested(obj: Any, *path: str) -> Any:
    current = obj
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def _to_yaml(obj: dict[str, Any]) -> str:
    return yaml.safe_dump(
        obj,
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )


def marshall_object(obj: Any, writer: TextIO) -> None:
    """Write ``obj`` to ``writer`` as a YAML document starting with ``---``.

    Creation timestamps and status are dropped, including those of the
    deployments of an install strategy. ``obj`` itself is left unchanged.
    Raises TypeError or ValueError if ``obj`` cannot be serialised as JSON.
    """
    document = json.loads(json.dumps(obj))
    if not isinstance(document, dict):
        raise ValueError("object must serialise to a JSON object")

    _remove_nested(document, "metadata", "creationTimestamp")
    _remove_nested(document, "template", "metadata", "creationTimestamp")
    _remove_nested(document, "spec", "template", "metadata", "creationTimestamp")
    _remove_nested(document, "status")

    deployments = _nested(document, "spec", "install", "spec", "deployments")
    if isinstance(deployments, list):
        for deployment in deployments:
            _remove_nested(deployment, "metadata", "creationTimestamp")
            _remove_nested(deployment, "spec", "template", "metadata", "creationTimestamp")
            _remove_nested(deployment, "status")

    text = _to_yaml(document)
    # Templates and pre-quoted strings do not need the single quotes the emitter adds.
    text = text.replace("'{{", "{{").replace("}}'", "}}")
    text = text.replace(" '\"", ' "').replace("\"'\n", '"\n')

    writer.write("---\n")
    writer.write(text)