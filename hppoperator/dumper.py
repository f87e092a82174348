"""Exporting CustomResourceDefinitions as YAML files."""

from __future__ import annotations

import argparse
import copy
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from hppoperator.helper import create_crd_def
from hppoperator.manifests import marshall_object


def dump_crds(crds: Iterable[dict[str, Any]], export_path: str | Path = "") -> list[Path]:
    """Write each CRD, without its conversion settings, to a file named after it.

    ``export_path`` is created if missing (its parent must exist). Returns the
    paths written. The given CRDs are left unchanged.
    """
    directory = Path(export_path) if export_path else Path()
    if export_path:
        directory.mkdir(mode=0o755, exist_ok=True)
    written: list[Path] = []
    for crd in crds:
        document = copy.deepcopy(crd)
        name = (document.get("metadata") or {}).get("name", "")
        if not name:
            raise ValueError("CRD has no metadata.name")
        spec = document.get("spec")
        if isinstance(spec, dict):
            spec.pop("conversion", None)
        path = directory / name
        with open(path, "w", encoding="utf-8") as handle:
            marshall_object(document, handle)
        written.append(path)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Export the CRD held in a manifest file as a YAML schema file."""
    parser = argparse.ArgumentParser(description="Export the CRD schemas to YAML files.")
    parser.add_argument("--export-path", default="", help="directory to write the files to")
    parser.add_argument("--crd-file", required=True, help="YAML manifest holding the CRD")
    args = parser.parse_args(argv)
    crd = create_crd_def(Path(args.crd_file).read_text(encoding="utf-8"))
    dump_crds([crd], args.export_path)
    return 0