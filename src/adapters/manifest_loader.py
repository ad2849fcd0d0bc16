"""Carga del manifest de aprovisionamiento (JSON).

Formato:
    {
      "options": {"description": "...", "isPrivate": true, ...},
      "boards": [{"name": "Alpha", "emails": ["a@x.com"]}, ...]
    }

Las claves de `options` aceptan snake_case o los nombres camelCase heredados
(`isBacklogActived`, `isIssuesActived`, ...).
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.domain.models import ProvisioningManifest
from core.errors import ManifestError


def load_manifest(path: Path) -> ProvisioningManifest:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}", exc) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Manifest {path} is not valid JSON: {exc}", exc) from exc

    try:
        return ProvisioningManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(f"Manifest {path} is invalid: {exc}", exc) from exc
