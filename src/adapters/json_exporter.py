"""Exportación JSON del reporte de aprovisionamiento.

Por qué JSON:
- Interoperabilidad con otros scripts (p.ej. guardar los ids de proyecto).
- Deja constancia de lo creado sin depender de la salida de consola.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ProvisioningReport


def export_report_json(*, report: ProvisioningReport, output_path: Path) -> Path:
    """Exporta `ProvisioningReport` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
