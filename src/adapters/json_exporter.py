"""Exportación JSON de una cita.

Por qué JSON:
- Es el mismo contrato `{content, author}` que sirve la API.
- Permite guardar la cita del día sin depender del render de la CLI.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import Quote


def quote_payload(quote: Quote) -> dict[str, str]:
    return quote.model_dump(mode="json", include={"content", "author"})


def export_quote_json(*, quote: Quote, output_path: Path) -> Path:
    """Exporta `Quote` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(quote_payload(quote), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
