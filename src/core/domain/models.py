"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde: una `Quote` nunca sale con texto vacío.
- Serialización directa al contrato JSON `{content, author}` que consume la UI.

Nota:
- Estos modelos describen *qué* es una cita, no *cómo* se obtiene.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

UNKNOWN_AUTHOR = "unknown author"


class Quote(BaseModel):
    """Cita inspiradora lista para mostrar.

    Es un valor inmutable: no tiene identidad más allá de sus campos.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    content: str = Field(
        ...,
        min_length=1,
        description="Texto de la cita.",
    )
    author: str = Field(
        default=UNKNOWN_AUTHOR,
        min_length=1,
        description="Nombre del autor (o el centinela si el proveedor no lo informa).",
    )


class StageOutcome(BaseModel):
    """Resultado transitorio de una etapa de la cadena de fallback.

    Exactamente uno de `quote` / `error` está presente.
    """

    model_config = ConfigDict(frozen=True)

    stage: str = Field(
        ...,
        min_length=1,
        description="Nombre de la etapa ('primary', 'secondary', 'static').",
    )
    quote: Quote | None = Field(
        default=None,
        description="Cita decodificada si la etapa tuvo éxito.",
    )
    error_kind: str | None = Field(
        default=None,
        description="Tipo de fallo (p.ej. 'timeout', 'network', 'malformed').",
    )
    error: str | None = Field(
        default=None,
        description="Mensaje del fallo, truncado.",
    )
    elapsed_ms: float = Field(
        default=0.0,
        ge=0.0,
        description="Duración de la etapa en milisegundos.",
    )

    @property
    def ok(self) -> bool:
        return self.quote is not None


class Resolution(BaseModel):
    """Cita resuelta más la traza de etapas intentadas (diagnóstico)."""

    model_config = ConfigDict(frozen=True)

    quote: Quote
    source: str = Field(
        ...,
        min_length=1,
        description="Etapa que produjo la cita.",
    )
    outcomes: list[StageOutcome] = Field(
        default_factory=list,
        description="Etapas en el orden en que se intentaron.",
    )

    @property
    def used_fallback(self) -> bool:
        return self.source == "static"


class FetchResponse(BaseModel):
    """Respuesta cruda de un GET acotado (status + cuerpo)."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(..., description="Status tal cual lo envía el proveedor.")
    url: str = Field(default="", description="URL final tras redirecciones.")
    body: bytes = Field(default=b"", description="Cuerpo sin decodificar.")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def decode_json(self) -> Any:
        """Decodifica el cuerpo como JSON (lanza `ValueError` si no lo es)."""

        return json.loads(self.body)
