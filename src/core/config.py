"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP, API) lean config de forma consistente.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import UNKNOWN_AUTHOR

DEFAULT_PRIMARY_URL = "https://api.quotable.io/random"
DEFAULT_SECONDARY_URL = "https://zenquotes.io/api/random"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (XDG, con `~/.config` por defecto)."""

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "daily-quote"
    return Path.home() / ".config" / "daily-quote"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# daily-quote user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/API/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="DAILY_QUOTE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    primary_url: str = Field(
        default=DEFAULT_PRIMARY_URL,
        min_length=8,
        description="Proveedor principal (objeto JSON con `content`/`author`).",
    )
    secondary_url: str = Field(
        default=DEFAULT_SECONDARY_URL,
        min_length=8,
        description="Proveedor alternativo (array JSON con `q`/`a` o `text`/`author`).",
    )
    fetch_timeout_seconds: float = Field(
        default=8.0,
        gt=0,
        le=120,
        description="Límite de tiempo por etapa de red (segundos).",
    )
    user_agent: str = Field(
        default="daily-quote/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones a proveedores.",
    )
    unknown_author: str = Field(
        default=UNKNOWN_AUTHOR,
        min_length=1,
        description="Centinela usado cuando el proveedor no informa autor.",
    )

    log_level: str = Field(
        default="WARNING",
        pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Nivel de logging para CLI/servidor.",
    )

    api_host: str = Field(
        default="127.0.0.1",
        min_length=1,
        description="Host de escucha para `serve`.",
    )
    api_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Puerto de escucha para `serve`.",
    )
