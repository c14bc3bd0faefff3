"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Carga una sola vez la configuración de búsqueda (`config.toml`) y la entrega
  inmutable al finder.

Formato de `config.toml`:

    fields = [
        'Account.Foo__c',
        'Contact.Birthdate',
    ]
    search = [
        'Account.Name',
        'Opportunity.LeadSource',
    ]
"""

from __future__ import annotations

import json
import os
import re
import sys
import tomllib
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.fields import QualifiedField, parse_fields
from core.errors import ConfigError, ParseError

PRODUCTION_LOGIN_URL = "https://login.salesforce.com"
SANDBOX_LOGIN_URL = "https://test.salesforce.com"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "sfind"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "sfind"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sfind"
    return Path.home() / ".config" / "sfind"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


_SINGLE_QUOTE_ESCAPES = re.compile(r"\\([\\'])")
SANDBOX_TRUE_VALUES = frozenset({"1", "true", "yes"})


def _quote_env_value(value: str) -> str:
    # Entre comillas simples dotenv no corta en ` #` ni expande `${...}`.
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _unquote_env_value(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return _SINGLE_QUOTE_ESCAPES.sub(r"\1", value[1:-1])
    return value.strip('"').strip("'")


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
        value = _unquote_env_value(value.strip())
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# sfind user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={_quote_env_value(existing[key])}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class Credentials(BaseModel):
    """Datos de login (OAuth2 username-password flow)."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    username: str
    # Salesforce espera password + security token concatenados.
    password: str = Field(..., repr=False)


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Las credenciales son opcionales aquí: solo `credentials()` las exige, así
      `sfind config` y `sfind doctor` funcionan sin ellas.
    """

    model_config = SettingsConfigDict(
        env_prefix="SFDC_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    client_id: str | None = Field(default=None, description="Consumer key de la connected app.")
    client_secret: str | None = Field(default=None, description="Consumer secret de la connected app.")
    username: str | None = Field(default=None, description="Usuario Salesforce.")
    password: str | None = Field(default=None, description="Password del usuario.")
    secret_token: str | None = Field(default=None, description="Security token del usuario.")

    sandbox: bool = Field(
        default=False,
        description="Usar test.salesforce.com en vez de login.salesforce.com.",
    )
    login_url: str | None = Field(
        default=None,
        description="URL de login explícita (My Domain); tiene prioridad sobre `sandbox`.",
    )
    api_version: str = Field(
        default="v52.0",
        pattern=r"^v\d+\.\d+$",
        description="Versión de la API REST (p.ej. v52.0).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="sfind/0.1",
        min_length=1,
        description="User-Agent para las peticiones a Salesforce.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
    config_file: Path | None = Field(
        default=None,
        description="Ruta alternativa para config.toml.",
    )

    @field_validator("sandbox", mode="before")
    @classmethod
    def _sandbox_flag(cls, value: object) -> bool:
        # Cualquier valor fuera de 1/true/yes (incluido "") significa producción.
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in SANDBOX_TRUE_VALUES

    @property
    def resolved_login_url(self) -> str:
        if self.login_url:
            return self.login_url.rstrip("/")
        return SANDBOX_LOGIN_URL if self.sandbox else PRODUCTION_LOGIN_URL

    @property
    def search_config_path(self) -> Path:
        return self.config_file or get_user_config_dir() / "config.toml"

    def credentials(self) -> Credentials:
        """Return login credentials or fail naming the first missing variable."""

        values: dict[str, str] = {}
        for name in ("client_id", "client_secret", "username", "password", "secret_token"):
            value = getattr(self, name)
            if value is None:
                raise ConfigError(f"missing environment variable SFDC_{name.upper()}")
            values[name] = value
        return Credentials(
            client_id=values["client_id"],
            client_secret=values["client_secret"],
            username=values["username"],
            password=values["password"] + values["secret_token"],
        )


class FileConf(BaseModel):
    """Contenido crudo de `config.toml`."""

    model_config = ConfigDict(extra="forbid")

    fields: list[str] = Field(default_factory=list)
    search: list[str] = Field(default_factory=list)

    @classmethod
    def from_toml(cls, text: str) -> "FileConf":
        try:
            return cls.model_validate(tomllib.loads(text))
        except (tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ConfigError(f"cannot deserialize provided config: {exc}") from exc

    def to_toml(self) -> str:
        lines: list[str] = []
        for key, values in (("fields", self.fields), ("search", self.search)):
            if not values:
                lines.append(f"{key} = []")
                continue
            lines.append(f"{key} = [")
            for value in values:
                lines.append(f"    {json.dumps(value, ensure_ascii=False)},")
            lines.append("]")
        return "\n".join(lines) + "\n"

    def to_search_config(self) -> "SearchConfig":
        try:
            return SearchConfig(
                additional_fields=parse_fields(self.fields),
                search_fields=parse_fields(self.search),
            )
        except ParseError as exc:
            raise ConfigError(str(exc)) from exc


class SearchConfig(BaseModel):
    """Configuración de búsqueda, inmutable durante toda la ejecución."""

    model_config = ConfigDict(frozen=True)

    additional_fields: tuple[QualifiedField, ...] = Field(
        default=(),
        description="Campos extra añadidos a la lectura compuesta.",
    )
    search_fields: tuple[QualifiedField, ...] = Field(
        default=(),
        description="Campos probados en orden como predicados de respaldo.",
    )

    @classmethod
    def from_strings(cls, fields: list[str], search: list[str]) -> "SearchConfig":
        return FileConf(fields=fields, search=search).to_search_config()


def _read_file_conf(path: Path) -> FileConf:
    # Si el fichero no existe (o no se puede leer) se usa una config vacía.
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return FileConf()
    return FileConf.from_toml(text)


def load_search_config(path: Path) -> SearchConfig:
    """Parse the configuration file at `path` into a `SearchConfig`."""

    return _read_file_conf(path).to_search_config()


def edit_search_config(path: Path, editor: Callable[[str], str | None]) -> bool:
    """Edit the configuration with `editor` and save it if valid.

    `editor` recibe el TOML actual y devuelve el nuevo contenido (o None si el
    usuario no guardó cambios). Devuelve True si se escribió el fichero.
    """

    try:
        current = _read_file_conf(path)
    except ConfigError:
        # Un fichero roto no impide editarlo: se parte de una config vacía.
        current = FileConf()
    contents = editor(current.to_toml())
    if contents is None:
        return False

    FileConf.from_toml(contents).to_search_config()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot write config: {exc}") from exc
    return True
