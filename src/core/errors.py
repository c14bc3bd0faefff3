"""Jerarquía de excepciones de sfind.

Por qué una jerarquía:
- La CLI captura `SfindError` en un único punto y decide el mensaje/exit code.
- El cascade de resolución solo necesita distinguir `NotFoundError` del resto.
"""

from __future__ import annotations

import json


def quoted(value: str) -> str:
    """Representa `value` entre comillas dobles (con escapes) para mensajes."""

    return json.dumps(value, ensure_ascii=False)


class SfindError(Exception):
    """Base exception for every sfind failure."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(SfindError):
    """Malformed field spec or unknown entity name."""


class InvalidEntityKindError(ParseError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid entity {quoted(name)}")


class InvalidFieldSpecError(ParseError):
    def __init__(self, spec: str, reason: str | None = None) -> None:
        self.spec = spec
        if reason:
            message = f"cannot parse entity field {quoted(spec)}: {reason}"
        else:
            message = f"invalid entity field {quoted(spec)}"
        super().__init__(message)


class ConfigError(SfindError):
    """Invalid configuration file or missing environment variable."""


class AuthenticationError(SfindError):
    """Login against Salesforce failed."""


class BackendError(SfindError):
    """Any failure reported by Salesforce or by the transport."""


class NotFoundError(BackendError):
    """The query returned zero rows."""

    def __init__(self, message: str = "salesforce entity not found") -> None:
        super().__init__(message)


class NothingFoundError(SfindError):
    """Every lookup avenue was exhausted for the user query."""

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"nothing found for query {quoted(query)}")
