"""Campos calificados (`Kind.field`).

Se usan en dos lugares:
- `fields` de la configuración: columnas extra a incluir en la lectura.
- `search` de la configuración: predicados de búsqueda de respaldo.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.entities import EntityKind, kind_from_name
from core.errors import InvalidEntityKindError, InvalidFieldSpecError


class QualifiedField(BaseModel):
    """A field on one entity kind, e.g. `Contact.Birthdate`."""

    model_config = ConfigDict(frozen=True)

    kind: EntityKind = Field(..., description="Objeto Salesforce al que pertenece el campo.")
    name: str = Field(
        ...,
        description="Nombre del campo tal cual (incluye sufijos `__c`).",
    )

    @classmethod
    def parse(cls, spec: str) -> "QualifiedField":
        parts = spec.split(".")
        if len(parts) != 2:
            raise InvalidFieldSpecError(spec)
        try:
            kind = kind_from_name(parts[0])
        except InvalidEntityKindError as exc:
            raise InvalidFieldSpecError(spec, reason=str(exc)) from exc
        return cls(kind=kind, name=parts[1])

    def __str__(self) -> str:
        return f"{self.kind.value}.{self.name}"


def parse_fields(specs: list[str]) -> tuple[QualifiedField, ...]:
    """Parse an ordered list of specs, failing on the first bad entry."""

    return tuple(QualifiedField.parse(spec) for spec in specs)
