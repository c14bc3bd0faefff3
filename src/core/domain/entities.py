"""Catálogo de entidades Salesforce soportadas.

Por qué un Enum cerrado:
- El conjunto de objetos consultables es fijo: Account y sus hijos directos
  (Asset, Contact, Opportunity) más las líneas de Opportunity.
- Centraliza la tabla de prefijos de id para clasificar una query sin red.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from core.errors import InvalidEntityKindError

if TYPE_CHECKING:
    from core.domain.fields import QualifiedField


class EntityKind(str, Enum):
    """Salesforce objects known to sfind."""

    ACCOUNT = "Account"
    ASSET = "Asset"
    CONTACT = "Contact"
    OPPORTUNITY = "Opportunity"
    OPPORTUNITY_LINE_ITEM = "OpportunityLineItem"

    def __str__(self) -> str:
        return self.value

    def field(self, name: str) -> "QualifiedField":
        """Build a `QualifiedField` for this kind."""

        from core.domain.fields import QualifiedField

        return QualifiedField(kind=self, name=name)


# OpportunityLineItem no tiene prefijo: no se puede buscar por id.
ID_PREFIXES: dict[str, EntityKind] = {
    "001": EntityKind.ACCOUNT,
    "02i": EntityKind.ASSET,
    "003": EntityKind.CONTACT,
    "006": EntityKind.OPPORTUNITY,
}

ID_LENGTHS: tuple[int, ...] = (15, 18)


def kind_from_prefix(prefix: str) -> EntityKind | None:
    return ID_PREFIXES.get(prefix)


def kind_from_id(value: str) -> EntityKind | None:
    """Classify a raw string as a Salesforce id.

    Returns None unless the value has the length of a 15/18 chars id and one
    of the known 3-chars prefixes.
    """

    if len(value) not in ID_LENGTHS:
        return None
    return kind_from_prefix(value[:3])


def kind_from_name(name: str) -> EntityKind:
    """Resolve a kind from its canonical (case-sensitive) name."""

    for kind in EntityKind:
        if kind.value == name:
            return kind
    raise InvalidEntityKindError(name)
