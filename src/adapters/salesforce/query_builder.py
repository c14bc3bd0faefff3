"""Construcción de consultas SOQL.

Dos tipos de consulta:
- Lectura compuesta: la cuenta + sub-selects de Assets, Contacts y
  Opportunities. Los campos son la lista base de cada objeto seguida de los
  `fields` adicionales de la configuración (en orden, sin deduplicar).
- Lookup: una consulta plana que devuelve la mínima columna para llegar al id
  de la cuenta a partir de `Kind.field = 'value'`.

Limitación de la plataforma: las relaciones solo se anidan un nivel, así que
las líneas de Opportunity se piden aparte (`line_items_query`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from core.domain.entities import EntityKind
from core.domain.fields import QualifiedField

BASE_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.ACCOUNT: (
        "Id",
        "Name",
        "AccountNumber",
        "BillingAddress",
        "CreatedDate",
        "LastModifiedDate",
    ),
    EntityKind.ASSET: (
        "Id",
        "Name",
        "Product2.ProductCode",
        "Product2.Name",
        "Product2.LastModifiedDate",
        "Price",
        "Quantity",
        "Status",
        "ContactId",
        "InstallDate",
        "PurchaseDate",
        "UsageEndDate",
        "CreatedDate",
        "LastModifiedDate",
    ),
    EntityKind.CONTACT: (
        "Id",
        "Email",
        "FirstName",
        "LastName",
        "CreatedDate",
        "LastModifiedDate",
    ),
    EntityKind.OPPORTUNITY: (
        "Id",
        "Name",
        "RecordType.Name",
        "StageName",
        "Amount",
        "CurrencyIsoCode",
        "IsWon",
        "IsClosed",
        "CloseDate",
        "LeadSource",
        "CreatedDate",
        "LastModifiedDate",
    ),
    EntityKind.OPPORTUNITY_LINE_ITEM: (
        "UnitPrice",
        "Quantity",
        "TotalPrice",
        "CurrencyIsoCode",
        "ServiceDate",
    ),
}

# Nombre de la relación hija en la lectura compuesta, en orden de aparición.
CHILD_RELATIONSHIPS: tuple[tuple[EntityKind, str], ...] = (
    (EntityKind.ASSET, "Assets"),
    (EntityKind.CONTACT, "Contacts"),
    (EntityKind.OPPORTUNITY, "Opportunities"),
)

# Columna que lleva de cada hijo a su cuenta. OpportunityLineItem no tiene
# AccountId propio: se sube por la relación con Opportunity.
PARENT_ID_COLUMNS: dict[EntityKind, str] = {
    EntityKind.ASSET: "AccountId",
    EntityKind.CONTACT: "AccountId",
    EntityKind.OPPORTUNITY: "AccountId",
    EntityKind.OPPORTUNITY_LINE_ITEM: "Opportunity.AccountId",
}

_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def quote_literal(value: str) -> str:
    """Render `value` as a SOQL string literal, escaping reserved characters."""

    return "'" + "".join(_ESCAPES.get(ch, ch) for ch in value) + "'"


class AccountQueryBuilder:
    """Builds the composite account read and the line items queries."""

    def __init__(self, additional_fields: Iterable[QualifiedField] = ()) -> None:
        self._fields: dict[EntityKind, list[str]] = {
            kind: list(fields) for kind, fields in BASE_FIELDS.items()
        }
        for field in additional_fields:
            self._fields[field.kind].append(field.name)

    def fields_for(self, kind: EntityKind) -> list[str]:
        return list(self._fields[kind])

    def account_query(self, account_id: str) -> str:
        subqueries = [
            f"(SELECT {', '.join(self._fields[kind])} FROM {relationship})"
            for kind, relationship in CHILD_RELATIONSHIPS
        ]
        select = ", ".join([*self._fields[EntityKind.ACCOUNT], *subqueries])
        return (
            f"SELECT {select} FROM {EntityKind.ACCOUNT.value} "
            f"WHERE Id = {quote_literal(account_id)}"
        )

    def line_items_query(self, opportunity_id: str) -> str:
        fields = ", ".join(self._fields[EntityKind.OPPORTUNITY_LINE_ITEM])
        return (
            f"SELECT {fields} FROM {EntityKind.OPPORTUNITY_LINE_ITEM.value} "
            f"WHERE OpportunityId = {quote_literal(opportunity_id)}"
        )


@dataclass(frozen=True)
class LookupQuery:
    """A flat query plus the (possibly dotted) column holding the account id."""

    soql: str
    id_column: str


def build_lookup_query(field: QualifiedField, value: str) -> LookupQuery | None:
    """Build the query resolving `field = value` to an account id.

    Returns None for `Account.Id`: the value already is the account id.
    Ante duplicados gana el registro modificado más recientemente.
    """

    if field.kind is EntityKind.ACCOUNT:
        if field.name == "Id":
            return None
        id_column = "Id"
    else:
        id_column = PARENT_ID_COLUMNS[field.kind]

    soql = (
        f"SELECT {id_column} FROM {field.kind.value} "
        f"WHERE {field.name} = {quote_literal(value)} "
        "ORDER BY LastModifiedDate DESC LIMIT 1"
    )
    return LookupQuery(soql=soql, id_column=id_column)
