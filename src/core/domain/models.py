"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida las filas crudas que devuelve la API REST de Salesforce sin que el
  Core conozca HTTP.
- `extra="allow"` conserva tal cual las columnas no declaradas (p.ej. los
  `fields` adicionales de la configuración) para mostrarlas al final.

Nota:
- Los alias siguen el nombre de columna de Salesforce (PascalCase).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def _unwrap_records(value: Any) -> Any:
    # Las sub-consultas llegan como {"totalSize": n, "records": [...]} o null.
    if value is None:
        return []
    if isinstance(value, dict):
        return value.get("records") or []
    return value


class SalesforceRecord(BaseModel):
    """Base para filas de Salesforce: acepta y conserva columnas extra."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def extra(self) -> dict[str, Any]:
        """Columns returned by Salesforce that are not declared on the model."""

        return dict(self.model_extra or {})


class Address(SalesforceRecord):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")


class Product(SalesforceRecord):
    name: str | None = Field(default=None, alias="Name")
    product_code: str | None = Field(default=None, alias="ProductCode")
    last_modified_date: str | None = Field(default=None, alias="LastModifiedDate")


class RecordType(SalesforceRecord):
    name: str | None = Field(default=None, alias="Name")


class Contact(SalesforceRecord):
    id: str = Field(..., alias="Id")
    email: str | None = Field(default=None, alias="Email")
    first_name: str | None = Field(default=None, alias="FirstName")
    last_name: str | None = Field(default=None, alias="LastName")

    created_date: str | None = Field(default=None, alias="CreatedDate")
    last_modified_date: str | None = Field(default=None, alias="LastModifiedDate")


class Asset(SalesforceRecord):
    id: str = Field(..., alias="Id")
    name: str | None = Field(default=None, alias="Name")
    product: Product | None = Field(default=None, alias="Product2")
    price: float | None = Field(default=None, alias="Price")
    quantity: float | None = Field(default=None, alias="Quantity")
    status: str | None = Field(default=None, alias="Status")
    contact_id: str | None = Field(default=None, alias="ContactId")

    install_date: str | None = Field(default=None, alias="InstallDate")
    purchase_date: str | None = Field(default=None, alias="PurchaseDate")
    usage_end_date: str | None = Field(default=None, alias="UsageEndDate")

    created_date: str | None = Field(default=None, alias="CreatedDate")
    last_modified_date: str | None = Field(default=None, alias="LastModifiedDate")


class LineItem(SalesforceRecord):
    unit_price: float | None = Field(default=None, alias="UnitPrice")
    quantity: float | None = Field(default=None, alias="Quantity")
    total_price: float | None = Field(default=None, alias="TotalPrice")
    currency_iso_code: str | None = Field(default=None, alias="CurrencyIsoCode")
    service_date: str | None = Field(default=None, alias="ServiceDate")


class Opportunity(SalesforceRecord):
    id: str = Field(..., alias="Id")
    name: str | None = Field(default=None, alias="Name")
    record_type: RecordType | None = Field(default=None, alias="RecordType")
    stage_name: str | None = Field(default=None, alias="StageName")
    amount: float | None = Field(default=None, alias="Amount")
    currency_iso_code: str | None = Field(default=None, alias="CurrencyIsoCode")
    is_won: bool = Field(default=False, alias="IsWon")
    is_closed: bool = Field(default=False, alias="IsClosed")
    close_date: str | None = Field(default=None, alias="CloseDate")
    lead_source: str | None = Field(default=None, alias="LeadSource")

    created_date: str | None = Field(default=None, alias="CreatedDate")
    last_modified_date: str | None = Field(default=None, alias="LastModifiedDate")

    # Se rellena en una segunda pasada (Salesforce solo anida un nivel).
    line_items: list[LineItem] = Field(default_factory=list, alias="LineItems")


class Account(SalesforceRecord):
    """Agregado principal: la cuenta resuelta y sus registros relacionados."""

    id: str = Field(..., alias="Id")
    name: str | None = Field(default=None, alias="Name")
    account_number: str | None = Field(default=None, alias="AccountNumber")
    billing_address: Address = Field(default_factory=Address, alias="BillingAddress")

    created_date: str | None = Field(default=None, alias="CreatedDate")
    last_modified_date: str | None = Field(default=None, alias="LastModifiedDate")

    assets: list[Asset] = Field(default_factory=list, alias="Assets")
    contacts: list[Contact] = Field(default_factory=list, alias="Contacts")
    opportunities: list[Opportunity] = Field(default_factory=list, alias="Opportunities")

    @field_validator("assets", "contacts", "opportunities", mode="before")
    @classmethod
    def _related(cls, value: Any) -> Any:
        return _unwrap_records(value)

    @field_validator("billing_address", mode="before")
    @classmethod
    def _address(cls, value: Any) -> Any:
        return {} if value is None else value
