"""Shared fixtures: an in-memory AccountBackend and sample Salesforce payloads."""

from __future__ import annotations

from typing import Any, Sequence

import pytest

from core.config import SearchConfig
from core.domain.fields import QualifiedField
from core.domain.models import Account


def account_for_tests(account_id: str = "id-for-tests") -> Account:
    return Account.model_validate(
        {
            "Id": account_id,
            "Name": "name",
            "AccountNumber": None,
            "BillingAddress": None,
            "CreatedDate": "2020-01-01T10:00:00.000+0000",
            "LastModifiedDate": "2020-01-02T10:00:00.000+0000",
            "Assets": None,
            "Contacts": None,
            "Opportunities": None,
        }
    )


class FakeBackend:
    """AccountBackend double driven by a table of scripted responses.

    Keys are ("id", "<Kind.field>", value) for get_account_id_by_field and
    ("account", account_id) for get_account. Values are either the result or
    an exception instance to raise. Unscripted calls fail the test.
    """

    def __init__(self, responses: dict[tuple[str, ...], Any] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, ...]] = []
        self.additional_fields: list[Sequence[QualifiedField]] = []

    def _answer(self, key: tuple[str, ...]) -> Any:
        self.calls.append(key)
        if key not in self.responses:
            raise AssertionError(f"unhandled request: {key}")
        result = self.responses[key]
        if isinstance(result, Exception):
            raise result
        return result

    async def get_account_id_by_field(self, field: QualifiedField, value: str) -> str:
        return self._answer(("id", str(field), value))

    async def get_account(
        self,
        account_id: str,
        additional_fields: Sequence[QualifiedField],
    ) -> Account:
        self.additional_fields.append(additional_fields)
        return self._answer(("account", account_id))


def search_config(*search: str, fields: Sequence[str] = ()) -> SearchConfig:
    return SearchConfig.from_strings(list(fields), list(search))


ACCOUNT_ROW: dict[str, Any] = {
    "attributes": {"type": "Account", "url": "/services/data/v52.0/sobjects/Account/0012500001Lhk3hAAB"},
    "Id": "0012500001Lhk3hAAB",
    "Name": "Acme Corp",
    "AccountNumber": "CD656092",
    "BillingAddress": {
        "city": "Springfield",
        "country": "US",
        "geocodeAccuracy": None,
        "postalCode": "12345",
        "state": "IL",
        "street": "742 Evergreen Terrace",
    },
    "CreatedDate": "2020-03-01T09:15:00.000+0000",
    "LastModifiedDate": "2021-07-12T16:40:00.000+0000",
    "Foo__c": "custom value",
    "Assets": {
        "totalSize": 1,
        "done": True,
        "records": [
            {
                "attributes": {"type": "Asset"},
                "Id": "02i2500000HTaW9AAL",
                "Name": "Widget",
                "Product2": {"ProductCode": "W-1", "Name": "Widget", "LastModifiedDate": None},
                "Price": 10.0,
                "Quantity": 2.0,
                "Status": "Installed",
                "ContactId": "0032500001AbcdeAAA",
                "InstallDate": "2020-04-01",
                "PurchaseDate": "2020-03-15",
                "UsageEndDate": None,
                "CreatedDate": "2020-03-15T09:00:00.000+0000",
                "LastModifiedDate": "2020-04-01T09:00:00.000+0000",
            }
        ],
    },
    "Contacts": {
        "totalSize": 1,
        "done": True,
        "records": [
            {
                "attributes": {"type": "Contact"},
                "Id": "0032500001AbcdeAAA",
                "Email": "who@example.com",
                "FirstName": "Homer",
                "LastName": "Simpson",
                "CreatedDate": "2020-03-01T09:20:00.000+0000",
                "LastModifiedDate": "2020-03-01T09:20:00.000+0000",
                "Birthdate": "1956-05-12",
            }
        ],
    },
    "Opportunities": {
        "totalSize": 2,
        "done": True,
        "records": [
            {
                "attributes": {"type": "Opportunity"},
                "Id": "0062500000AAAAAAA1",
                "Name": "Big deal",
                "RecordType": {"Name": "New Business"},
                "StageName": "Closed Won",
                "Amount": 1500.5,
                "CurrencyIsoCode": "USD",
                "IsWon": True,
                "IsClosed": True,
                "CloseDate": "2021-01-31",
                "LeadSource": "Web",
                "CreatedDate": "2020-12-01T09:00:00.000+0000",
                "LastModifiedDate": "2021-01-31T09:00:00.000+0000",
            },
            {
                "attributes": {"type": "Opportunity"},
                "Id": "0062500000AAAAAAA2",
                "Name": "Small deal",
                "RecordType": None,
                "StageName": "Prospecting",
                "Amount": None,
                "CurrencyIsoCode": None,
                "IsWon": False,
                "IsClosed": False,
                "CloseDate": None,
                "LeadSource": None,
                "CreatedDate": "2021-02-01T09:00:00.000+0000",
                "LastModifiedDate": None,
            },
        ],
    },
}

LINE_ITEM_ROW: dict[str, Any] = {
    "attributes": {"type": "OpportunityLineItem"},
    "UnitPrice": 750.25,
    "Quantity": 2.0,
    "TotalPrice": 1500.5,
    "CurrencyIsoCode": "USD",
    "ServiceDate": "2021-02-01",
}


@pytest.fixture(autouse=True)
def clean_sfdc_env(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for key in list(os.environ):
        if key.upper().startswith("SFDC_"):
            monkeypatch.delenv(key)


@pytest.fixture
def account_row() -> dict[str, Any]:
    import copy

    return copy.deepcopy(ACCOUNT_ROW)
