from __future__ import annotations

import json

from adapters.json_exporter import account_to_json, export_account_json
from core.domain.models import Account, LineItem


class TestAccountModel:
    def test_nested_records_are_unwrapped(self, account_row):
        account = Account.model_validate(account_row)

        assert account.id == "0012500001Lhk3hAAB"
        assert account.billing_address.postal_code == "12345"
        assert [c.email for c in account.contacts] == ["who@example.com"]
        assert account.assets[0].product.product_code == "W-1"
        assert account.opportunities[0].record_type.name == "New Business"
        assert account.opportunities[1].record_type is None

    def test_undeclared_columns_are_kept(self, account_row):
        account = Account.model_validate(account_row)

        assert account.extra["Foo__c"] == "custom value"
        assert "attributes" in account.extra
        assert account.contacts[0].extra["Birthdate"] == "1956-05-12"
        assert "geocodeAccuracy" in account.billing_address.extra

    def test_null_relationships_and_address(self):
        account = Account.model_validate(
            {
                "Id": "001",
                "BillingAddress": None,
                "Assets": None,
                "Contacts": None,
                "Opportunities": None,
            }
        )

        assert account.assets == []
        assert account.contacts == []
        assert account.opportunities == []
        assert account.billing_address.city is None

    def test_line_items_default_empty(self, account_row):
        account = Account.model_validate(account_row)

        assert all(o.line_items == [] for o in account.opportunities)

    def test_line_item_extra(self):
        item = LineItem.model_validate({"UnitPrice": 1.0, "Description": "x"})

        assert item.unit_price == 1.0
        assert item.extra == {"Description": "x"}


class TestJsonExport:
    def test_account_to_json_uses_salesforce_names(self, account_row):
        payload = json.loads(account_to_json(Account.model_validate(account_row)))

        assert payload["Id"] == "0012500001Lhk3hAAB"
        assert payload["Foo__c"] == "custom value"
        assert payload["Contacts"][0]["FirstName"] == "Homer"
        assert payload["Opportunities"][0]["LineItems"] == []

    def test_export_writes_file(self, tmp_path, account_row):
        target = tmp_path / "out" / "account.json"

        written = export_account_json(account=Account.model_validate(account_row), output_path=target)

        assert written == target
        assert json.loads(target.read_text(encoding="utf-8"))["Name"] == "Acme Corp"
