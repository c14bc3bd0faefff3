from __future__ import annotations

import pytest
from rich.console import Console

from cli.ui_components import (
    build_asset_table,
    build_line_item_table,
    build_opportunity_table,
    format_date,
    format_number,
    opportunity_status,
    print_account,
)
from core.domain.models import Account, Asset, LineItem, Opportunity


def _render(renderable) -> str:
    console = Console(record=True, width=160, color_system=None)
    console.print(renderable)
    return console.export_text()


def _opportunity(**values) -> Opportunity:
    return Opportunity.model_validate({"Id": "0062500000AAAAAAA1", **values})


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2021-07-12T16:40:00.000+0000", "2021-07-12 16:40:00"),
            ("2021-01-31", "2021-01-31"),
            (None, ""),
        ],
    )
    def test_format_date(self, value, expected):
        assert format_date(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(2.0, "2"), (1500.5, "1500.5"), (None, "<missing price>")],
    )
    def test_format_number(self, value, expected):
        assert format_number("price", value) == expected


class TestOpportunityStatus:
    @pytest.mark.parametrize(
        "closed, won, expected",
        [(True, True, "Closed Won"), (True, False, "Closed Lost"), (False, False, "Pending")],
    )
    def test_status(self, closed, won, expected):
        status, _style = opportunity_status(_opportunity(IsClosed=closed, IsWon=won))

        assert status == expected

    def test_stage_name_hidden_when_equal_to_status(self):
        text = _render(build_opportunity_table(1, _opportunity(IsClosed=True, IsWon=True, StageName="Closed Won")))

        assert "Stage Name" not in text
        assert "Close Date" in text

    def test_pending_shows_stage_and_no_close_date(self):
        text = _render(build_opportunity_table(1, _opportunity(StageName="Prospecting")))

        assert "Prospecting" in text
        assert "Close Date" not in text
        assert "<missing amount> <missing currency>" in text

    def test_line_items_use_opportunity_currency(self):
        opportunity = _opportunity(Amount=10.0, CurrencyIsoCode="EUR")
        opportunity.line_items = [LineItem.model_validate({"UnitPrice": 5.0, "Quantity": 2.0, "TotalPrice": 10.0})]

        text = _render(build_opportunity_table(3, opportunity))

        assert "Opportunity #3" in text
        assert "Line Item #1" in text
        assert "5 EUR x 2 = 10 EUR" in text


class TestTables:
    def test_asset_without_product(self):
        text = _render(build_asset_table(1, Asset.model_validate({"Id": "02i", "Price": 3.5, "Quantity": 1})))

        assert "Asset #1" in text
        assert "3.5 x 1" in text
        assert "<missing>" in text

    def test_line_item_extra_columns(self):
        item = LineItem.model_validate({"ServiceDate": None, "Description": "[bold]raw[/bold]"})

        text = _render(build_line_item_table(item, "USD"))

        assert "[bold]raw[/bold]" in text
        assert "<missing unit price> USD" in text

    def test_print_account(self, account_row):
        console = Console(record=True, width=160, color_system=None)

        print_account(console, Account.model_validate(account_row))

        text = console.export_text()
        assert "Acme Corp" in text
        assert "742 Evergreen Terrace" in text
        assert "Foo__c" in text
        assert "attributes" not in text
        assert "Birthdate" in text
        assert text.index("Contact #1") < text.index("Asset #1") < text.index("Opportunity #1")
