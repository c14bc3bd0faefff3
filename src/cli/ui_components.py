"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El Core entrega un único `Account`; aquí se decide cómo se ve.

Se usa `Text` (no markup) para los valores: vienen de Salesforce y pueden
contener corchetes.
"""

from __future__ import annotations

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import Account, Address, Asset, Contact, LineItem, Opportunity

MISSING = "<missing>"

_FIELD_STYLE = "cyan"
_VALUE_STYLE = "green"
_DATE_STYLE = "yellow"


def format_date(value: str | None) -> str:
    if not value:
        return ""
    return value.replace(".000+0000", "").replace("T", " ")


def format_number(label: str, value: float | None) -> str:
    if value is None:
        return f"<missing {label}>"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _new_table(title: str, title_style: str, record_id: str | None) -> Table:
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column(Text(title, style=title_style), no_wrap=True)
    table.add_column(Text(record_id or "", style="bold white"))
    return table


def _add_row(table: Table, label: str, value: Any, style: str = _VALUE_STYLE) -> None:
    cell = value if isinstance(value, (Table, Text)) else Text(str(value), style=style)
    table.add_row(Text(label, style=_FIELD_STYLE), cell)


def _add_dates(table: Table, created: str | None, modified: str | None) -> None:
    _add_row(table, "Created", format_date(created), _DATE_STYLE)
    _add_row(table, "Modified", format_date(modified), _DATE_STYLE)


def _add_extra(table: Table, extra: dict[str, Any]) -> None:
    for key in sorted(extra):
        if key == "attributes":
            continue
        value = extra[key]
        if isinstance(value, str):
            cell = Text(value, style=_VALUE_STYLE)
        else:
            cell = Text(json.dumps(value, ensure_ascii=False))
        table.add_row(Text(key, style="blue"), cell)


def build_address_table(address: Address) -> Table:
    table = Table(box=None, show_header=False, padding=(0, 1, 0, 0))
    for label, value in (
        ("Street:", address.street),
        ("City:", address.city),
        ("State:", address.state),
        ("Country:", address.country),
        ("Zip:", address.postal_code),
    ):
        if value is not None:
            table.add_row(label, Text(value))
    return table


def build_account_table(account: Account) -> Table:
    table = _new_table("Account", "bold white", account.id)
    _add_row(table, "Name", account.name or MISSING)
    _add_row(table, "Number", account.account_number or MISSING)
    _add_row(table, "Address", build_address_table(account.billing_address))
    _add_dates(table, account.created_date, account.last_modified_date)
    _add_extra(table, account.extra)
    return table


def build_contact_table(num: int, contact: Contact) -> Table:
    table = _new_table(f"Contact #{num}", "magenta", contact.id)
    _add_row(table, "Email", contact.email or MISSING)
    _add_row(table, "First Name", contact.first_name or MISSING)
    _add_row(table, "Last Name", contact.last_name or MISSING)
    _add_dates(table, contact.created_date, contact.last_modified_date)
    _add_extra(table, contact.extra)
    return table


def build_asset_table(num: int, asset: Asset) -> Table:
    table = _new_table(f"Asset #{num}", "bright_yellow", asset.id)
    _add_row(table, "Name", asset.name or MISSING)
    product = asset.product
    if product is not None:
        _add_row(table, "Product", f"{product.product_code or MISSING}: {product.name or MISSING}")
    else:
        _add_row(table, "Product", MISSING, "red")
    _add_row(
        table,
        "Price",
        f"{format_number('price', asset.price)} x {format_number('quantity', asset.quantity)}",
        "white",
    )
    if asset.status:
        _add_row(table, "Status", asset.status, "bold green")
    else:
        _add_row(table, "Status", MISSING, "red")
    for label, value in (
        ("Purchase Date", asset.purchase_date),
        ("Install Date", asset.install_date),
        ("Usage End Date", asset.usage_end_date),
    ):
        _add_row(table, label, format_date(value) or MISSING, _DATE_STYLE)
    _add_row(table, "Contact", asset.contact_id or MISSING)
    _add_dates(table, asset.created_date, asset.last_modified_date)
    _add_extra(table, asset.extra)
    return table


def opportunity_status(opportunity: Opportunity) -> tuple[str, str]:
    """Return the human status and its style."""

    if opportunity.is_closed:
        if opportunity.is_won:
            return "Closed Won", "bold bright_green"
        return "Closed Lost", "bold bright_red"
    return "Pending", "yellow"


def build_line_item_table(item: LineItem, default_currency: str) -> Table:
    table = Table(box=box.SIMPLE, show_header=False)
    currency = item.currency_iso_code or default_currency
    price_line = (
        f"{format_number('unit price', item.unit_price)} {currency} x "
        f"{format_number('quantity', item.quantity)} = "
        f"{format_number('total price', item.total_price)} {currency}"
    )
    table.add_row("price", Text(price_line))
    table.add_row("service date", Text(format_date(item.service_date) or MISSING, style=_DATE_STYLE))
    _add_extra(table, item.extra)
    return table


def build_opportunity_table(num: int, opportunity: Opportunity) -> Table:
    table = _new_table(f"Opportunity #{num}", "bright_green", opportunity.id)
    _add_row(table, "Name", opportunity.name or MISSING)
    record_type = opportunity.record_type.name if opportunity.record_type else None
    _add_row(table, "Record Type", record_type or MISSING)
    currency = opportunity.currency_iso_code or "<missing currency>"
    _add_row(table, "Amount", f"{format_number('amount', opportunity.amount)} {currency}", "white")

    status, style = opportunity_status(opportunity)
    _add_row(table, "Status", status, style)
    stage_name = opportunity.stage_name or MISSING
    if stage_name != status:
        _add_row(table, "Stage Name", stage_name)
    if opportunity.is_closed:
        _add_row(table, "Close Date", format_date(opportunity.close_date) or MISSING, _DATE_STYLE)
    _add_row(table, "Lead Source", opportunity.lead_source or MISSING)
    _add_dates(table, opportunity.created_date, opportunity.last_modified_date)
    _add_extra(table, opportunity.extra)

    for item_num, item in enumerate(opportunity.line_items, start=1):
        table.add_row(f"Line Item #{item_num}", build_line_item_table(item, currency))
    return table


def print_account(console: Console, account: Account) -> None:
    """Imprime la cuenta y todos sus registros relacionados."""

    console.print(build_account_table(account))
    for num, contact in enumerate(account.contacts, start=1):
        console.print(build_contact_table(num, contact))
    for num, asset in enumerate(account.assets, start=1):
        console.print(build_asset_table(num, asset))
    for num, opportunity in enumerate(account.opportunities, start=1):
        console.print(build_opportunity_table(num, opportunity))
