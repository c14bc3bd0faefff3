"""Cliente de la API REST de Salesforce.

Implementa `core.interfaces.backend.AccountBackend`:
- `get_account_id_by_field`: una consulta plana (o ninguna para `Account.Id`).
- `get_account`: lectura compuesta + una consulta de líneas por Opportunity
  (1 + N requests, estrictamente secuenciales).

Todas las consultas pasan por `query()`, que traduce errores HTTP/transporte a
`BackendError` y resultados vacíos a `NotFoundError` (vía `_first`).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from adapters.salesforce.auth import SalesforceSession, login
from adapters.salesforce.query_builder import AccountQueryBuilder, build_lookup_query
from core.config import AppSettings
from core.domain.fields import QualifiedField
from core.domain.models import Account, LineItem
from core.errors import BackendError, NotFoundError

logger = logging.getLogger(__name__)


def _describe_failure(response: httpx.Response) -> str:
    # Los errores de la API llegan como [{"errorCode": "...", "message": "..."}].
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        code = payload[0].get("errorCode")
        message = payload[0].get("message")
        if code and message:
            return f"salesforce error: {code}: {message}"
        if message:
            return f"salesforce error: {message}"
    return f"salesforce error: HTTP {response.status_code}"


def _first(records: list[dict[str, Any]]) -> dict[str, Any]:
    if not records:
        raise NotFoundError()
    return records[0]


def _read_column(record: dict[str, Any], column: str) -> Any:
    """Read a possibly dotted column (`Opportunity.AccountId`) from a row."""

    value: Any = record
    for part in column.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class SalesforceClient:
    """Async Salesforce backend bound to an authenticated session."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        session: SalesforceSession,
        *,
        api_version: str = "v52.0",
    ) -> None:
        self._http = http
        self._session = session
        self._query_url = f"{session.instance_url.rstrip('/')}/services/data/{api_version}/query"

    async def query(self, soql: str) -> list[dict[str, Any]]:
        """Run a SOQL query and return its records."""

        logger.debug("SOQL: %s", soql)
        try:
            response = await self._http.get(
                self._query_url,
                params={"q": soql},
                headers={"Authorization": f"Bearer {self._session.access_token}"},
            )
        except httpx.HTTPError as exc:
            raise BackendError(f"salesforce error: {exc}") from exc

        if response.status_code != 200:
            raise BackendError(_describe_failure(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise BackendError(f"salesforce error: invalid JSON response: {exc}") from exc

        records = payload.get("records") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise BackendError("salesforce error: response without records")
        logger.debug("%d record(s)", len(records))
        return records

    async def get_account_id_by_field(self, field: QualifiedField, value: str) -> str:
        lookup = build_lookup_query(field, value)
        if lookup is None:
            return value

        record = _first(await self.query(lookup.soql))
        account_id = _read_column(record, lookup.id_column)
        if not account_id:
            # El hijo existe pero no cuelga de ninguna cuenta.
            raise NotFoundError()
        return str(account_id)

    async def get_account(
        self,
        account_id: str,
        additional_fields: Sequence[QualifiedField],
    ) -> Account:
        builder = AccountQueryBuilder(additional_fields)

        record = _first(await self.query(builder.account_query(account_id)))
        try:
            account = Account.model_validate(record)
        except ValidationError as exc:
            raise BackendError(f"salesforce error: unexpected account payload: {exc}") from exc

        # Segunda pasada: Salesforce solo permite un nivel de relaciones.
        for opportunity in account.opportunities:
            rows = await self.query(builder.line_items_query(opportunity.id))
            try:
                opportunity.line_items = [LineItem.model_validate(row) for row in rows]
            except ValidationError as exc:
                raise BackendError(f"salesforce error: unexpected line item payload: {exc}") from exc
        return account


@asynccontextmanager
async def connect(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[SalesforceClient]:
    """Log in and yield a `SalesforceClient`; the HTTP client closes on exit.

    Raises `ConfigError` if credentials are missing and `AuthenticationError`
    if the login fails.
    """

    credentials = settings.credentials()
    async with build_async_client(settings, transport=transport) as http:
        session = await login(http, credentials, login_url=settings.resolved_login_url)
        yield SalesforceClient(http, session, api_version=settings.api_version)
