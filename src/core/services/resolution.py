"""Account id resolution cascade.

Given the raw string typed by the user, try the lookup strategies in a fixed
priority order and return the first account id found:

1. id phase: the string looks like a Salesforce id of a known kind.
2. email phase: the string contains "@" and matches a contact email.
3. configured phase: each `search` field of the configuration, in order.

`NotFoundError` from a strategy means "try the next one". Any other backend
error ends the cascade immediately and propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Sequence

from core.domain.entities import EntityKind, kind_from_id
from core.domain.fields import QualifiedField
from core.errors import NotFoundError
from core.interfaces.backend import AccountBackend

logger = logging.getLogger(__name__)

EMAIL_FIELD = EntityKind.CONTACT.field("email")


async def _attempt(backend: AccountBackend, field: QualifiedField, value: str) -> str | None:
    try:
        account_id = await backend.get_account_id_by_field(field, value)
    except NotFoundError:
        logger.debug("no match for %s = %r", field, value)
        return None
    logger.info("resolved account %s via %s", account_id, field)
    return account_id


async def resolve_from_id(backend: AccountBackend, query: str) -> str | None:
    kind = kind_from_id(query)
    if kind is None:
        # Clasificación barata: sin forma de id no hay llamada de red.
        return None
    return await _attempt(backend, kind.field("Id"), query)


async def resolve_from_search_fields(
    backend: AccountBackend,
    query: str,
    search_fields: Sequence[QualifiedField],
) -> str | None:
    if "@" in query:
        account_id = await _attempt(backend, EMAIL_FIELD, query)
        if account_id is not None:
            return account_id

    for field in search_fields:
        account_id = await _attempt(backend, field, query)
        if account_id is not None:
            return account_id
    return None


async def resolve_account_id(
    backend: AccountBackend,
    query: str,
    search_fields: Sequence[QualifiedField],
) -> str | None:
    """Run the cascade and return an account id, or None when nothing matched."""

    account_id = await resolve_from_id(backend, query)
    if account_id is not None:
        return account_id
    return await resolve_from_search_fields(backend, query, search_fields)
