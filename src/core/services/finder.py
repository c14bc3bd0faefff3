"""Búsqueda de cuentas de punta a punta.

Orquesta el cascade de resolución y la lectura hidratada de la cuenta. Un
`NotFoundError` en la lectura final se reporta igual que "no hubo match":
para el usuario ambos casos son `nothing found for query "<q>"`.
"""

from __future__ import annotations

import logging

from core.config import SearchConfig
from core.domain.models import Account
from core.errors import NotFoundError, NothingFoundError
from core.interfaces.backend import AccountBackend
from core.services.resolution import resolve_account_id

logger = logging.getLogger(__name__)


async def find_account(backend: AccountBackend, query: str, config: SearchConfig) -> Account:
    """Resolve `query` to an account id and fetch the full account."""

    account_id = await resolve_account_id(backend, query, config.search_fields)
    if account_id is None:
        raise NothingFoundError(query)

    try:
        account = await backend.get_account(account_id, config.additional_fields)
    except NotFoundError as exc:
        logger.info("account %s vanished after resolution", account_id)
        raise NothingFoundError(query) from exc

    logger.info(
        "account %s: %d contacts, %d assets, %d opportunities",
        account.id,
        len(account.contacts),
        len(account.assets),
        len(account.opportunities),
    )
    return account
