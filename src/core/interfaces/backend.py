"""Contrato del backend de cuentas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El cliente real (Salesforce REST) y los dobles de test son intercambiables.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.fields import QualifiedField
from core.domain.models import Account


@runtime_checkable
class AccountBackend(Protocol):
    """Minimal capability set used by the finder.

    Reglas de diseño:
    - Ambas operaciones son asíncronas porque hacen I/O (HTTP).
    - `NotFoundError` indica cero filas; cualquier otro fallo es `BackendError`.
    """

    async def get_account_id_by_field(self, field: QualifiedField, value: str) -> str:
        """Return the id of the account matching `field = value`."""

        ...

    async def get_account(
        self,
        account_id: str,
        additional_fields: Sequence[QualifiedField],
    ) -> Account:
        """Return the account with its contacts, assets and opportunities."""

        ...
