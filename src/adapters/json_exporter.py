"""Exportación JSON de la cuenta.

Por qué JSON:
- Interoperabilidad con `jq` y otros scripts.
- Conserva tal cual las columnas extra (nombres de Salesforce en PascalCase).
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import Account


def account_to_json(account: Account) -> str:
    """Serializa `Account` a JSON UTF-8 con formato estable."""

    payload = account.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_account_json(*, account: Account, output_path: Path) -> Path:
    """Exporta `Account` a un fichero JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(account_to_json(account) + "\n", encoding="utf-8")
    return output_path
