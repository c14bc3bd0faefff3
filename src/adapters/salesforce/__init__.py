"""Backend Salesforce (API REST + SOQL).

Por qué un paquete:
- Agrupa login, construcción de SOQL y el cliente que implementa
  `core.interfaces.backend.AccountBackend`.
"""

from adapters.salesforce.auth import SalesforceSession, login
from adapters.salesforce.client import SalesforceClient, connect
from adapters.salesforce.query_builder import (
    AccountQueryBuilder,
    LookupQuery,
    build_lookup_query,
    quote_literal,
)

__all__ = [
	"AccountQueryBuilder",
	"LookupQuery",
	"SalesforceClient",
	"SalesforceSession",
	"build_lookup_query",
	"connect",
	"login",
	"quote_literal",
]
