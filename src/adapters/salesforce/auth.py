"""Login en Salesforce (OAuth2 username-password flow).

Endpoint:
- `POST <login_url>/services/oauth2/token`

Devuelve el token de acceso y la `instance_url` contra la que se hacen las
consultas. Un fallo aquí es terminal: no hay reintentos.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from core.config import Credentials
from core.errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/services/oauth2/token"


class SalesforceSession(BaseModel):
    """Sesión autenticada devuelta por el endpoint de token."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str = Field(..., min_length=1, repr=False)
    instance_url: str = Field(..., min_length=1)


def _describe_failure(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        description = payload.get("error_description")
        if description:
            return f"{payload['error']}: {description}"
        return str(payload["error"])
    return f"HTTP {response.status_code}"


async def login(
    http: httpx.AsyncClient,
    credentials: Credentials,
    *,
    login_url: str,
) -> SalesforceSession:
    url = f"{login_url.rstrip('/')}{TOKEN_PATH}"
    data = {
        "grant_type": "password",
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "username": credentials.username,
        "password": credentials.password,
    }
    logger.debug("logging in as %s at %s", credentials.username, url)

    try:
        response = await http.post(url, data=data)
    except httpx.HTTPError as exc:
        raise AuthenticationError(f"cannot reach {url}: {exc}") from exc

    if response.status_code != 200:
        raise AuthenticationError(f"authentication failed: {_describe_failure(response)}")

    try:
        session = SalesforceSession.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise AuthenticationError(f"unexpected login response: {exc}") from exc

    logger.info("logged in, instance %s", session.instance_url)
    return session
