"""Caller extraction for collaborator endpoints.

The bearer token is not verified here: Keycloak verifies it when the
service asks the entitlement endpoint about the space. The subject claim
is read only to attribute log events to a caller.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2AuthorizationCodeBearer
from jose import JWTError, jwt

from collaboration.application.value_objects import RequestContext
from infrastructure.settings import get_keycloak_settings


def _create_oauth2_scheme() -> OAuth2AuthorizationCodeBearer:
    """Create OAuth2 security scheme for Swagger UI integration.

    Uses the realm URL to configure authorization code flow endpoints.
    """
    realm_url = get_keycloak_settings().realm_url

    return OAuth2AuthorizationCodeBearer(
        authorizationUrl=f"{realm_url}/protocol/openid-connect/auth",
        tokenUrl=f"{realm_url}/protocol/openid-connect/token",
        refreshUrl=f"{realm_url}/protocol/openid-connect/token",
        scopes={"openid": "OpenID Connect"},
        auto_error=False,
    )


oauth2_scheme = _create_oauth2_scheme()


def get_request_context(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> RequestContext:
    """Build the request context from the Authorization header.

    Raises:
        HTTPException: 401 if no bearer token was sent
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        identity_id = jwt.get_unverified_claims(token).get("sub")
    except JWTError:
        identity_id = None

    return RequestContext(access_token=token, identity_id=identity_id)
