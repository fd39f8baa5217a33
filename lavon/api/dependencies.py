from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from ..client import SalesApiClient
from ..config import Settings, get_settings
from ..schemas.user import RemoteUser

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{str(get_settings().api_base_url).rstrip('/')}/login",
    description="Sign in against the sales API `/login` endpoint and forward its bearer token.",
)

SettingsDep = Annotated[Settings, Depends(get_settings)]
TokenDep = Annotated[str, Depends(oauth2_scheme)]


def _unauthorised(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def remote_error(exc: httpx.HTTPError) -> HTTPException:
    """Translate a failed call to the sales API into a response for our caller."""
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        if code == status.HTTP_401_UNAUTHORIZED:
            return _unauthorised("Sales API rejected the access token")
        if code == status.HTTP_403_FORBIDDEN:
            return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
        if code == status.HTTP_404_NOT_FOUND:
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
        logger.warning("Sales API answered %s for %s", code, exc.request.url)
    else:
        logger.exception("Sales API request failed")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Sales API unavailable")


async def get_api_client(token: TokenDep, settings: SettingsDep) -> AsyncIterator[SalesApiClient]:
    """Per-request client that forwards the caller's token to the sales API."""
    client = SalesApiClient(
        str(settings.api_base_url),
        token=token,
        timeout=settings.api_timeout_seconds,
    )
    try:
        yield client
    finally:
        await client.aclose()


ApiClientDep = Annotated[SalesApiClient, Depends(get_api_client)]


async def get_current_user(client: ApiClientDep) -> RemoteUser:
    try:
        payload = await client.get_current_user()
    except httpx.HTTPError as exc:
        raise remote_error(exc) from exc

    try:
        return RemoteUser.model_validate(payload)
    except ValueError as exc:
        raise _unauthorised("Sales API returned an unreadable user profile") from exc


CurrentUser = Annotated[RemoteUser, Depends(get_current_user)]
