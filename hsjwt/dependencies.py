"""FastAPI integration: resolve the caller's claims from a bearer header."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import Depends, Header, HTTPException, status

from .auth import authenticate, parse_authorization_header
from .config import Settings, get_settings
from .errors import TokenError


def get_current_claims(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    try:
        token = parse_authorization_header(authorization)
        return authenticate(token, settings=settings)
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
