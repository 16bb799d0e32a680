import hmac
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from sheetbudget.app.config import Settings, get_settings
from sheetbudget.app.models.models import Role

logger = logging.getLogger(__name__)

def pin_matches(supplied: Optional[str], expected: Optional[str]) -> bool:
    """Constant-time PIN comparison; an unconfigured PIN matches nothing."""
    if not supplied or not expected:
        return False
    return hmac.compare_digest(str(supplied).encode(), str(expected).encode())

def resolve_role(pin: str, settings: Settings) -> Optional[Role]:
    if pin_matches(pin, settings.family_pin):
        return Role.FAMILY
    if pin_matches(pin, settings.admin_pin):
        return Role.ADMIN
    return None

def require_family_pin(
    request: Request,
    x_family_pin: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings)
) -> Role:
    if not pin_matches(x_family_pin, settings.family_pin):
        logger.info("[Auth] Rejected family PIN for %s %s", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Invalid or missing Family PIN"
        )
    return Role.FAMILY

def require_admin_pin(
    _family: Role = Depends(require_family_pin),
    x_admin_pin: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings)
) -> Role:
    if not pin_matches(x_admin_pin, settings.admin_pin):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid or missing Admin PIN"
        )
    return Role.ADMIN
