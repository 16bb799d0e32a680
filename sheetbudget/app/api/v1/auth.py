from fastapi import APIRouter, Depends, HTTPException, status

from sheetbudget.app.api.deps import resolve_role
from sheetbudget.app.config import Settings, get_settings
from sheetbudget.app.schemas.auth import PinVerify, PinVerifyResponse

router = APIRouter()

@router.post("/verify-pin", response_model=PinVerifyResponse)
def verify_pin_endpoint(
    payload: PinVerify,
    settings: Settings = Depends(get_settings)
):
    """
    Check a PIN and report which role it unlocks (family or admin)
    """
    role = resolve_role(payload.pin, settings)
    if role is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid PIN")
    return PinVerifyResponse(success=True, role=role)
