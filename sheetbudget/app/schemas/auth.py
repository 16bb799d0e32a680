from pydantic import BaseModel, field_validator
from typing import Union

from sheetbudget.app.models.models import Role

class PinVerify(BaseModel):
    pin: Union[str, int]

    @field_validator("pin")
    @classmethod
    def pin_as_text(cls, value) -> str:
        return str(value)

class PinVerifyResponse(BaseModel):
    success: bool
    role: Role
