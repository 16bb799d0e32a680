from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List
import re

from sheetbudget.app.models.models import Category
from sheetbudget.app.utils.dates import is_valid_date

# Control characters other than tab, newline and carriage return
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

class ExpenseCreate(BaseModel):
    date: str  # DD/MM/YYYY
    member_name: str
    category: Category
    description: str = ""
    amount: float = Field(gt=0, allow_inf_nan=False, strict=True)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        if not is_valid_date(value):
            raise ValueError("Invalid or missing date (Expected DD/MM/YYYY)")
        return value

    @field_validator("member_name")
    @classmethod
    def check_member_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Missing or empty memberName")
        return value

    @field_validator("member_name", "description")
    @classmethod
    def check_control_chars(cls, value: str) -> str:
        if CONTROL_CHARS.search(value):
            raise ValueError("Text fields must not contain control characters")
        return value

class ExpenseRecord(BaseModel):
    id: str
    date: str
    member_name: str
    category: str
    description: str = ""
    amount: float
    month: str
    created_at: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ExpenseListResponse(BaseModel):
    expenses: List[ExpenseRecord]
