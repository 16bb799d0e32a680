from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sheetbudget.app.utils.dates import is_valid_month

class BudgetSet(BaseModel):
    month: str  # YYYY-MM
    total_budget: float = Field(ge=0, allow_inf_nan=False, strict=True)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("month")
    @classmethod
    def check_month(cls, value: str) -> str:
        if not is_valid_month(value):
            raise ValueError("Invalid or missing month (Expected YYYY-MM)")
        return value

class BudgetRecord(BaseModel):
    month: str
    total_budget: float = 0
    total_spent: float = 0
    remaining_budget: float = 0
    last_updated: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
