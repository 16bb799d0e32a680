from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Dict, List

class DailyTotal(BaseModel):
    date: str
    amount: float

class DashboardResponse(BaseModel):
    month: str
    total_budget: float
    total_spent: float
    remaining_budget: float
    category_breakdown: Dict[str, float]
    member_breakdown: Dict[str, float]
    daily_totals: List[DailyTotal]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
