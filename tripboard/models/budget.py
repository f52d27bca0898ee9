"""Budget summary model."""

from pydantic import BaseModel


class BudgetSummary(BaseModel):
    """Trip spend versus the user's budget goal."""

    total_cost: float
    budget: float
    percentage: int | None  # None when no positive budget is set
    remaining: float
    over_budget: bool
