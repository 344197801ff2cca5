# Earnings Feature - Schemas

from typing import List
from app.features.sessions.schemas import SessionResponse
from app.shared.schemas import CamelModel


class MonthlyEarnings(CamelModel):
    """Totals for one calendar month."""
    year: int
    month: int
    total_earnings: float
    session_count: int


class MonthlyEarningsData(CamelModel):
    monthly_earnings: List[MonthlyEarnings]


class MonthDetailData(CamelModel):
    """Every earning session of one month plus its totals."""
    year: int
    month: int
    total_earnings: float
    session_count: int
    sessions: List[SessionResponse]
