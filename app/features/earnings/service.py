# Earnings Feature - Service

from typing import List, Optional
from app.core.logging import logger
from app.features.sessions.models import Session
from app.features.sessions.service import SessionService
from app.features.earnings.aggregator import (
    DETAIL_SORT,
    build_monthly_earnings_pipeline,
    monthly_detail_filter,
    total_earnings,
)
from app.features.earnings.schemas import MonthlyEarnings, MonthDetailData


class EarningsService:
    """Service class for earnings reports."""

    @staticmethod
    async def get_monthly_earnings(
        user_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[MonthlyEarnings]:
        pipeline = build_monthly_earnings_pipeline(user_id, start_date, end_date)
        rows = await Session.aggregate(pipeline).to_list()
        logger.debug(f"Monthly earnings for user {user_id}: {len(rows)} months")
        return [MonthlyEarnings.model_validate(row) for row in rows]

    @staticmethod
    async def get_month_detail(user_id: str, year: int, month: int) -> MonthDetailData:
        """Earning sessions of one month in chronological order, with totals."""
        sessions = await Session.find(
            monthly_detail_filter(user_id, year, month)
        ).sort(DETAIL_SORT).to_list()

        return MonthDetailData(
            year=year,
            month=month,
            total_earnings=total_earnings(s.amount for s in sessions),
            session_count=len(sessions),
            sessions=[SessionService.session_to_response(s) for s in sessions],
        )
