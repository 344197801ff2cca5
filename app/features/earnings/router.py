# Earnings Feature - Router

from fastapi import APIRouter, Depends, Path, Query
from typing import Optional
from app.features.auth.models import User
from app.features.auth.dependencies import get_current_user
from app.features.earnings.schemas import MonthlyEarningsData
from app.features.earnings.service import EarningsService
from app.shared.schemas import BaseResponse
from app.shared.validators import DATE_PATTERN


router = APIRouter(prefix="/earnings", tags=["Earnings"])


@router.get("/monthly", response_model=BaseResponse)
async def get_monthly_earnings(
    start_date: Optional[str] = Query(None, alias="startDate", pattern=DATE_PATTERN),
    end_date: Optional[str] = Query(None, alias="endDate", pattern=DATE_PATTERN),
    current_user: User = Depends(get_current_user)
):
    """
    Earnings per calendar month, newest first.

    Only completed sessions with an amount above 0 count. Months without
    any are omitted.
    """
    rows = await EarningsService.get_monthly_earnings(str(current_user.id), start_date, end_date)
    return BaseResponse(data=MonthlyEarningsData(monthly_earnings=rows))


@router.get("/monthly/{year}/{month}", response_model=BaseResponse)
async def get_month_detail(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    current_user: User = Depends(get_current_user)
):
    """Every earning session of one month with its total and count."""
    detail = await EarningsService.get_month_detail(str(current_user.id), year, month)
    return BaseResponse(data=detail)
