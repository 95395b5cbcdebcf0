from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from dependency_injector.wiring import inject, Provide

from src.application.identity import current_user_id
from src.commons.exceptions import AccountNotFoundError
from src.domain.analytics.analytics_module import AnalyticsModule
from src.domain.analytics.analytics_service import AnalyticsService
from src.domain.analytics.dtos.dashboard_dto import DashboardDTO
from src.domain.analytics.dtos.trade_stats import (
    TradeMetricsDTO,
    TradeMetricsRequest,
    TradeStatsDisplay,
)


router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/dashboard", summary="KPIs and chart series", response_model=DashboardDTO)
@inject
async def get_dashboard(
    account_id: Optional[str] = None,
    range_name: Optional[str] = Query(default=None, alias="range"),
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    user_id: str = Depends(current_user_id),
    service: AnalyticsService = Depends(Provide[AnalyticsModule.analytics_service]),
) -> DashboardDTO:
    try:
        return await service.build_dashboard(
            user_id,
            account_id=account_id,
            range_name=range_name,
            start=start,
            end=end,
        )
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/stats", summary="Portfolio statistics only", response_model=TradeStatsDisplay)
@inject
async def get_stats(
    account_id: Optional[str] = None,
    range_name: Optional[str] = Query(default=None, alias="range"),
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    user_id: str = Depends(current_user_id),
    service: AnalyticsService = Depends(Provide[AnalyticsModule.analytics_service]),
) -> TradeStatsDisplay:
    try:
        return await service.get_stats(
            user_id,
            account_id=account_id,
            range_name=range_name,
            start=start,
            end=end,
        )
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/trade-metrics", summary="Preview P/L of an unsaved trade", response_model=TradeMetricsDTO)
@inject
async def preview_trade_metrics(
    request: TradeMetricsRequest,
    service: AnalyticsService = Depends(Provide[AnalyticsModule.analytics_service]),
) -> TradeMetricsDTO:
    return service.preview_trade_metrics(request)
