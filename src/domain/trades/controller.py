from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from dependency_injector.wiring import inject, Provide

from src.application.identity import current_user_id
from src.domain.trades.dtos.trade_dto import (
    TradeCreateDTO,
    TradeDTO,
    TradeFilterDTO,
    TradeUpdateDTO,
)
from src.commons.exceptions import AccountNotFoundError, TradeNotFoundError
from src.domain.trades.trades_module import TradesModule
from src.domain.trades.trades_service import TradesService


router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("", summary="List trades", response_model=List[TradeDTO])
@inject
async def list_trades(
    filters: TradeFilterDTO = Depends(),
    user_id: str = Depends(current_user_id),
    service: TradesService = Depends(Provide[TradesModule.trades_service]),
) -> List[TradeDTO]:
    return await service.list_trades(user_id, filters)


@router.get("/export", summary="Export filtered trades as CSV")
@inject
async def export_trades(
    filters: TradeFilterDTO = Depends(),
    user_id: str = Depends(current_user_id),
    service: TradesService = Depends(Provide[TradesModule.trades_service]),
) -> Response:
    content = await service.export_csv(user_id, filters)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=trades.csv"},
    )


@router.get("/{trade_id}", summary="Get one trade", response_model=TradeDTO)
@inject
async def get_trade(
    trade_id: str,
    user_id: str = Depends(current_user_id),
    service: TradesService = Depends(Provide[TradesModule.trades_service]),
) -> TradeDTO:
    try:
        return await service.get_trade(user_id, trade_id)
    except TradeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", summary="Create a trade", status_code=201, response_model=TradeDTO)
@inject
async def create_trade(
    payload: TradeCreateDTO,
    user_id: str = Depends(current_user_id),
    service: TradesService = Depends(Provide[TradesModule.trades_service]),
) -> TradeDTO:
    try:
        return await service.create_trade(user_id, payload)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{trade_id}", summary="Update a trade", response_model=TradeDTO)
@inject
async def update_trade(
    trade_id: str,
    payload: TradeUpdateDTO,
    user_id: str = Depends(current_user_id),
    service: TradesService = Depends(Provide[TradesModule.trades_service]),
) -> TradeDTO:
    try:
        return await service.update_trade(user_id, trade_id, payload)
    except (TradeNotFoundError, AccountNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{trade_id}", summary="Delete a trade", status_code=204)
@inject
async def delete_trade(
    trade_id: str,
    user_id: str = Depends(current_user_id),
    service: TradesService = Depends(Provide[TradesModule.trades_service]),
) -> Response:
    try:
        await service.delete_trade(user_id, trade_id)
    except TradeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.delete("", summary="Delete all trades of the user")
@inject
async def delete_all_trades(
    user_id: str = Depends(current_user_id),
    service: TradesService = Depends(Provide[TradesModule.trades_service]),
) -> dict:
    deleted = await service.delete_all_trades(user_id)
    return {"deleted": deleted}
