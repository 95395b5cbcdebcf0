from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from dependency_injector.wiring import inject, Provide

from src.application.identity import current_user_id
from src.commons.exceptions import AccountNotFoundError, StrategyNotFoundError
from src.domain.strategies.dtos.strategy_dto import (
    StrategyCreateDTO,
    StrategyDTO,
    StrategyUpdateDTO,
)
from src.domain.strategies.strategies_module import StrategiesModule
from src.domain.strategies.strategies_service import StrategiesService


router = APIRouter(prefix="/strategies", tags=["strategies"])


@router.get("", summary="List strategies", response_model=List[StrategyDTO])
@inject
async def list_strategies(
    account_id: Optional[str] = None,
    user_id: str = Depends(current_user_id),
    service: StrategiesService = Depends(Provide[StrategiesModule.strategies_service]),
) -> List[StrategyDTO]:
    return await service.list_strategies(user_id, account_id=account_id)


@router.get("/{strategy_id}", summary="Get one strategy", response_model=StrategyDTO)
@inject
async def get_strategy(
    strategy_id: str,
    user_id: str = Depends(current_user_id),
    service: StrategiesService = Depends(Provide[StrategiesModule.strategies_service]),
) -> StrategyDTO:
    try:
        return await service.get_strategy(user_id, strategy_id)
    except StrategyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", summary="Create a strategy", status_code=201, response_model=StrategyDTO)
@inject
async def create_strategy(
    payload: StrategyCreateDTO,
    user_id: str = Depends(current_user_id),
    service: StrategiesService = Depends(Provide[StrategiesModule.strategies_service]),
) -> StrategyDTO:
    try:
        return await service.create_strategy(user_id, payload)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{strategy_id}", summary="Update a strategy", response_model=StrategyDTO)
@inject
async def update_strategy(
    strategy_id: str,
    payload: StrategyUpdateDTO,
    user_id: str = Depends(current_user_id),
    service: StrategiesService = Depends(Provide[StrategiesModule.strategies_service]),
) -> StrategyDTO:
    try:
        return await service.update_strategy(user_id, strategy_id, payload)
    except (StrategyNotFoundError, AccountNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{strategy_id}", summary="Delete a strategy", status_code=204)
@inject
async def delete_strategy(
    strategy_id: str,
    user_id: str = Depends(current_user_id),
    service: StrategiesService = Depends(Provide[StrategiesModule.strategies_service]),
) -> Response:
    try:
        await service.delete_strategy(user_id, strategy_id)
    except StrategyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
