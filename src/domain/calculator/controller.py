from fastapi import APIRouter, Depends, HTTPException
from dependency_injector.wiring import inject, Provide

from src.application.identity import current_user_id
from src.commons.exceptions import AccountNotFoundError
from src.domain.calculator.calculator_module import CalculatorModule
from src.domain.calculator.calculator_service import CalculatorService
from src.domain.calculator.dtos.position_size_dto import (
    PositionSizeRequest,
    PositionSizeResult,
)


router = APIRouter(prefix="/calculator", tags=["calculator"])


@router.post("/position-size", summary="Risk-based position size", response_model=PositionSizeResult)
@inject
async def position_size(
    request: PositionSizeRequest,
    user_id: str = Depends(current_user_id),
    service: CalculatorService = Depends(Provide[CalculatorModule.calculator_service]),
) -> PositionSizeResult:
    try:
        result = await service.position_size(user_id, request)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if result is None:
        raise HTTPException(status_code=422, detail="Inputs do not define a position size")
    return result
