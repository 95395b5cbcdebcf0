from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from dependency_injector.wiring import inject, Provide

from src.application.identity import current_user_id
from src.commons.exceptions import AccountNotFoundError
from src.domain.accounts.accounts_module import AccountsModule
from src.domain.accounts.accounts_service import AccountsService
from src.domain.accounts.dtos.account_dto import AccountCreateDTO, AccountDTO, AccountUpdateDTO


router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", summary="List accounts", response_model=List[AccountDTO])
@inject
async def list_accounts(
    user_id: str = Depends(current_user_id),
    service: AccountsService = Depends(Provide[AccountsModule.accounts_service]),
) -> List[AccountDTO]:
    return await service.list_accounts(user_id)


@router.get("/{account_id}", summary="Get one account", response_model=AccountDTO)
@inject
async def get_account(
    account_id: str,
    user_id: str = Depends(current_user_id),
    service: AccountsService = Depends(Provide[AccountsModule.accounts_service]),
) -> AccountDTO:
    try:
        return await service.get_account(user_id, account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", summary="Create an account", status_code=201, response_model=AccountDTO)
@inject
async def create_account(
    payload: AccountCreateDTO,
    user_id: str = Depends(current_user_id),
    service: AccountsService = Depends(Provide[AccountsModule.accounts_service]),
) -> AccountDTO:
    return await service.create_account(user_id, payload)


@router.patch("/{account_id}", summary="Update an account", response_model=AccountDTO)
@inject
async def update_account(
    account_id: str,
    payload: AccountUpdateDTO,
    user_id: str = Depends(current_user_id),
    service: AccountsService = Depends(Provide[AccountsModule.accounts_service]),
) -> AccountDTO:
    try:
        return await service.update_account(user_id, account_id, payload)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{account_id}", summary="Delete an account and its trades", status_code=204)
@inject
async def delete_account(
    account_id: str,
    user_id: str = Depends(current_user_id),
    service: AccountsService = Depends(Provide[AccountsModule.accounts_service]),
) -> Response:
    try:
        await service.delete_account(user_id, account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
