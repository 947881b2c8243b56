from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from .exceptions import ERROR_RESPONSES

from ..core.dependencies import (
    get_account_service,
    get_customer_service,
    get_deposito_type_service,
    get_transaction_service,
)
from ..models import (
    AccountCreate,
    AccountDetailResponse,
    AccountResponse,
    ApiResponse,
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    DepositoTypeCreate,
    DepositoTypeResponse,
    DepositoTypeUpdate,
    MoneyMovementRequest,
    TransactionDetailResponse,
    TransactionResponse,
)
from ..services import (
    AccountService,
    CustomerService,
    DepositoTypeService,
    TransactionService,
)


customer_router = APIRouter(prefix="/customers", tags=["customers"], responses=ERROR_RESPONSES)

@customer_router.get("", response_model=ApiResponse[list[CustomerResponse]])
def list_customers(
    search: Optional[str] = None,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[list[CustomerResponse]]:
    return ApiResponse(data=service.list_customers(search))

@customer_router.get("/{customer_id}", response_model=ApiResponse[CustomerResponse])
def get_customer(
    customer_id: UUID,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[CustomerResponse]:
    return ApiResponse(data=service.get_customer(customer_id))

@customer_router.post(
    "", response_model=ApiResponse[CustomerResponse], status_code=status.HTTP_201_CREATED
)
def create_customer(
    payload: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[CustomerResponse]:
    return ApiResponse(
        data=service.create_customer(payload), message="Customer created successfully"
    )

@customer_router.put("/{customer_id}", response_model=ApiResponse[CustomerResponse])
def update_customer(
    customer_id: UUID,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[CustomerResponse]:
    return ApiResponse(
        data=service.update_customer(customer_id, payload),
        message="Customer updated successfully",
    )

@customer_router.delete("/{customer_id}", response_model=ApiResponse[None])
def delete_customer(
    customer_id: UUID,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[None]:
    service.delete_customer(customer_id)
    return ApiResponse(message="Customer deleted successfully")


deposito_router = APIRouter(prefix="/deposito-types", tags=["deposito types"], responses=ERROR_RESPONSES)

@deposito_router.get("", response_model=ApiResponse[list[DepositoTypeResponse]])
def list_deposito_types(
    service: DepositoTypeService = Depends(get_deposito_type_service),
) -> ApiResponse[list[DepositoTypeResponse]]:
    return ApiResponse(data=service.list_deposito_types())

@deposito_router.get("/{deposito_type_id}", response_model=ApiResponse[DepositoTypeResponse])
def get_deposito_type(
    deposito_type_id: UUID,
    service: DepositoTypeService = Depends(get_deposito_type_service),
) -> ApiResponse[DepositoTypeResponse]:
    return ApiResponse(data=service.get_deposito_type(deposito_type_id))

@deposito_router.post(
    "", response_model=ApiResponse[DepositoTypeResponse], status_code=status.HTTP_201_CREATED
)
def create_deposito_type(
    payload: DepositoTypeCreate,
    service: DepositoTypeService = Depends(get_deposito_type_service),
) -> ApiResponse[DepositoTypeResponse]:
    return ApiResponse(
        data=service.create_deposito_type(payload),
        message="Deposito type created successfully",
    )

@deposito_router.put("/{deposito_type_id}", response_model=ApiResponse[DepositoTypeResponse])
def update_deposito_type(
    deposito_type_id: UUID,
    payload: DepositoTypeUpdate,
    service: DepositoTypeService = Depends(get_deposito_type_service),
) -> ApiResponse[DepositoTypeResponse]:
    return ApiResponse(
        data=service.update_deposito_type(deposito_type_id, payload),
        message="Deposito type updated successfully",
    )

@deposito_router.delete("/{deposito_type_id}", response_model=ApiResponse[None])
def delete_deposito_type(
    deposito_type_id: UUID,
    service: DepositoTypeService = Depends(get_deposito_type_service),
) -> ApiResponse[None]:
    service.delete_deposito_type(deposito_type_id)
    return ApiResponse(message="Deposito type deleted successfully")


account_router = APIRouter(prefix="/accounts", tags=["accounts"], responses=ERROR_RESPONSES)

@account_router.get("", response_model=ApiResponse[list[AccountDetailResponse]])
def list_accounts(
    customer_id: Optional[UUID] = None,
    service: AccountService = Depends(get_account_service),
) -> ApiResponse[list[AccountDetailResponse]]:
    return ApiResponse(data=service.list_accounts(customer_id))

@account_router.get("/{account_id}", response_model=ApiResponse[AccountDetailResponse])
def get_account(
    account_id: UUID,
    service: AccountService = Depends(get_account_service),
) -> ApiResponse[AccountDetailResponse]:
    return ApiResponse(data=service.get_account(account_id))

@account_router.post(
    "", response_model=ApiResponse[AccountResponse], status_code=status.HTTP_201_CREATED
)
def create_account(
    payload: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> ApiResponse[AccountResponse]:
    return ApiResponse(data=service.create_account(payload), message="Account created successfully")

@account_router.delete("/{account_id}", response_model=ApiResponse[None])
def delete_account(
    account_id: UUID,
    service: AccountService = Depends(get_account_service),
) -> ApiResponse[None]:
    service.delete_account(account_id)
    return ApiResponse(message="Account deleted successfully")


transaction_router = APIRouter(prefix="/transactions", tags=["transactions"], responses=ERROR_RESPONSES)

@transaction_router.get("", response_model=ApiResponse[list[TransactionDetailResponse]])
def list_transactions(
    account_id: Optional[UUID] = None,
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[list[TransactionDetailResponse]]:
    return ApiResponse(data=service.list_transactions(account_id))

@transaction_router.post(
    "/deposit",
    response_model=ApiResponse[TransactionResponse],
    status_code=status.HTTP_201_CREATED,
)
def process_deposit(
    payload: MoneyMovementRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionResponse]:
    return ApiResponse(
        data=service.process_deposit(payload), message="Deposit processed successfully"
    )

@transaction_router.post(
    "/withdrawal",
    response_model=ApiResponse[TransactionResponse],
    status_code=status.HTTP_201_CREATED,
)
def process_withdrawal(
    payload: MoneyMovementRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionResponse]:
    return ApiResponse(
        data=service.process_withdrawal(payload), message="Withdrawal processed successfully"
    )

@transaction_router.get("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
def get_transaction(
    transaction_id: UUID,
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionResponse]:
    return ApiResponse(data=service.get_transaction(transaction_id))


router = APIRouter()
router.include_router(customer_router)
router.include_router(deposito_router)
router.include_router(account_router)
router.include_router(transaction_router)

__all__ = ["router"]
