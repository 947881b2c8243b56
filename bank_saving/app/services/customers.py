from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlmodel import Session

from ..core.errors import CustomerNotFoundError, ResourceInUseError
from ..models import CustomerCreate, CustomerModel, CustomerResponse, CustomerUpdate
from .repository import BankRepository


logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, session: Session, repository: Optional[BankRepository] = None) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)

    def _get_customer(self, customer_id: UUID) -> CustomerModel:
        customer = self.repository.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError("Customer not found")
        return customer

    def list_customers(self, search: Optional[str] = None) -> list[CustomerResponse]:
        return [
            CustomerResponse.model_validate(customer)
            for customer in self.repository.list_customers(search)
        ]

    def get_customer(self, customer_id: UUID) -> CustomerResponse:
        return CustomerResponse.model_validate(self._get_customer(customer_id))

    def create_customer(self, payload: CustomerCreate) -> CustomerResponse:
        customer = self.repository.add_customer(payload.name)
        self.session.commit()
        self.session.refresh(customer)
        logger.info("customer.created", extra={"customer_id": str(customer.id)})
        return CustomerResponse.model_validate(customer)

    def update_customer(self, customer_id: UUID, payload: CustomerUpdate) -> CustomerResponse:
        customer = self.repository.rename_customer(self._get_customer(customer_id), payload.name)
        self.session.commit()
        self.session.refresh(customer)
        logger.info("customer.updated", extra={"customer_id": str(customer_id)})
        return CustomerResponse.model_validate(customer)

    def delete_customer(self, customer_id: UUID) -> None:
        customer = self._get_customer(customer_id)
        if self.repository.count_accounts(customer_id=customer_id):
            raise ResourceInUseError("Customer still owns accounts")
        self.repository.delete(customer)
        self.session.commit()
        logger.info("customer.deleted", extra={"customer_id": str(customer_id)})
