from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlmodel import Session

from ..core.errors import DepositoTypeNotFoundError, ResourceInUseError
from ..models import (
    DepositoTypeCreate,
    DepositoTypeModel,
    DepositoTypeResponse,
    DepositoTypeUpdate,
)
from .repository import BankRepository


logger = logging.getLogger(__name__)


class DepositoTypeService:
    """Savings products and their yearly return rates."""

    def __init__(self, session: Session, repository: Optional[BankRepository] = None) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)

    def _get_deposito_type(self, deposito_type_id: UUID) -> DepositoTypeModel:
        deposito_type = self.repository.get_deposito_type(deposito_type_id)
        if deposito_type is None:
            raise DepositoTypeNotFoundError("Deposito type not found")
        return deposito_type

    def list_deposito_types(self) -> list[DepositoTypeResponse]:
        return [
            DepositoTypeResponse.model_validate(item)
            for item in self.repository.list_deposito_types()
        ]

    def get_deposito_type(self, deposito_type_id: UUID) -> DepositoTypeResponse:
        return DepositoTypeResponse.model_validate(self._get_deposito_type(deposito_type_id))

    def create_deposito_type(self, payload: DepositoTypeCreate) -> DepositoTypeResponse:
        deposito_type = self.repository.add_deposito_type(payload.name, payload.yearly_return)
        self.session.commit()
        self.session.refresh(deposito_type)
        logger.info(
            "deposito_type.created",
            extra={
                "deposito_type_id": str(deposito_type.id),
                "yearly_return": str(deposito_type.yearly_return),
            },
        )
        return DepositoTypeResponse.model_validate(deposito_type)

    def update_deposito_type(
        self, deposito_type_id: UUID, payload: DepositoTypeUpdate
    ) -> DepositoTypeResponse:
        deposito_type = self.repository.update_deposito_type(
            self._get_deposito_type(deposito_type_id),
            name=payload.name,
            yearly_return=payload.yearly_return,
        )
        self.session.commit()
        self.session.refresh(deposito_type)
        logger.info("deposito_type.updated", extra={"deposito_type_id": str(deposito_type_id)})
        return DepositoTypeResponse.model_validate(deposito_type)

    def delete_deposito_type(self, deposito_type_id: UUID) -> None:
        deposito_type = self._get_deposito_type(deposito_type_id)
        if self.repository.count_accounts(deposito_type_id=deposito_type_id):
            raise ResourceInUseError("Deposito type is used by existing accounts")
        self.repository.delete(deposito_type)
        self.session.commit()
        logger.info("deposito_type.deleted", extra={"deposito_type_id": str(deposito_type_id)})
