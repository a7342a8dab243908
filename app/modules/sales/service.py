# app/modules/sales/service.py
from typing import Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.shared.database.list_query import ListParams
from app.shared.database.models import SaleStatus
from .repository import SalesRepository
from .schemas import (
    SaleCreateRequest, SaleUpdateRequest, SaleResponse,
    SaleMutationResponse, SaleListResponse
)

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = SalesRepository(db)

    async def create_sale(self, sale_data: SaleCreateRequest) -> SaleMutationResponse:
        """
        Record a sale.

        Steps:
        1. Pre-check car, customer and employee (outside the transaction)
        2. Insert sale + guarded car update (single transaction, repository)
        """
        logger.info(f"Creating sale - car: {sale_data.car_id}, employee: {sale_data.employee_id}")

        car = self.repository.get_car(sale_data.car_id)
        if not car:
            raise NotFoundError("Car not found")
        if not car.is_available:
            raise ConflictError("Car is not available for sale")

        if not self.repository.customer_exists(sale_data.customer_id):
            raise NotFoundError("Customer not found")
        if not self.repository.employee_exists(sale_data.employee_id):
            raise NotFoundError("Employee not found")

        status = sale_data.status or SaleStatus.COMPLETED

        sale = self.repository.create_sale_atomic(
            customer_id=sale_data.customer_id,
            employee_id=sale_data.employee_id,
            car_id=sale_data.car_id,
            total_price=sale_data.total_price,
            status=status.value
        )

        return SaleMutationResponse(
            message="Sale created successfully!",
            sale=SaleResponse.model_validate(sale)
        )

    async def get_sales(
        self,
        params: ListParams,
        customer_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[str] = None
    ) -> SaleListResponse:
        page = self.repository.list_sales(params, customer_id, employee_id, status)
        return SaleListResponse(
            items=[SaleResponse.model_validate(sale) for sale in page.items],
            pagination=page.pagination()
        )

    async def get_sale(self, sale_id: str) -> SaleResponse:
        sale = self.repository.get_sale(sale_id)
        if not sale:
            raise NotFoundError("Sale not found")
        return SaleResponse.model_validate(sale)

    async def update_sale(self, sale_id: str, sale_data: SaleUpdateRequest) -> SaleMutationResponse:
        """Change price and status only; the car is left untouched"""
        sale = self.repository.get_sale(sale_id)
        if not sale:
            raise NotFoundError("Sale not found")

        sale = self.repository.update_sale(sale, sale_data.total_price, sale_data.status.value)

        return SaleMutationResponse(
            message="Sale updated successfully",
            sale=SaleResponse.model_validate(sale)
        )

    async def delete_sale(self, sale_id: str) -> dict:
        sale = self.repository.get_sale(sale_id)
        if not sale:
            raise NotFoundError("Sale not found")

        self.repository.delete_sale_atomic(sale)

        return {
            "success": True,
            "message": "Sale deleted successfully"
        }
