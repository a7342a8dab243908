# app/modules/cars/service.py
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.shared.database.list_query import ListParams
from app.shared.database.models import CarStatus
from .repository import CarsRepository
from .schemas import (
    CarCreateRequest, CarUpdateRequest, CarResponse, CarDetailResponse,
    CarMutationResponse, CarListResponse
)

SOLD_BY_SALE_ONLY = "Cars are marked SOLD by recording a sale"


class CarsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CarsRepository(db)

    async def create_car(self, car_data: CarCreateRequest) -> CarMutationResponse:
        status = car_data.status or CarStatus.AVAILABLE
        if status == CarStatus.SOLD:
            raise ValidationError(SOLD_BY_SALE_ONLY)

        car = self.repository.create_car({
            "make": car_data.make,
            "model": car_data.model,
            "year": car_data.year,
            "price": car_data.price,
            "status": status.value
        })

        return CarMutationResponse(
            message="Car created successfully!",
            car=CarResponse.model_validate(car)
        )

    async def get_cars(
        self,
        params: ListParams,
        search: Optional[str] = None,
        status: Optional[str] = None,
        min_price: Optional[str] = None,
        max_price: Optional[str] = None
    ) -> CarListResponse:
        page = self.repository.list_cars(params, search, status, min_price, max_price)
        return CarListResponse(
            items=[CarDetailResponse.model_validate(car) for car in page.items],
            pagination=page.pagination()
        )

    async def get_car(self, car_id: str) -> CarDetailResponse:
        car = self.repository.get_car(car_id)
        if not car:
            raise NotFoundError("Car not found")
        return CarDetailResponse.model_validate(car)

    async def update_car(self, car_id: str, car_data: CarUpdateRequest) -> CarMutationResponse:
        """
        Update a car.

        SOLD is owned by the sales flow: it cannot be set here, and a car
        with sales keeps its status until those sales are deleted.
        """
        car = self.repository.get_car(car_id)
        if not car:
            raise NotFoundError("Car not found")

        changes = {
            "make": car_data.make,
            "model": car_data.model,
            "year": car_data.year,
            "price": car_data.price,
        }

        if car_data.status is not None and car_data.status.value != car.status:
            if car_data.status == CarStatus.SOLD:
                raise ValidationError(SOLD_BY_SALE_ONLY)
            if self.repository.count_sales(car_id) > 0:
                raise ConflictError("Car has active sales; delete the sale to release it")
            changes["status"] = car_data.status.value

        car = self.repository.update_car(car, changes)

        return CarMutationResponse(
            message="Car updated successfully",
            car=CarResponse.model_validate(car)
        )

    async def delete_car(self, car_id: str) -> dict:
        car = self.repository.get_car(car_id)
        if not car:
            raise NotFoundError("Car not found")

        self.repository.delete_car(car)

        return {
            "success": True,
            "message": "Car deleted successfully"
        }
