# app/modules/cars/repository.py
from typing import Any, Dict, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ConflictError
from app.shared.database.list_query import ListParams, ListQueryBuilder, Page
from app.shared.database.models import Car, Sale

logger = logging.getLogger(__name__)

CAR_SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "price": "price",
    "year": "year",
    "make": "make",
    "model": "model",
    "status": "status",
}

CAR_SEARCH_FIELDS = ("make", "model")


class CarsRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_sales(self):
        return (
            selectinload(Car.sales).joinedload(Sale.customer),
            selectinload(Car.sales).joinedload(Sale.employee),
        )

    def get_car(self, car_id: str) -> Optional[Car]:
        return (
            self.db.query(Car)
            .options(*self._with_sales())
            .filter(Car.car_id == car_id)
            .first()
        )

    def list_cars(
        self,
        params: ListParams,
        search: Optional[str] = None,
        status: Optional[str] = None,
        min_price: Optional[str] = None,
        max_price: Optional[str] = None
    ) -> Page:
        builder = ListQueryBuilder(
            Car,
            sortable=CAR_SORT_FIELDS,
            default_sort="createdAt",
            search_fields=CAR_SEARCH_FIELDS
        )
        builder.search(search)
        builder.equals("status", status)
        builder.between("price", min_price, max_price, names=("minPrice", "maxPrice"))
        return builder.paginate(self.db, params, *self._with_sales())

    def count_sales(self, car_id: str) -> int:
        return self.db.query(Sale).filter(Sale.car_id == car_id).count()

    def create_car(self, car_data: Dict[str, Any]) -> Car:
        car = Car(**car_data)
        self.db.add(car)
        self.db.commit()
        self.db.refresh(car)
        return car

    def update_car(self, car: Car, changes: Dict[str, Any]) -> Car:
        for field, value in changes.items():
            setattr(car, field, value)
        self.db.commit()
        self.db.refresh(car)
        return car

    def delete_car(self, car: Car) -> None:
        try:
            self.db.delete(car)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Car {car.car_id} still referenced by sales")
            raise ConflictError("Car has sales and cannot be deleted")
