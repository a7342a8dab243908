# app/modules/sales/repository.py
from decimal import Decimal
from typing import Optional
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import ConflictError, InternalError
from app.shared.database.list_query import ListParams, ListQueryBuilder, Page
from app.shared.database.models import Car, CarStatus, Customer, Employee, Sale

logger = logging.getLogger(__name__)

SALE_SORT_FIELDS = {
    "saleDate": "sale_date",
    "totalPrice": "total_price",
    "status": "status",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


class SalesRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_details(self):
        return (
            joinedload(Sale.customer),
            joinedload(Sale.employee),
            joinedload(Sale.car),
        )

    # ==================== LOOKUPS ====================

    def get_car(self, car_id: str) -> Optional[Car]:
        return self.db.query(Car).filter(Car.car_id == car_id).first()

    def customer_exists(self, customer_id: str) -> bool:
        return self.db.query(Customer.customer_id).filter(
            Customer.customer_id == customer_id
        ).first() is not None

    def employee_exists(self, employee_id: str) -> bool:
        return self.db.query(Employee.employee_id).filter(
            Employee.employee_id == employee_id
        ).first() is not None

    def get_sale(self, sale_id: str) -> Optional[Sale]:
        return (
            self.db.query(Sale)
            .options(*self._with_details())
            .filter(Sale.sale_id == sale_id)
            .first()
        )

    def list_sales(
        self,
        params: ListParams,
        customer_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[str] = None
    ) -> Page:
        builder = ListQueryBuilder(Sale, sortable=SALE_SORT_FIELDS, default_sort="saleDate")
        builder.equals("customer_id", customer_id)
        builder.equals("employee_id", employee_id)
        builder.equals("status", status)
        return builder.paginate(self.db, params, *self._with_details())

    # ==================== TRANSACTIONS ====================

    def create_sale_atomic(
        self,
        customer_id: str,
        employee_id: str,
        car_id: str,
        total_price: Decimal,
        status: str
    ) -> Sale:
        """
        Insert the sale and mark the car SOLD in one transaction.

        The car update is guarded on `status = AVAILABLE`, so when two
        requests race for the same car only one of them changes a row;
        the other one rolls back its insert and gets a ConflictError.

        Raises:
            ConflictError: car no longer AVAILABLE, or a reference is invalid
            InternalError: any other database failure (nothing persisted)
        """
        try:
            sale = Sale(
                customer_id=customer_id,
                employee_id=employee_id,
                car_id=car_id,
                total_price=total_price,
                status=status
            )
            self.db.add(sale)
            self.db.flush()

            result = self.db.execute(
                update(Car)
                .where(Car.car_id == car_id, Car.status == CarStatus.AVAILABLE.value)
                .values(status=CarStatus.SOLD.value)
            )
            if result.rowcount != 1:
                raise ConflictError("Car is not available for sale")

            sale_id = sale.sale_id
            self.db.commit()
            logger.info(f"Sale {sale_id} recorded, car {car_id} marked SOLD")

        except ConflictError:
            self.db.rollback()
            logger.warning(f"Sale rejected, car {car_id} was sold concurrently")
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Sale rejected by constraints: {e.orig}")
            raise ConflictError("Sale references a customer, employee or car that does not exist")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Sale transaction failed")
            raise InternalError("Failed to create sale")

        return self.get_sale(sale_id)

    def update_sale(self, sale: Sale, total_price: Decimal, status: str) -> Sale:
        try:
            sale.total_price = total_price
            sale.status = status
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to update sale {sale.sale_id}")
            raise InternalError("Failed to update sale")

        self.db.refresh(sale)
        return sale

    def delete_sale_atomic(self, sale: Sale) -> None:
        """
        Delete the sale and put its car back to AVAILABLE in one transaction.

        The car is released unconditionally.
        """
        sale_id = sale.sale_id
        car_id = sale.car_id
        try:
            self.db.delete(sale)
            self.db.flush()

            self.db.execute(
                update(Car)
                .where(Car.car_id == car_id)
                .values(status=CarStatus.AVAILABLE.value)
            )

            self.db.commit()
            logger.info(f"Sale {sale_id} deleted, car {car_id} marked AVAILABLE")

        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to delete sale {sale_id}")
            raise InternalError("Failed to delete sale")
