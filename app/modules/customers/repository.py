# app/modules/customers/repository.py
from typing import Any, Dict, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ConflictError
from app.shared.database.list_query import ListParams, ListQueryBuilder, Page
from app.shared.database.models import Customer, Sale

logger = logging.getLogger(__name__)

CUSTOMER_SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "customerId": "customer_id",
    "firstname": "firstname",
    "lastname": "lastname",
    "email": "email",
}

CUSTOMER_SEARCH_FIELDS = ("customer_id", "firstname", "lastname", "email", "phone")


class CustomersRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_sales(self):
        return (
            selectinload(Customer.sales).joinedload(Sale.employee),
            selectinload(Customer.sales).joinedload(Sale.car),
        )

    def get_customer(self, customer_id: str, with_sales: bool = False) -> Optional[Customer]:
        query = self.db.query(Customer)
        if with_sales:
            query = query.options(*self._with_sales())
        return query.filter(Customer.customer_id == customer_id).first()

    def get_by_email(self, email: str, exclude_customer_id: Optional[str] = None) -> Optional[Customer]:
        query = self.db.query(Customer).filter(Customer.email == email)
        if exclude_customer_id:
            query = query.filter(Customer.customer_id != exclude_customer_id)
        return query.first()

    def list_customers(self, params: ListParams, search: Optional[str] = None) -> Page:
        builder = ListQueryBuilder(
            Customer,
            sortable=CUSTOMER_SORT_FIELDS,
            default_sort="createdAt",
            search_fields=CUSTOMER_SEARCH_FIELDS
        )
        builder.search(search)
        return builder.paginate(self.db, params, *self._with_sales())

    def create_customer(self, customer_data: Dict[str, Any]) -> Customer:
        customer = Customer(**customer_data)
        try:
            self.db.add(customer)
            self.db.commit()
        except IntegrityError:
            # Lost a race against another signup with the same id or email
            self.db.rollback()
            raise ConflictError("Customer ID or email already exists")
        self.db.refresh(customer)
        return customer

    def update_customer(self, customer: Customer, changes: Dict[str, Any]) -> Customer:
        try:
            for field, value in changes.items():
                setattr(customer, field, value)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already exists for another customer")
        self.db.refresh(customer)
        return customer

    def delete_customer(self, customer: Customer) -> None:
        try:
            self.db.delete(customer)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Customer {customer.customer_id} still referenced by sales")
            raise ConflictError("Customer has sales and cannot be deleted")
