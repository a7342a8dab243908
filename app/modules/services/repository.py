# app/modules/services/repository.py
from typing import Any, Dict, List, Optional, Sequence
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ConflictError, InternalError
from app.shared.database.list_query import ListParams, ListQueryBuilder, Page
from app.shared.database.models import Customer, CustomerService, Service

logger = logging.getLogger(__name__)

SERVICE_SORT_FIELDS = {
    "serviceDate": "service_date",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "cost": "cost",
    "serviceType": "service_type",
}


class ServicesRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_customers(self):
        return (selectinload(Service.customers).joinedload(CustomerService.customer),)

    def get_service(self, service_id: str) -> Optional[Service]:
        return (
            self.db.query(Service)
            .options(*self._with_customers())
            .filter(Service.service_id == service_id)
            .first()
        )

    def find_missing_customers(self, customer_ids: Sequence[str]) -> List[str]:
        """Ids from the list that have no customer row"""
        if not customer_ids:
            return []
        found = {
            row.customer_id
            for row in self.db.query(Customer.customer_id).filter(Customer.customer_id.in_(customer_ids))
        }
        return [cid for cid in customer_ids if cid not in found]

    def list_services(
        self,
        params: ListParams,
        service_type: Optional[str] = None,
        min_cost: Optional[str] = None,
        max_cost: Optional[str] = None
    ) -> Page:
        builder = ListQueryBuilder(Service, sortable=SERVICE_SORT_FIELDS, default_sort="serviceDate")
        builder.equals("service_type", service_type)
        builder.between("cost", min_cost, max_cost, names=("minCost", "maxCost"))
        return builder.paginate(self.db, params, *self._with_customers())

    def create_service(self, service_data: Dict[str, Any], customer_ids: Sequence[str]) -> Service:
        """Insert the service and its customer links together"""
        try:
            service = Service(**service_data)
            self.db.add(service)
            self.db.flush()

            for customer_id in customer_ids:
                self.db.add(CustomerService(service_id=service.service_id, customer_id=customer_id))

            service_id = service.service_id
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Failed to link customers to the service")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Service creation failed")
            raise InternalError("Failed to create service")

        return self.get_service(service_id)

    def update_service(
        self,
        service: Service,
        changes: Dict[str, Any],
        customer_ids: Optional[Sequence[str]] = None
    ) -> Service:
        """Update fields and, when customer_ids is given, replace the links"""
        service_id = service.service_id
        try:
            for field, value in changes.items():
                setattr(service, field, value)

            if customer_ids is not None:
                # Old links must be gone before re-adding the same pair
                service.customers.clear()
                self.db.flush()

                for customer_id in customer_ids:
                    service.customers.append(CustomerService(customer_id=customer_id))

            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Failed to link customers to the service")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Service {service_id} update failed")
            raise InternalError("Failed to update service")

        return self.get_service(service_id)

    def delete_service(self, service: Service) -> None:
        self.db.delete(service)
        self.db.commit()

    def add_customer(self, service_id: str, customer_id: str) -> CustomerService:
        link = CustomerService(service_id=service_id, customer_id=customer_id)
        try:
            self.db.add(link)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Customer is already associated with this service")
        self.db.refresh(link)
        return link
