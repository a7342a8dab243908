# app/modules/services/service.py
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.shared.database.list_query import ListParams
from .repository import ServicesRepository
from .schemas import (
    AddCustomerRequest, AddCustomerResponse, CustomerServiceResponse,
    ServiceCreateRequest, ServiceListResponse, ServiceMutationResponse,
    ServiceResponse, ServiceUpdateRequest
)

logger = logging.getLogger(__name__)


class ServicesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ServicesRepository(db)

    def _unique_customer_ids(self, customer_ids: Optional[List[str]]) -> Optional[List[str]]:
        if customer_ids is None:
            return None
        unique_ids = list(dict.fromkeys(cid.strip() for cid in customer_ids if cid and cid.strip()))
        missing = self.repository.find_missing_customers(unique_ids)
        if missing:
            raise NotFoundError(f"Customer not found: {', '.join(missing)}", details={"customerIds": missing})
        return unique_ids

    async def create_service(self, service_data: ServiceCreateRequest) -> ServiceMutationResponse:
        customer_ids = self._unique_customer_ids(service_data.customer_ids) or []

        service = self.repository.create_service(
            service_data.model_dump(exclude={"customer_ids"}),
            customer_ids
        )
        logger.info(f"Service {service.service_id} created with {len(customer_ids)} customers")

        return ServiceMutationResponse(
            message="Service created successfully",
            service=ServiceResponse.model_validate(service)
        )

    async def get_services(
        self,
        params: ListParams,
        service_type: Optional[str] = None,
        min_cost: Optional[str] = None,
        max_cost: Optional[str] = None
    ) -> ServiceListResponse:
        page = self.repository.list_services(params, service_type, min_cost, max_cost)
        return ServiceListResponse(
            items=[ServiceResponse.model_validate(service) for service in page.items],
            pagination=page.pagination()
        )

    async def get_service(self, service_id: str) -> ServiceResponse:
        service = self.repository.get_service(service_id)
        if not service:
            raise NotFoundError("Service not found")
        return ServiceResponse.model_validate(service)

    async def update_service(self, service_id: str, service_data: ServiceUpdateRequest) -> ServiceMutationResponse:
        service = self.repository.get_service(service_id)
        if not service:
            raise NotFoundError("Service not found")

        customer_ids = self._unique_customer_ids(service_data.customer_ids)
        service = self.repository.update_service(
            service,
            service_data.model_dump(exclude={"customer_ids"}),
            customer_ids
        )

        return ServiceMutationResponse(
            message="Service updated successfully",
            service=ServiceResponse.model_validate(service)
        )

    async def delete_service(self, service_id: str) -> dict:
        service = self.repository.get_service(service_id)
        if not service:
            raise NotFoundError("Service not found")

        self.repository.delete_service(service)
        logger.info(f"Service {service_id} deleted")

        return {
            "success": True,
            "message": "Service deleted successfully"
        }

    async def add_customer(self, link_data: AddCustomerRequest) -> AddCustomerResponse:
        """Link one more customer to an existing service"""
        if not self.repository.get_service(link_data.service_id):
            raise NotFoundError("Service not found")
        if self.repository.find_missing_customers([link_data.customer_id]):
            raise NotFoundError("Customer not found")

        link = self.repository.add_customer(link_data.service_id, link_data.customer_id)

        return AddCustomerResponse(
            message="Customer added to service successfully",
            customer_service=CustomerServiceResponse.model_validate(link)
        )
