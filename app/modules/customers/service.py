# app/modules/customers/service.py
from typing import Optional
import logging

from sqlalchemy.orm import Session

from app.core.auth.schemas import CustomerLogin
from app.core.auth.service import AuthService
from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from app.shared.database.list_query import ListParams
from .repository import CustomersRepository
from .schemas import (
    CustomerSignupRequest, CustomerUpdateRequest, CustomerResponse,
    CustomerDetailResponse, CustomerMutationResponse, CustomerListResponse
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid Customer ID or password"


class CustomersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CustomersRepository(db)

    async def signup(self, signup_data: CustomerSignupRequest) -> CustomerMutationResponse:
        if self.repository.get_customer(signup_data.customer_id):
            raise ConflictError("Customer ID already exists. Please choose a different one.")

        if self.repository.get_by_email(signup_data.email):
            raise ConflictError("Email already exists")

        customer = self.repository.create_customer({
            "customer_id": signup_data.customer_id,
            "firstname": signup_data.firstname,
            "lastname": signup_data.lastname,
            "phone": signup_data.phone,
            "address": signup_data.address,
            "email": signup_data.email,
            "password_hash": AuthService.get_password_hash(signup_data.password)
        })
        logger.info(f"Customer {customer.customer_id} signed up")

        return CustomerMutationResponse(
            message="Customer account created successfully!",
            customer=CustomerResponse.model_validate(customer)
        )

    async def login(self, credentials: CustomerLogin) -> CustomerMutationResponse:
        customer = self.repository.get_customer(credentials.customer_id)

        if not customer or not AuthService.verify_password(credentials.password, customer.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return CustomerMutationResponse(
            message="Login successful!",
            customer=CustomerResponse.model_validate(customer)
        )

    async def get_customers(self, params: ListParams, search: Optional[str] = None) -> CustomerListResponse:
        page = self.repository.list_customers(params, search)
        return CustomerListResponse(
            items=[CustomerDetailResponse.model_validate(c) for c in page.items],
            pagination=page.pagination()
        )

    async def get_customer(self, customer_id: str) -> CustomerDetailResponse:
        customer = self.repository.get_customer(customer_id, with_sales=True)
        if not customer:
            raise NotFoundError("Customer not found")
        return CustomerDetailResponse.model_validate(customer)

    async def update_customer(
        self,
        customer_id: str,
        profile: CustomerUpdateRequest
    ) -> CustomerMutationResponse:
        customer = self.repository.get_customer(customer_id)
        if not customer:
            raise NotFoundError("Customer not found")

        if self.repository.get_by_email(profile.email, exclude_customer_id=customer_id):
            raise ConflictError("Email already exists for another customer")

        customer = self.repository.update_customer(customer, {
            "firstname": profile.firstname,
            "lastname": profile.lastname,
            "phone": profile.phone,
            "address": profile.address,
            "email": profile.email
        })

        return CustomerMutationResponse(
            message="Customer profile updated successfully",
            customer=CustomerResponse.model_validate(customer)
        )

    async def delete_customer(self, customer_id: str) -> dict:
        customer = self.repository.get_customer(customer_id)
        if not customer:
            raise NotFoundError("Customer not found")

        self.repository.delete_customer(customer)

        return {
            "success": True,
            "message": "Customer deleted successfully"
        }
