# app/shared/database/models.py
import enum
import uuid

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Numeric, ForeignKey,
    UniqueConstraint, func
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


# =====================================================
# ENUMS
# =====================================================

class CarStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    SOLD = "SOLD"
    RESERVED = "RESERVED"


class SaleStatus(str, enum.Enum):
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"


class EmployeeRole(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    SALESPERSON = "SALESPERSON"


# =====================================================
# TIMESTAMPS MIXIN
# =====================================================
class TimestampMixin:
    """Adds created_at and updated_at columns"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# INVENTORY
# =====================================================

class Car(Base, TimestampMixin):
    """Vehicle in the dealership inventory"""
    __tablename__ = "cars"

    car_id = Column(String(36), primary_key=True, default=_new_id)
    make = Column(String(100), nullable=False, index=True)
    model = Column(String(100), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    # Only the sale flow moves a car in and out of SOLD
    status = Column(String(20), nullable=False, default=CarStatus.AVAILABLE.value, index=True)

    sales = relationship("Sale", back_populates="car", order_by="Sale.sale_date", passive_deletes="all")

    @property
    def is_available(self) -> bool:
        return self.status == CarStatus.AVAILABLE.value


# =====================================================
# PEOPLE
# =====================================================

class Customer(Base, TimestampMixin):
    __tablename__ = "customers"

    customer_id = Column(String(50), primary_key=True)
    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    sales = relationship("Sale", back_populates="customer", order_by="Sale.sale_date", passive_deletes="all")
    services = relationship(
        "CustomerService",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"


class Employee(Base, TimestampMixin):
    __tablename__ = "employees"

    employee_id = Column(String(50), primary_key=True)
    fname = Column(String(100), nullable=False)
    lname = Column(String(100), nullable=False)
    phone = Column(String(50), nullable=False)
    role = Column(String(20), nullable=False, default=EmployeeRole.SALESPERSON.value)
    password_hash = Column(String(255), nullable=False)

    sales = relationship("Sale", back_populates="employee", order_by="Sale.sale_date", passive_deletes="all")

    @property
    def full_name(self) -> str:
        return f"{self.fname} {self.lname}"


# =====================================================
# SALES
# =====================================================

class Sale(Base, TimestampMixin):
    """A car sold to a customer by an employee"""
    __tablename__ = "sales"

    sale_id = Column(String(36), primary_key=True, default=_new_id)
    customer_id = Column(String(50), ForeignKey("customers.customer_id"), nullable=False, index=True)
    employee_id = Column(String(50), ForeignKey("employees.employee_id"), nullable=False, index=True)
    car_id = Column(String(36), ForeignKey("cars.car_id"), nullable=False, index=True)
    total_price = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default=SaleStatus.COMPLETED.value, index=True)
    sale_date = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    customer = relationship("Customer", back_populates="sales")
    employee = relationship("Employee", back_populates="sales")
    car = relationship("Car", back_populates="sales")


# =====================================================
# SERVICES
# =====================================================

class Service(Base, TimestampMixin):
    __tablename__ = "services"

    service_id = Column(String(36), primary_key=True, default=_new_id)
    service_type = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    service_date = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    customers = relationship(
        "CustomerService",
        back_populates="service",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class CustomerService(Base):
    """Join table between customers and services"""
    __tablename__ = "customer_services"
    __table_args__ = (
        UniqueConstraint("customer_id", "service_id", name="uq_customer_service"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(String(50), ForeignKey("customers.customer_id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("services.service_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    customer = relationship("Customer", back_populates="services")
    service = relationship("Service", back_populates="customers")


# =====================================================
# GENERIC USERS
# =====================================================

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    role = Column(String(50), nullable=False, default="user")
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
