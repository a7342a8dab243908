"""
Shared fixtures: an in-memory SQLite database per test, wired into the
FastAPI app through dependency overrides.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.config.database import enable_sqlite_foreign_keys, get_db  # noqa: E402
from app.core.auth.service import AuthService  # noqa: E402
from app.main import app  # noqa: E402
from app.shared.database.models import (  # noqa: E402
    Base, Car, CarStatus, Customer, Employee, EmployeeRole
)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_employee(db):
    def _make(employee_id="E1", role=EmployeeRole.SALESPERSON.value, password="secret123"):
        employee = Employee(
            employee_id=employee_id,
            fname="Grace",
            lname="Hopper",
            phone="555-0101",
            role=role,
            password_hash=AuthService.get_password_hash(password)
        )
        db.add(employee)
        db.commit()
        return employee_id
    return _make


@pytest.fixture()
def make_customer(db):
    def _make(customer_id="C1", email=None, password="secret123"):
        db.add(Customer(
            customer_id=customer_id,
            firstname="Ada",
            lastname="Lovelace",
            phone="555-0100",
            address="12 Main St",
            email=email or f"{customer_id.lower()}@example.com",
            password_hash=AuthService.get_password_hash(password)
        ))
        db.commit()
        return customer_id
    return _make


@pytest.fixture()
def make_car(db):
    def _make(make="Toyota", model="Corolla", year=2022, price="10000", status=CarStatus.AVAILABLE.value):
        car = Car(make=make, model=model, year=year, price=Decimal(price), status=status)
        db.add(car)
        db.commit()
        return car.car_id
    return _make


def bearer(employee_id: str, role: str) -> dict:
    token = AuthService.create_access_token({"employee_id": employee_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(make_employee):
    make_employee("ADMIN1", role=EmployeeRole.ADMIN.value)
    return bearer("ADMIN1", EmployeeRole.ADMIN.value)


@pytest.fixture()
def sales_headers(make_employee):
    make_employee("E1", role=EmployeeRole.SALESPERSON.value)
    return bearer("E1", EmployeeRole.SALESPERSON.value)
