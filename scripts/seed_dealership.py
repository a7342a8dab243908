"""
Seed a dealership database with demo employees and cars

Usage:
    python -m scripts.seed_dealership
"""
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

from app.config.database import SessionLocal, init_db  # noqa: E402
from app.core.auth.service import AuthService  # noqa: E402
from app.shared.database.models import Car, CarStatus, Employee, EmployeeRole  # noqa: E402

DEMO_EMPLOYEES = [
    {
        "employee_id": "ADMIN001",
        "password": "admin123",
        "fname": "Ana",
        "lname": "Admin",
        "phone": "555-0100",
        "role": EmployeeRole.ADMIN.value
    },
    {
        "employee_id": "SALES001",
        "password": "sales123",
        "fname": "Juan",
        "lname": "Seller",
        "phone": "555-0101",
        "role": EmployeeRole.SALESPERSON.value
    }
]

DEMO_CARS = [
    ("Toyota", "Corolla", 2022, "21500.00"),
    ("Honda", "Civic", 2023, "24900.00"),
    ("Ford", "Mustang", 2021, "38750.00"),
    ("Tesla", "Model 3", 2024, "42990.00"),
    ("Mazda", "CX-5", 2022, "28300.00"),
]


def seed_dealership():
    init_db()
    db = SessionLocal()

    try:
        if db.query(Employee).count() > 0:
            print(f"Database already has {db.query(Employee).count()} employees, nothing to seed")
            return

        for employee_data in DEMO_EMPLOYEES:
            data = dict(employee_data)
            password = data.pop("password")
            db.add(Employee(password_hash=AuthService.get_password_hash(password), **data))
            print(f"Employee created: {data['employee_id']} / {password} ({data['role']})")

        for make, model, year, price in DEMO_CARS:
            db.add(Car(make=make, model=model, year=year, price=Decimal(price), status=CarStatus.AVAILABLE.value))

        db.commit()
        print(f"Seeded {len(DEMO_EMPLOYEES)} employees and {len(DEMO_CARS)} cars")

    except Exception as e:
        db.rollback()
        print(f"Seeding failed: {e}")
        raise

    finally:
        db.close()


if __name__ == "__main__":
    seed_dealership()
