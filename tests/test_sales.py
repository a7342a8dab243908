from decimal import Decimal
import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config.database import enable_sqlite_foreign_keys
from app.core.exceptions import ConflictError
from app.modules.sales.repository import SalesRepository
from app.shared.database.models import (
    Base, Car, CarStatus, Customer, Employee, EmployeeRole, Sale, SaleStatus
)


@pytest.fixture()
def sale_setup(make_customer, make_car, sales_headers):
    customer_id = make_customer("C1")
    car_id = make_car()
    return {
        "customer_id": customer_id,
        "employee_id": "E1",
        "car_id": car_id,
        "headers": sales_headers,
    }


def sale_payload(setup, **overrides):
    payload = {
        "customerId": setup["customer_id"],
        "employeeId": setup["employee_id"],
        "carId": setup["car_id"],
        "totalPrice": 10000,
    }
    payload.update(overrides)
    return payload


def car_status(db, car_id):
    db.expire_all()
    return db.query(Car).filter(Car.car_id == car_id).one().status


def test_create_sale_marks_car_sold(client, db, sale_setup):
    response = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["sale"]["status"] == SaleStatus.COMPLETED.value
    assert body["sale"]["totalPrice"] == 10000
    assert body["sale"]["car"]["carId"] == sale_setup["car_id"]
    assert body["sale"]["customer"]["fullName"] == "Ada Lovelace"
    assert car_status(db, sale_setup["car_id"]) == CarStatus.SOLD.value


def test_delete_sale_releases_car(client, db, sale_setup, admin_headers):
    created = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])
    sale_id = created.json()["sale"]["saleId"]

    response = client.delete(f"/api/v1/sales/{sale_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert car_status(db, sale_setup["car_id"]) == CarStatus.AVAILABLE.value
    assert client.get(f"/api/v1/sales/{sale_id}", headers=admin_headers).status_code == 404


def test_car_can_be_sold_again_after_sale_deleted(client, db, sale_setup, admin_headers):
    first = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])
    client.delete(f"/api/v1/sales/{first.json()['sale']['saleId']}", headers=admin_headers)

    second = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])

    assert second.status_code == 201
    assert car_status(db, sale_setup["car_id"]) == CarStatus.SOLD.value


def test_sold_car_cannot_be_sold_again(client, db, sale_setup):
    first = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])
    assert first.status_code == 201

    second = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])

    assert second.status_code == 400
    assert second.json()["errorCode"] == "CONFLICT"
    db.expire_all()
    assert db.query(Sale).count() == 1


def test_reserved_car_is_not_available(client, db, make_customer, make_car, sales_headers):
    make_customer("C1")
    car_id = make_car(status=CarStatus.RESERVED.value)

    response = client.post(
        "/api/v1/sales",
        json={"customerId": "C1", "employeeId": "E1", "carId": car_id, "totalPrice": 5000},
        headers=sales_headers
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "CONFLICT"
    assert db.query(Sale).count() == 0
    assert car_status(db, car_id) == CarStatus.RESERVED.value


def test_guarded_update_rejects_car_sold_in_between(db, sale_setup):
    # Another transaction sold the car after the availability check
    db.query(Car).filter(Car.car_id == sale_setup["car_id"]).update({"status": CarStatus.SOLD.value})
    db.commit()

    repository = SalesRepository(db)
    with pytest.raises(ConflictError):
        repository.create_sale_atomic(
            customer_id=sale_setup["customer_id"],
            employee_id=sale_setup["employee_id"],
            car_id=sale_setup["car_id"],
            total_price=10000,
            status=SaleStatus.COMPLETED.value
        )

    assert db.query(Sale).count() == 0


@pytest.mark.parametrize("missing", ["customerId", "employeeId", "carId"])
def test_create_sale_with_unknown_reference(client, db, sale_setup, missing):
    response = client.post(
        "/api/v1/sales",
        json=sale_payload(sale_setup, **{missing: "does-not-exist"}),
        headers=sale_setup["headers"]
    )

    assert response.status_code == 404
    assert response.json()["errorCode"] == "NOT_FOUND"
    assert db.query(Sale).count() == 0
    assert car_status(db, sale_setup["car_id"]) == CarStatus.AVAILABLE.value


def test_create_sale_requires_positive_price(client, sale_setup):
    response = client.post(
        "/api/v1/sales",
        json=sale_payload(sale_setup, totalPrice=0),
        headers=sale_setup["headers"]
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"


def test_update_sale_leaves_car_untouched(client, db, sale_setup):
    created = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])
    sale_id = created.json()["sale"]["saleId"]

    response = client.put(
        f"/api/v1/sales/{sale_id}",
        json={"totalPrice": 9500, "status": SaleStatus.CANCELLED.value},
        headers=sale_setup["headers"]
    )

    assert response.status_code == 200
    assert response.json()["sale"]["status"] == SaleStatus.CANCELLED.value
    assert response.json()["sale"]["totalPrice"] == 9500
    assert car_status(db, sale_setup["car_id"]) == CarStatus.SOLD.value


def test_list_sales_filters_by_customer(client, make_customer, make_car, sale_setup):
    make_customer("C2")
    other_car = make_car(make="Honda", model="Civic")
    client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])
    client.post(
        "/api/v1/sales",
        json=sale_payload(sale_setup, customerId="C2", carId=other_car),
        headers=sale_setup["headers"]
    )

    response = client.get("/api/v1/sales", params={"customerId": "C2"}, headers=sale_setup["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["totalItems"] == 1
    assert body["items"][0]["customer"]["customerId"] == "C2"


def test_sales_require_token(client, sale_setup):
    response = client.post("/api/v1/sales", json=sale_payload(sale_setup))

    assert response.status_code == 401
    assert response.json()["errorCode"] == "AUTH_ERROR"


def test_invalid_token_is_rejected(client, sale_setup):
    response = client.get("/api/v1/sales", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_only_admin_deletes_sales(client, db, sale_setup):
    created = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])
    sale_id = created.json()["sale"]["saleId"]

    response = client.delete(f"/api/v1/sales/{sale_id}", headers=sale_setup["headers"])

    assert response.status_code == 403
    assert response.json()["errorCode"] == "FORBIDDEN"
    assert car_status(db, sale_setup["car_id"]) == CarStatus.SOLD.value


def test_concurrent_sales_on_one_car_only_one_wins(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30}
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    SessionFactory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with SessionFactory() as db:
        db.add(Customer(
            customer_id="C1", firstname="Ada", lastname="Lovelace", phone="555-0100",
            address="12 Main St", email="c1@example.com", password_hash="x"
        ))
        db.add(Employee(
            employee_id="E1", fname="Grace", lname="Hopper", phone="555-0101",
            role=EmployeeRole.SALESPERSON.value, password_hash="x"
        ))
        car = Car(make="Toyota", model="Corolla", year=2022, price=Decimal("10000"))
        db.add(car)
        db.commit()
        car_id = car.car_id

    workers = 8
    barrier = threading.Barrier(workers)
    outcomes = []
    outcomes_lock = threading.Lock()

    def attempt():
        db = SessionFactory()
        try:
            barrier.wait()
            SalesRepository(db).create_sale_atomic(
                customer_id="C1",
                employee_id="E1",
                car_id=car_id,
                total_price=Decimal("10000"),
                status=SaleStatus.COMPLETED.value
            )
            outcome = "ok"
        except ConflictError:
            outcome = "conflict"
        except Exception as e:
            outcome = type(e).__name__
        finally:
            db.close()
        with outcomes_lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=attempt) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    with SessionFactory() as db:
        sale_count = db.query(Sale).count()
        status = db.query(Car).filter(Car.car_id == car_id).one().status
    engine.dispose()

    assert sorted(outcomes) == ["conflict"] * (workers - 1) + ["ok"]
    assert sale_count == 1
    assert status == CarStatus.SOLD.value


def test_update_and_delete_missing_sale(client, db, sale_setup, admin_headers):
    client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])

    update = client.put(
        "/api/v1/sales/missing",
        json={"totalPrice": 9500, "status": SaleStatus.PENDING.value},
        headers=sale_setup["headers"]
    )
    delete = client.delete("/api/v1/sales/missing", headers=admin_headers)

    assert update.status_code == 404
    assert delete.status_code == 404
    assert delete.json()["errorCode"] == "NOT_FOUND"
    assert car_status(db, sale_setup["car_id"]) == CarStatus.SOLD.value
    assert db.query(Sale).count() == 1


@pytest.mark.parametrize("body", [
    {"status": SaleStatus.PENDING.value},
    {"totalPrice": 9500},
])
def test_update_sale_requires_price_and_status(client, db, sale_setup, body):
    created = client.post("/api/v1/sales", json=sale_payload(sale_setup), headers=sale_setup["headers"])
    sale_id = created.json()["sale"]["saleId"]

    response = client.put(f"/api/v1/sales/{sale_id}", json=body, headers=sale_setup["headers"])

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"
    db.expire_all()
    sale = db.query(Sale).filter(Sale.sale_id == sale_id).one()
    assert sale.status == SaleStatus.COMPLETED.value


def assert_sold_iff_referenced(db):
    db.expire_all()
    referenced = {car_id for (car_id,) in db.query(Sale.car_id)}
    for car in db.query(Car):
        assert (car.status == CarStatus.SOLD.value) == (car.car_id in referenced), car.car_id


def test_car_status_tracks_sales(client, db, make_customer, make_car, sales_headers, admin_headers):
    make_customer("C1")
    first_car, second_car = make_car(), make_car(make="Honda", model="Civic")
    make_car(make="Ford", model="Focus")

    def sell(car_id):
        return client.post(
            "/api/v1/sales",
            json={"customerId": "C1", "employeeId": "E1", "carId": car_id, "totalPrice": 9000},
            headers=sales_headers
        )

    assert_sold_iff_referenced(db)

    first_sale = sell(first_car)
    assert first_sale.status_code == 201
    assert_sold_iff_referenced(db)

    assert sell(second_car).status_code == 201
    assert_sold_iff_referenced(db)

    sale_id = first_sale.json()["sale"]["saleId"]
    assert client.delete(f"/api/v1/sales/{sale_id}", headers=admin_headers).status_code == 200
    assert_sold_iff_referenced(db)

    assert sell(second_car).status_code == 400
    assert_sold_iff_referenced(db)

    assert sell(first_car).status_code == 201
    assert_sold_iff_referenced(db)
    assert db.query(Sale).count() == 2
