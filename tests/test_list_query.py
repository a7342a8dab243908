import pytest

from app.core.exceptions import ValidationError
from app.shared.database.list_query import (
    FieldFilter, FilterOp, ListQueryBuilder, Page, normalize_list_params, parse_number
)
from app.shared.database.models import Car, CarStatus

CARS_URL = "/api/v1/cars"


@pytest.fixture()
def twelve_cars(make_car):
    makes = ["Toyota", "Honda", "Ford"]
    for i in range(12):
        make_car(make=makes[i % 3], model=f"Model {i}", price=str(1000 * (i + 1)))


# ==================== PARAMS ====================

def test_defaults():
    params = normalize_list_params()

    assert params.page == 1
    assert params.limit == 10
    assert params.sort_order == "desc"
    assert params.offset == 0


def test_sort_order_is_case_insensitive():
    assert normalize_list_params(sort_order="ASC").sort_order == "asc"


@pytest.mark.parametrize("kwargs", [
    {"page": 0},
    {"limit": 0},
    {"limit": 101},
    {"sort_order": "sideways"},
])
def test_invalid_params(kwargs):
    with pytest.raises(ValidationError):
        normalize_list_params(**kwargs)


def test_parse_number():
    assert parse_number("", "minPrice") is None
    assert parse_number(None, "minPrice") is None
    assert str(parse_number(" 12.50 ", "minPrice")) == "12.50"
    with pytest.raises(ValidationError):
        parse_number("abc", "minPrice")
    with pytest.raises(ValidationError):
        parse_number("NaN", "minPrice")


def test_total_pages_rounds_up():
    assert Page(items=[], total_items=12, page=1, limit=5).total_pages == 3
    assert Page(items=[], total_items=10, page=1, limit=5).total_pages == 2
    assert Page(items=[], total_items=0, page=1, limit=5).total_pages == 0


def test_empty_filters_are_skipped():
    builder = ListQueryBuilder(Car, sortable={"price": "price"}, default_sort="price", search_fields=("make",))
    builder.search("")
    builder.equals("status", None)
    builder.equals("status", "")
    builder.between("price", "", None)

    assert builder.filters == []


def test_filters_compose():
    builder = ListQueryBuilder(Car, sortable={"price": "price"}, default_sort="price")
    builder.equals("status", CarStatus.AVAILABLE.value).between("price", "10", "20")

    assert builder.filters[0] == FieldFilter("status", FilterOp.EQ, CarStatus.AVAILABLE.value)
    assert [f.op for f in builder.filters[1:]] == [FilterOp.GTE, FilterOp.LTE]


def test_unknown_default_sort_is_a_programming_error():
    with pytest.raises(ValueError):
        ListQueryBuilder(Car, sortable={"price": "price"}, default_sort="year")


# ==================== THROUGH THE API ====================

def test_second_page(client, twelve_cars):
    response = client.get(CARS_URL, params={"page": 2, "limit": 5})

    assert response.status_code == 200
    body = response.json()
    assert len(body["items"]) == 5
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalItems": 12,
        "itemsPerPage": 5,
    }


def test_last_page_is_partial(client, twelve_cars):
    body = client.get(CARS_URL, params={"page": 3, "limit": 5}).json()

    assert len(body["items"]) == 2


def test_page_past_the_end_is_empty(client, twelve_cars):
    body = client.get(CARS_URL, params={"page": 9, "limit": 5}).json()

    assert body["items"] == []
    assert body["pagination"]["totalPages"] == 3


def test_no_results(client):
    body = client.get(CARS_URL).json()

    assert body["items"] == []
    assert body["pagination"]["totalItems"] == 0
    assert body["pagination"]["totalPages"] == 0


def test_sort_by_price(client, twelve_cars):
    body = client.get(CARS_URL, params={"sortBy": "price", "sortOrder": "asc", "limit": 3}).json()

    assert [car["price"] for car in body["items"]] == [1000, 2000, 3000]

    body = client.get(CARS_URL, params={"sortBy": "price", "sortOrder": "desc", "limit": 3}).json()

    assert [car["price"] for car in body["items"]] == [12000, 11000, 10000]


def test_pages_do_not_overlap(client, twelve_cars):
    ids = []
    for page in (1, 2, 3):
        body = client.get(CARS_URL, params={"page": page, "limit": 5, "sortBy": "make"}).json()
        ids.extend(car["carId"] for car in body["items"])

    assert len(ids) == 12
    assert len(set(ids)) == 12


def test_empty_query_values_mean_no_filter(client, twelve_cars):
    body = client.get(
        CARS_URL,
        params={"search": "", "status": "", "minPrice": "", "maxPrice": ""}
    ).json()

    assert body["pagination"]["totalItems"] == 12


def test_search_is_case_insensitive(client, twelve_cars):
    body = client.get(CARS_URL, params={"search": "tOyO"}).json()

    assert body["pagination"]["totalItems"] == 4
    assert all(car["make"] == "Toyota" for car in body["items"])


def test_search_treats_wildcards_literally(client, twelve_cars):
    body = client.get(CARS_URL, params={"search": "%"}).json()

    assert body["pagination"]["totalItems"] == 0


def test_price_range_is_inclusive(client, twelve_cars):
    body = client.get(CARS_URL, params={"minPrice": "3000", "maxPrice": "5000"}).json()

    assert sorted(car["price"] for car in body["items"]) == [3000, 4000, 5000]


def test_status_filter(client, make_car):
    make_car(status=CarStatus.RESERVED.value)
    make_car()

    body = client.get(CARS_URL, params={"status": CarStatus.RESERVED.value}).json()

    assert body["pagination"]["totalItems"] == 1
    assert body["items"][0]["status"] == CarStatus.RESERVED.value


@pytest.mark.parametrize("params", [
    {"limit": 0},
    {"limit": 500},
    {"page": 0},
    {"sortBy": "mileage"},
    {"sortOrder": "up"},
    {"minPrice": "cheap"},
    {"limit": "ten"},
])
def test_bad_list_params_are_rejected(client, params):
    response = client.get(CARS_URL, params=params)

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"
