import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from dealership.core.listing_query import (
    ListingFilter,
    SortKey,
    StatusFilter,
    apply,
    distinct_brands,
    order_images,
)

BASE_TIME = datetime(2026, 1, 1)


def car(brand="Maruti", model="Swift", price=500000, year=2020, status="available",
        fuel_type="Petrol", km_driven=30000, age_hours=0, id=None):
    return SimpleNamespace(
        id=id or uuid.uuid4(),
        brand=brand,
        model=model,
        price=price,
        year=year,
        status=status,
        fuel_type=fuel_type,
        km_driven=km_driven,
        created_at=BASE_TIME - timedelta(hours=age_hours),
    )


@pytest.fixture
def inventory():
    return [
        car("Maruti", "Swift", 500000, 2020, age_hours=5),
        car("Honda", "City", 800000, 2018, status="sold", fuel_type="Diesel", age_hours=1),
        car("Hyundai", "Creta", 1200000, 2022, fuel_type="Diesel", km_driven=10000, age_hours=2),
        car("Tata", "Nexon EV", 1500000, None, fuel_type="Electric", km_driven=5000, age_hours=3),
        car("Maruti", "Baleno", 650000, 2019, status="upcoming", age_hours=4),
        car("Honda", "Amaze", 700000, 2021, km_driven=45000, age_hours=0),
    ]


def test_two_car_scenario():
    maruti = car("Maruti", price=500000, year=2020, status="available")
    honda = car("Honda", price=800000, year=2018, status="sold")

    assert apply([maruti, honda], ListingFilter()) == [maruti]
    assert apply(
        [maruti, honda],
        ListingFilter(status=StatusFilter.all, sort_by=SortKey.price_desc),
    ) == [honda, maruti]


def test_default_is_available_newest_first(inventory):
    result = apply(inventory)

    assert all(r.status == "available" for r in result)
    assert len(result) == sum(1 for r in inventory if r.status == "available")
    assert [r.created_at for r in result] == sorted((r.created_at for r in result), reverse=True)


def test_status_all_returns_everything(inventory):
    assert len(apply(inventory, ListingFilter(status="all"))) == len(inventory)


def test_status_filter(inventory):
    result = apply(inventory, ListingFilter(status="upcoming"))

    assert [r.model for r in result] == ["Baleno"]


def test_output_is_subset_and_idempotent(inventory):
    f = ListingFilter(status="all", fuel_type="Diesel", sort_by="price_asc")
    once = apply(inventory, f)
    twice = apply(once, f)

    assert all(r in inventory for r in once)
    assert once == twice


def test_year_desc_puts_missing_year_last(inventory):
    result = apply(inventory, ListingFilter(status="all", sort_by="year_desc"))
    years = [r.year for r in result]

    assert years[-1] is None
    dated = [y for y in years if y is not None]
    assert dated == sorted(dated, reverse=True)


def test_year_asc_also_puts_missing_year_last(inventory):
    years = [r.year for r in apply(inventory, ListingFilter(status="all", sort_by="year_asc"))]

    assert years[-1] is None
    assert years[:-1] == sorted(years[:-1])


@pytest.mark.parametrize(
    "sort_by, attr, reverse",
    [("price_asc", "price", False), ("price_desc", "price", True),
     ("km_asc", "km_driven", False), ("km_desc", "km_driven", True)],
)
def test_numeric_sorts(inventory, sort_by, attr, reverse):
    values = [getattr(r, attr) for r in apply(inventory, ListingFilter(status="all", sort_by=sort_by))]

    assert values == sorted(values, reverse=reverse)


def test_ties_broken_by_id():
    ids = sorted((uuid.uuid4() for _ in range(4)), key=str)
    records = [car(price=600000, id=i) for i in reversed(ids)]

    result = apply(records, ListingFilter(sort_by="price_asc"))

    assert [r.id for r in result] == ids


def test_brand_and_fuel_are_exact(inventory):
    assert {r.model for r in apply(inventory, ListingFilter(brand="Honda"))} == {"Amaze"}
    assert apply(inventory, ListingFilter(brand="honda")) == []
    assert [r.model for r in apply(inventory, ListingFilter(fuel_type="Electric"))] == ["Nexon EV"]


def test_search_is_case_insensitive_on_brand_or_model(inventory):
    by_model = apply(inventory, ListingFilter(search="cRETa"))
    by_brand = apply(inventory, ListingFilter(search="maru"))

    assert [r.model for r in by_model] == ["Creta"]
    assert [r.model for r in by_brand] == ["Swift"]


def test_blank_search_is_ignored(inventory):
    assert apply(inventory, ListingFilter(search="   ")) == apply(inventory)


def test_bounds_are_inclusive(inventory):
    result = apply(inventory, ListingFilter(status="all", min_price=650000, max_price=800000))

    assert sorted(r.price for r in result) == [650000, 700000, 800000]


def test_year_bounds_exclude_missing_year(inventory):
    result = apply(inventory, ListingFilter(min_year=2000))

    assert all(r.year is not None for r in result)


def test_inverted_bounds_give_empty_result(inventory):
    assert apply(inventory, ListingFilter(min_price=900000, max_price=100000)) == []
    assert apply(inventory, ListingFilter(min_year=2023, max_year=2019)) == []


def test_zero_bound_is_applied():
    free = car(price=0)
    paid = car(price=10)

    assert apply([free, paid], ListingFilter(max_price=0)) == [free]


def test_unknown_filter_key_rejected():
    with pytest.raises(ValidationError):
        ListingFilter(colour="red")


def test_unknown_sort_key_rejected():
    with pytest.raises(ValidationError):
        ListingFilter(sort_by="cheapest")


def test_distinct_brands(inventory):
    assert distinct_brands(inventory) == ["Honda", "Hyundai", "Maruti", "Tata"]


def test_distinct_brands_ignores_non_available():
    records = [car("Skoda", status="sold"), car("Kia", status="upcoming"), car("Audi")]

    assert distinct_brands(records) == ["Audi"]


def test_order_images():
    first = SimpleNamespace(id=uuid.uuid4(), display_order=0, created_at=BASE_TIME)
    second = SimpleNamespace(id=uuid.uuid4(), display_order=1, created_at=BASE_TIME - timedelta(days=1))
    third = SimpleNamespace(id=uuid.uuid4(), display_order=1, created_at=BASE_TIME)

    assert order_images([third, second, first]) == [first, second, third]
