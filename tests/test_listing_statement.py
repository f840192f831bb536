"""build_statement() must select and order exactly like apply() does in memory."""
import pytest

from dealership.core.listing_query import ListingFilter, apply, build_statement


@pytest.fixture
async def stocked(make_car):
    return [
        await make_car(brand="Maruti", model="Swift", price=500000, year=2020),
        await make_car(brand="Honda", model="City", price=800000, year=2018, status="sold", fuel_type="Diesel"),
        await make_car(brand="Hyundai", model="Creta", price=1200000, year=2022, fuel_type="Diesel", km_driven=10000),
        await make_car(brand="Tata", model="Nexon EV", price=1500000, year=None, fuel_type="Electric", km_driven=5000),
        await make_car(brand="Maruti", model="Baleno", price=650000, year=2019, status="upcoming"),
        await make_car(brand="Honda", model="Amaze", price=700000, year=2021, km_driven=45000),
        await make_car(brand="Kia", model="Seltos_50%", price=700000, year=2021, km_driven=45000),
    ]


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"status": "all"},
        {"status": "sold"},
        {"status": "all", "sort_by": "price_desc"},
        {"status": "all", "sort_by": "price_asc"},
        {"status": "all", "sort_by": "year_desc"},
        {"status": "all", "sort_by": "year_asc"},
        {"status": "all", "sort_by": "km_asc"},
        {"status": "all", "sort_by": "km_desc"},
        {"brand": "Honda", "status": "all"},
        {"fuel_type": "Diesel"},
        {"search": "maru", "status": "all"},
        {"search": "CRETA"},
        {"search": "50%"},
        {"search": "s_"},
        {"min_price": 600000, "max_price": 1200000, "status": "all"},
        {"min_year": 2019, "max_year": 2021},
        {"min_price": 900000, "max_price": 100000},
    ],
)
async def test_statement_matches_in_memory(db_session, stocked, params):
    f = ListingFilter(**params)

    result = await db_session.execute(build_statement(f))
    from_sql = [c.id for c in result.scalars().all()]

    assert from_sql == [c.id for c in apply(stocked, f)]


async def test_like_wildcards_are_literal(db_session, stocked):
    result = await db_session.execute(build_statement(ListingFilter(search="%")))
    models = [c.model for c in result.scalars().all()]

    assert models == ["Seltos_50%"]
