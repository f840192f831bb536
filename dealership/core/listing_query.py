"""Filter and sort selection for the public car listings.

The same ListingFilter drives two paths that must agree:
  * apply()           - in-memory, over already-fetched records
  * build_statement() - server-side, as a SQLAlchemy select over cars

Ties on the chosen sort key are broken by id ascending on both paths.
"""
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field
from sqlalchemy import Select, or_, select

from dealership.models.car import Car
from dealership.models.enums import CarStatus, FuelType


class StatusFilter(str, Enum):
    available = "available"
    sold = "sold"
    upcoming = "upcoming"
    all = "all"


class SortKey(str, Enum):
    newest = "newest"
    price_asc = "price_asc"
    price_desc = "price_desc"
    year_desc = "year_desc"
    year_asc = "year_asc"
    km_asc = "km_asc"
    km_desc = "km_desc"


class ListingFilter(BaseModel):
    """Every recognised listing filter/sort key. Anything else is rejected."""
    brand: Optional[str] = Field(None, description="Exact brand")
    fuel_type: Optional[FuelType] = Field(None, description="Exact fuel type")
    search: Optional[str] = Field(None, description="Case-insensitive substring of brand or model")
    min_price: Optional[int] = Field(None, ge=0)
    max_price: Optional[int] = Field(None, ge=0)
    min_year: Optional[int] = Field(None, ge=0)
    max_year: Optional[int] = Field(None, ge=0)
    status: Optional[StatusFilter] = Field(None, description="Unset means available only")
    sort_by: SortKey = SortKey.newest

    class Config:
        extra = "forbid"

    @property
    def effective_status(self) -> StatusFilter:
        return self.status or StatusFilter.available

    @property
    def search_term(self) -> Optional[str]:
        if self.search is None or not self.search.strip():
            return None
        return self.search.strip()


def _status_value(status) -> str:
    return status.value if isinstance(status, Enum) else status


def matches(record, listing_filter: ListingFilter) -> bool:
    """True when the record satisfies every constraint set on the filter."""
    f = listing_filter
    status = f.effective_status
    if status != StatusFilter.all and _status_value(record.status) != status.value:
        return False
    if f.brand is not None and record.brand != f.brand:
        return False
    if f.fuel_type is not None and _status_value(record.fuel_type) != f.fuel_type.value:
        return False
    if f.min_price is not None and record.price < f.min_price:
        return False
    if f.max_price is not None and record.price > f.max_price:
        return False
    if f.min_year is not None and (record.year is None or record.year < f.min_year):
        return False
    if f.max_year is not None and (record.year is None or record.year > f.max_year):
        return False
    term = f.search_term
    if term is not None:
        needle = term.lower()
        if needle not in (record.brand or "").lower() and needle not in (record.model or "").lower():
            return False
    return True


def _sorted(records: Sequence, sort_by: SortKey) -> list:
    # Pre-sort by id; every later sort is stable, so id is the tie-break.
    by_id = sorted(records, key=lambda r: str(r.id))

    if sort_by in (SortKey.year_desc, SortKey.year_asc):
        dated = [r for r in by_id if r.year is not None]
        undated = [r for r in by_id if r.year is None]
        dated.sort(key=lambda r: r.year, reverse=sort_by == SortKey.year_desc)
        return dated + undated

    if sort_by == SortKey.price_asc:
        return sorted(by_id, key=lambda r: r.price)
    if sort_by == SortKey.price_desc:
        return sorted(by_id, key=lambda r: r.price, reverse=True)
    if sort_by == SortKey.km_asc:
        return sorted(by_id, key=lambda r: r.km_driven)
    if sort_by == SortKey.km_desc:
        return sorted(by_id, key=lambda r: r.km_driven, reverse=True)
    return sorted(by_id, key=lambda r: r.created_at, reverse=True)


def apply(records: Iterable, listing_filter: Optional[ListingFilter] = None) -> list:
    """Ordered subset of ``records`` to display for ``listing_filter``."""
    f = listing_filter or ListingFilter()
    return _sorted([r for r in records if matches(r, f)], f.sort_by)


def distinct_brands(records: Iterable) -> list[str]:
    """Brands offered in the filter dropdown: available listings only, sorted."""
    return sorted({
        r.brand for r in records
        if _status_value(r.status) == CarStatus.available.value and r.brand
    })


def order_images(images: Iterable) -> list:
    """Gallery order: display_order, then upload time, then id."""
    return sorted(
        images,
        key=lambda i: (i.display_order, i.created_at or datetime.min, str(i.id)),
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


_ORDERING = {
    SortKey.newest: lambda: Car.created_at.desc(),
    SortKey.price_asc: lambda: Car.price.asc(),
    SortKey.price_desc: lambda: Car.price.desc(),
    SortKey.year_desc: lambda: Car.year.desc().nulls_last(),
    SortKey.year_asc: lambda: Car.year.asc().nulls_last(),
    SortKey.km_asc: lambda: Car.km_driven.asc(),
    SortKey.km_desc: lambda: Car.km_driven.desc(),
}


def build_statement(listing_filter: Optional[ListingFilter] = None) -> Select:
    """SQLAlchemy select over cars with the same predicates and ordering as apply()."""
    f = listing_filter or ListingFilter()
    query = select(Car)

    status = f.effective_status
    if status != StatusFilter.all:
        query = query.where(Car.status == status.value)
    if f.brand is not None:
        query = query.where(Car.brand == f.brand)
    if f.fuel_type is not None:
        query = query.where(Car.fuel_type == f.fuel_type.value)
    if f.min_price is not None:
        query = query.where(Car.price >= f.min_price)
    if f.max_price is not None:
        query = query.where(Car.price <= f.max_price)
    if f.min_year is not None:
        query = query.where(Car.year >= f.min_year)
    if f.max_year is not None:
        query = query.where(Car.year <= f.max_year)
    term = f.search_term
    if term is not None:
        pattern = f"%{_escape_like(term)}%"
        query = query.where(
            or_(
                Car.brand.ilike(pattern, escape="\\"),
                Car.model.ilike(pattern, escape="\\"),
            )
        )

    return query.order_by(_ORDERING[f.sort_by](), Car.id.asc())
