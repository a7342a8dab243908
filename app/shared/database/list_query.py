# app/shared/database/list_query.py
"""
Shared list query builder.

Every resource listing goes through the same steps: collect filters from the
query string, apply them, count, sort, then cut one page out of the result.

Filters are plain values (`FieldFilter` / `SearchFilter`) composed before
they are turned into SQL, so services can build them without touching the
session. Empty values (None or "") mean "no filter".
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
import math

from fastapi import Query
from sqlalchemy import asc, desc, or_
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import ValidationError


class FilterOp(str, Enum):
    EQ = "eq"
    CONTAINS = "contains"
    GTE = "gte"
    LTE = "lte"


@dataclass(frozen=True)
class FieldFilter:
    field: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class SearchFilter:
    """Case-insensitive substring match on any of `fields`"""
    fields: Tuple[str, ...]
    term: str


Filter = Union[FieldFilter, SearchFilter]


@dataclass(frozen=True)
class ListParams:
    page: int = 1
    limit: int = 10
    sort_by: Optional[str] = None
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page:
    items: List[Any]
    total_items: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit)

    def pagination(self) -> Dict[str, int]:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages,
            "total_items": self.total_items,
            "items_per_page": self.limit,
        }


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def parse_number(value: Optional[str], name: str) -> Optional[Decimal]:
    """Parse a numeric query value, None when empty"""
    if is_empty(value):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{name} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{name} must be a number")
    return number


def normalize_list_params(
    page: int = 1,
    limit: Optional[int] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = "desc"
) -> ListParams:
    if limit is None:
        limit = settings.default_page_size
    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1:
        raise ValidationError("limit must be >= 1")
    if limit > settings.max_page_size:
        raise ValidationError(f"limit must be <= {settings.max_page_size}")

    order = (sort_order or "desc").strip().lower()
    if order not in ("asc", "desc"):
        raise ValidationError("sortOrder must be 'asc' or 'desc'")

    return ListParams(
        page=page,
        limit=limit,
        sort_by=None if is_empty(sort_by) else sort_by.strip(),
        sort_order=order
    )


def list_params(
    page: int = Query(1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Items per page"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort by"),
    sort_order: Optional[str] = Query("desc", alias="sortOrder", description="asc or desc")
) -> ListParams:
    """FastAPI dependency shared by every list endpoint"""
    return normalize_list_params(page, limit, sort_by, sort_order)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ListQueryBuilder:
    """
    Filter, sort and paginate one model.

    `sortable` maps public sort keys (as clients send them in `sortBy`) to
    model attribute names; filters always use attribute names.
    """

    def __init__(
        self,
        model,
        *,
        sortable: Dict[str, str],
        default_sort: str,
        search_fields: Sequence[str] = ()
    ):
        if default_sort not in sortable:
            raise ValueError(f"default sort '{default_sort}' is not sortable")
        self.model = model
        self.sortable = sortable
        self.default_sort = default_sort
        self.search_fields = tuple(search_fields)
        self.filters: List[Filter] = []

    # ==================== COMPOSITION ====================

    def add(self, query_filter: Filter) -> "ListQueryBuilder":
        if isinstance(query_filter, SearchFilter):
            if is_empty(query_filter.term) or not query_filter.fields:
                return self
        elif is_empty(query_filter.value):
            return self
        self.filters.append(query_filter)
        return self

    def equals(self, field: str, value: Any) -> "ListQueryBuilder":
        return self.add(FieldFilter(field, FilterOp.EQ, value))

    def contains(self, field: str, value: Optional[str]) -> "ListQueryBuilder":
        return self.add(FieldFilter(field, FilterOp.CONTAINS, value))

    def search(self, term: Optional[str]) -> "ListQueryBuilder":
        return self.add(SearchFilter(self.search_fields, term or ""))

    def between(
        self,
        field: str,
        minimum: Optional[str],
        maximum: Optional[str],
        *,
        names: Tuple[str, str] = ("min", "max")
    ) -> "ListQueryBuilder":
        """Inclusive numeric range; either bound may be empty"""
        self.add(FieldFilter(field, FilterOp.GTE, parse_number(minimum, names[0])))
        self.add(FieldFilter(field, FilterOp.LTE, parse_number(maximum, names[1])))
        return self

    # ==================== SQL ====================

    def _clause(self, query_filter: Filter):
        if isinstance(query_filter, SearchFilter):
            pattern = f"%{_escape_like(query_filter.term)}%"
            return or_(*[
                getattr(self.model, name).ilike(pattern, escape="\\")
                for name in query_filter.fields
            ])

        column = getattr(self.model, query_filter.field)
        if query_filter.op == FilterOp.EQ:
            return column == query_filter.value
        if query_filter.op == FilterOp.CONTAINS:
            return column.ilike(f"%{_escape_like(str(query_filter.value))}%", escape="\\")
        if query_filter.op == FilterOp.GTE:
            return column >= query_filter.value
        if query_filter.op == FilterOp.LTE:
            return column <= query_filter.value
        raise ValueError(f"Unsupported filter op: {query_filter.op}")

    def clauses(self) -> list:
        return [self._clause(f) for f in self.filters]

    def order_by(self, params: ListParams) -> list:
        sort_key = params.sort_by or self.default_sort
        if sort_key not in self.sortable:
            supported = ", ".join(sorted(self.sortable))
            raise ValidationError(f"Unsupported sortBy '{sort_key}'. Supported fields: {supported}")

        direction = desc if params.sort_order == "desc" else asc
        column = getattr(self.model, self.sortable[sort_key])
        # Primary key keeps pages stable when sort values tie
        primary_key = self.model.__mapper__.primary_key[0]
        return [direction(column), direction(primary_key)]

    def paginate(self, db: Session, params: ListParams, *options) -> Page:
        ordering = self.order_by(params)

        query = db.query(self.model).filter(*self.clauses())
        total = query.count()

        if options:
            query = query.options(*options)
        items = query.order_by(*ordering).offset(params.offset).limit(params.limit).all()

        return Page(items=items, total_items=total, page=params.page, limit=params.limit)
