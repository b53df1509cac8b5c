"""
Filter criteria for listing jobs.

Each criterion is a small variant that renders its own predicate and binds
its own parameters. compile_filters() turns a caller's criteria mapping into
a WHERE clause, always emitting predicates in the order
title, minSalary, hasEquity.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, NamedTuple, Optional

from .errors import InvalidArgumentError
from .sql import ColumnMapper, SqlParams

FILTER_KEYS = ("title", "minSalary", "hasEquity")


@dataclass(frozen=True)
class TitleMatch:
    """Case-insensitive substring match on the job title."""

    title: str

    def render(self, params: SqlParams, columns: ColumnMapper, table: str = "j") -> str:
        column = columns.column_ref("title", table)
        return f"LOWER({column}) LIKE LOWER({params.add(f'%{self.title}%')})"


@dataclass(frozen=True)
class MinSalary:
    """Inclusive lower bound on salary; rows with no salary never match."""

    min_salary: int

    def render(self, params: SqlParams, columns: ColumnMapper, table: str = "j") -> str:
        return f"{columns.column_ref('salary', table)} >= {params.add(self.min_salary)}"


@dataclass(frozen=True)
class HasEquity:
    """Only jobs offering a non-zero equity stake."""

    def render(self, params: SqlParams, columns: ColumnMapper, table: str = "j") -> str:
        return f"{columns.column_ref('equity', table)} > 0"


class FilterClause(NamedTuple):
    where: str
    values: List[Any]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_criteria(criteria: Optional[Mapping[str, Any]]) -> list:
    """
    Build the active filter variants from a criteria mapping.

    Raises:
        InvalidArgumentError: on unknown keys or malformed values
    """
    criteria = criteria or {}

    unknown = sorted(set(criteria) - set(FILTER_KEYS))
    if unknown:
        raise InvalidArgumentError(f"Unknown filter: {', '.join(unknown)}")

    filters = []

    title = criteria.get("title")
    if title is not None:
        if not isinstance(title, str):
            raise InvalidArgumentError("title filter must be a string")
        if title:
            filters.append(TitleMatch(title))

    min_salary = criteria.get("minSalary")
    if min_salary is not None:
        if not _is_int(min_salary) or min_salary < 0:
            raise InvalidArgumentError("minSalary filter must be a non-negative integer")
        filters.append(MinSalary(min_salary))

    has_equity = criteria.get("hasEquity")
    if has_equity is not None:
        if not isinstance(has_equity, bool):
            raise InvalidArgumentError("hasEquity filter must be a boolean")
        if has_equity:
            filters.append(HasEquity())

    return filters


def compile_filters(
    criteria: Optional[Mapping[str, Any]] = None,
    params: Optional[SqlParams] = None,
    table: str = "j",
    columns: Optional[ColumnMapper] = None,
) -> FilterClause:
    """
    Compile criteria into a WHERE clause.

    Args:
        criteria: Mapping with any of title, minSalary, hasEquity
        params: Accumulator to continue numbering into
        table: Alias of the jobs table in the enclosing query
        columns: Mapping used to resolve the filtered columns; identity when omitted

    Returns:
        FilterClause whose where is "" when no criterion is active,
        otherwise "WHERE <p1> AND <p2> ..."
    """
    if params is None:
        params = SqlParams()
    if columns is None:
        columns = ColumnMapper()
    start = len(params)

    predicates = [f.render(params, columns, table) for f in parse_criteria(criteria)]
    if not predicates:
        return FilterClause("", [])

    return FilterClause("WHERE " + " AND ".join(predicates), params.values[start:])
