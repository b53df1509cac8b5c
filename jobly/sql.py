"""
SQL construction helpers.

Responsibilities:
- Map logical field names (as callers spell them) to physical columns.
- Compile partial updates into a SET clause with positional parameters.
- Number positional parameters ($1..$n) across the pieces of one statement.

Non-Responsibilities:
- No statement execution.
- No knowledge of any particular table.

Invariant:
Values are only ever bound as parameters; the only text interpolated into
SQL is a column name drawn from a mapper configuration.
"""

from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, Union

from .errors import InvalidArgumentError
from .logger import get_logger

logger = get_logger()


def quote_identifier(name: str) -> str:
    """Quote a SQL identifier, doubling any embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


class SqlParams:
    """
    Accumulates positional parameter values for a single statement.

    Each call to add() binds one value and returns its placeholder, so SET
    and WHERE fragments compiled separately still number contiguously.
    """

    def __init__(self, values: Iterable[Any] = ()):
        self._values: List[Any] = list(values)

    def add(self, value: Any) -> str:
        self._values.append(value)
        return f"${len(self._values)}"

    @property
    def values(self) -> List[Any]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)


class ColumnMapper:
    """
    Static mapping from logical field names to physical column names.

    Fields missing from the mapping pass through unchanged. A miss is
    logged at DEBUG level, or rejected outright when strict=True.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None, strict: bool = False):
        self._mapping = MappingProxyType(dict(mapping or {}))
        self.strict = strict

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._mapping

    def __contains__(self, field: str) -> bool:
        return field in self._mapping

    def map_name(self, field: str) -> str:
        column = self._mapping.get(field)
        if column is not None:
            return column
        if self.strict:
            raise InvalidArgumentError(f"Unknown field: {field}")
        logger.debug("Field not in column mapping, using it as column name", field=field)
        return field

    def column_ref(self, field: str, table: Optional[str] = None) -> str:
        """Quoted physical column for a logical field, e.g. ``j."company_handle"``."""
        prefix = f"{table}." if table else ""
        return prefix + quote_identifier(self.map_name(field))

    def select_list(self, fields: Iterable[str], table: Optional[str] = None) -> str:
        """
        Render a SELECT list aliasing each physical column back to its
        logical field name, e.g. ``j."company_handle" AS "companyHandle"``.
        """
        items = []
        for field in fields:
            ref = self.column_ref(field, table)
            if field in self._mapping and self._mapping[field] != field:
                items.append(f"{ref} AS {quote_identifier(field)}")
            else:
                items.append(ref)
        return ", ".join(items)


class PartialUpdate(NamedTuple):
    set_cols: str
    values: List[Any]


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Union[ColumnMapper, Mapping[str, str], None] = None,
    params: Optional[SqlParams] = None,
) -> PartialUpdate:
    """
    Compile a partial update into a SET clause fragment.

    Args:
        data: Fields to update, in the order they should be bound
        js_to_sql: Logical-to-physical column mapping (ColumnMapper or dict)
        params: Accumulator to continue numbering into; a fresh one is used
            when omitted

    Returns:
        PartialUpdate with set_cols like '"first_name"=$1, "age"=$2' and the
        values bound by this call, in placeholder order

    Raises:
        InvalidArgumentError: if data is empty

    Example:
        sql_for_partial_update({"firstName": "Aliya", "age": 32},
                               {"firstName": "first_name"})
        # => PartialUpdate('"first_name"=$1, "age"=$2', ["Aliya", 32])
    """
    if not data:
        raise InvalidArgumentError("No data")

    mapper = js_to_sql if isinstance(js_to_sql, ColumnMapper) else ColumnMapper(js_to_sql)
    if params is None:
        params = SqlParams()
    start = len(params)

    cols = [
        f"{quote_identifier(mapper.map_name(field))}={params.add(value)}"
        for field, value in data.items()
    ]

    return PartialUpdate(", ".join(cols), params.values[start:])

