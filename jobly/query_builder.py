"""
Filter builder for list queries.

Each resource describes its filters once as a table of FilterField
entries; build_filtered_query turns whichever criteria are present into
WHERE/AND clauses with positional parameters.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import BadRequestError

CONTAINS = "contains"
GTE = "gte"
LTE = "lte"
POSITIVE = "positive"

OPERATORS = (CONTAINS, GTE, LTE, POSITIVE)


def _escape_like(value: str) -> str:
    """Make % and _ match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class FilterField:
    """One filterable field: external name, physical column, comparison."""

    name: str
    column: str
    op: str

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise ValueError(f"Unknown filter operator: {self.op}")

    def clause(self, position: int) -> str:
        if self.op == CONTAINS:
            return f"lower({self.column}) LIKE ${position} ESCAPE '\\'"
        if self.op == GTE:
            return f"{self.column} >= ${position}"
        if self.op == LTE:
            return f"{self.column} <= ${position}"
        return f"{self.column} > 0"

    def takes_param(self) -> bool:
        return self.op != POSITIVE

    def param(self, value: Any) -> Any:
        if self.op == CONTAINS:
            return f"%{_escape_like(str(value).lower())}%"
        return value

    def is_present(self, value: Any) -> bool:
        # Flags only filter when set; everything else filters when given.
        if self.op == POSITIVE:
            return bool(value)
        return value is not None


def build_filtered_query(
    base_sql: str,
    fields: Sequence[FilterField],
    criteria: Optional[Mapping[str, Any]] = None,
    order_by: Optional[str] = None,
    start: int = 1,
) -> Tuple[str, List[Any]]:
    """
    Append WHERE/AND clauses for the present criteria to ``base_sql``.

    Clauses are added in the order of ``fields``, not of ``criteria``.
    The first present filter is joined with WHERE and every later one with
    AND. Placeholders are numbered from ``start`` in append order.

    Args:
        base_sql: SELECT ... FROM ... without a WHERE clause
        fields: Filter table for the resource
        criteria: Filter name -> value; None values are ignored
        order_by: Optional ORDER BY expression appended last
        start: Position of the first placeholder

    Returns:
        (sql, values)

    Raises:
        BadRequestError: if criteria names a filter not in ``fields``
    """
    criteria = dict(criteria or {})
    known: Dict[str, FilterField] = {f.name: f for f in fields}
    unknown = sorted(set(criteria) - set(known))
    if unknown:
        raise BadRequestError(f"Unknown filter: {', '.join(unknown)}")

    clauses: List[str] = []
    values: List[Any] = []
    for field in fields:
        value = criteria.get(field.name)
        if not field.is_present(value):
            continue
        position = start + len(values)
        clauses.append(field.clause(position))
        if field.takes_param():
            values.append(field.param(value))

    sql = base_sql.rstrip()
    for i, clause in enumerate(clauses):
        sql += f" {'WHERE' if i == 0 else 'AND'} {clause}"
    if order_by:
        sql += f" ORDER BY {order_by}"
    return sql, values
