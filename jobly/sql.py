"""
Helpers for building parameterized UPDATE statements.

Values are never interpolated into query text: every assignment gets a
``$n`` placeholder and the caller passes ``values`` alongside the SQL.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import BadRequestError


def partial_update_columns(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> Tuple[List[str], List[Any]]:
    """
    Translate a partial update into assignment fragments and their values.

    Args:
        data: Field name -> new value, e.g. {"firstName": "Aliya", "age": 32}
        js_to_sql: Field name -> column name; fields not listed keep their name

    Returns:
        (['"first_name"=$1', '"age"=$2'], ["Aliya", 32])

    Raises:
        BadRequestError: if ``data`` is empty
    """
    if not data:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols: List[str] = []
    values: List[Any] = []
    for idx, (field, value) in enumerate(data.items(), start=1):
        cols.append(f'"{js_to_sql.get(field) or field}"=${idx}')
        values.append(value)
    return cols, values


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Build the SET clause for a partial update.

    Returns:
        {"set_cols": '"first_name"=$1, "age"=$2', "values": ["Aliya", 32]}
    """
    cols, values = partial_update_columns(data, js_to_sql)
    return {"set_cols": ", ".join(cols), "values": values}
