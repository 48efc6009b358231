"""
Companies Repository.

Responsibilities:
- CRUD operations for companies table.
- Name / employee-count filtering for listings.
- Nesting a company's jobs on lookup.

Non-Responsibilities:
- No request validation.
- No authorization.
- No multi-statement transactions.

Invariant:
Company handles are unique; create never inserts a second row for a handle.
"""

from typing import Any, Dict, List, Mapping, Optional

from jobly.database import Database, get_database
from jobly.errors import BadRequestError, NotFoundError
from jobly.logger import get_logger
from jobly.query_builder import CONTAINS, GTE, LTE, FilterField, build_filtered_query
from jobly.sql import sql_for_partial_update

from .jobs import format_equity

COMPANY_FILTERS = (
    FilterField("name", "name", CONTAINS),
    FilterField("minEmployees", "num_employees", GTE),
    FilterField("maxEmployees", "num_employees", LTE),
)

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


class CompanyRepository:
    """Related functions for companies."""

    resource = "company"

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    def exists(self, handle: str) -> bool:
        rows = self.db.query("SELECT handle FROM companies WHERE handle = $1", [handle])
        return bool(rows)

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a company from data and return it.

        data should be {handle, name, description, numEmployees, logoUrl}

        Returns {handle, name, description, numEmployees, logoUrl}

        Raises BadRequestError if the handle is already in the database.
        """
        handle = data["handle"]
        if self.exists(handle):
            raise BadRequestError(f"Duplicate company: {handle}")

        rows = self.db.query(
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [
                handle,
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )

        logger = get_logger()
        logger.record_operation(self.resource, "create")
        logger.info("Company created", handle=handle)
        return rows[0]

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find all companies, optionally filtered by name, minEmployees and
        maxEmployees. A min above the max is not rejected here; it simply
        matches nothing.

        Returns [{handle, name, description, numEmployees, logoUrl}, ...]
        """
        sql, values = build_filtered_query(
            f"SELECT {COMPANY_COLUMNS} FROM companies",
            COMPANY_FILTERS,
            filters,
            order_by="name",
        )
        rows = self.db.query(sql, values)
        get_logger().record_operation(self.resource, "find_all")
        return rows

    def get(self, handle: str) -> Dict[str, Any]:
        """
        Given a company handle, return data about the company.

        Returns {handle, name, description, numEmployees, logoUrl, jobs}
          where jobs is [{id, title, salary, equity}, ...]

        Raises NotFoundError if not found.
        """
        rows = self.db.query(
            """SELECT c.handle,
                      c.name,
                      c.description,
                      c.num_employees AS "numEmployees",
                      c.logo_url AS "logoUrl",
                      j.id AS job_id,
                      j.title AS job_title,
                      j.salary AS job_salary,
                      j.equity AS job_equity
               FROM companies AS c
               LEFT JOIN jobs AS j ON c.handle = j.company_handle
               WHERE c.handle = $1
               ORDER BY j.id""",
            [handle],
        )
        get_logger().record_operation(self.resource, "get")
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        first = rows[0]
        company = {k: v for k, v in first.items() if not k.startswith("job_")}
        # A company without jobs still yields one row, with NULL job columns.
        company["jobs"] = [
            {
                "id": row["job_id"],
                "title": row["job_title"],
                "salary": row["job_salary"],
                "equity": format_equity(row["job_equity"]),
            }
            for row in rows
            if row["job_id"] is not None
        ]
        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Update company data with ``data``.

        This is a partial update: it's fine if data doesn't contain all the
        fields; only the provided ones change.

        Data can include {name, description, numEmployees, logoUrl}

        Raises NotFoundError if not found, BadRequestError if data is empty.
        """
        update = sql_for_partial_update(data, JS_TO_SQL)
        values = update["values"]
        handle_idx = f"${len(values) + 1}"

        rows = self.db.query(
            f"""UPDATE companies
                SET {update["set_cols"]}
                WHERE handle = {handle_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*values, handle],
        )
        logger = get_logger()
        logger.record_operation(self.resource, "update")
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        logger.info("Company updated", handle=handle, fields=list(data))
        return rows[0]

    def remove(self, handle: str) -> None:
        """Delete the given company (and, by cascade, its jobs)."""
        rows = self.db.query(
            "DELETE FROM companies WHERE handle = $1 RETURNING handle",
            [handle],
        )
        logger = get_logger()
        logger.record_operation(self.resource, "remove")
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        logger.info("Company removed", handle=handle)
