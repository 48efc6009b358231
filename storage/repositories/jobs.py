"""
Jobs Repository.

Responsibilities:
- CRUD operations for jobs table.
- Title / salary / equity filtering for listings.

Non-Responsibilities:
- No request validation.
- No authorization.
- No multi-statement transactions.

Invariant:
Every operation is a single SQL statement with positional parameters.
"""

from typing import Any, Dict, List, Mapping, Optional

from jobly.database import Database, get_database
from jobly.errors import NotFoundError
from jobly.logger import get_logger
from jobly.query_builder import CONTAINS, GTE, POSITIVE, FilterField, build_filtered_query
from jobly.sql import sql_for_partial_update

JOB_FILTERS = (
    FilterField("title", "title", CONTAINS),
    FilterField("minSalary", "salary", GTE),
    FilterField("hasEquity", "equity", POSITIVE),
)

JS_TO_SQL = {
    "companyHandle": "company_handle",
}

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def format_equity(value: Any) -> Optional[str]:
    """Equity is a decimal; drivers hand back float or Decimal, callers get a string."""
    if value is None:
        return None
    return str(value)


def _format_job(row: Dict[str, Any]) -> Dict[str, Any]:
    return {**row, "equity": format_equity(row.get("equity"))}


def _bind_equity(data: Mapping[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    if data.get("equity") is not None:
        data["equity"] = str(data["equity"])
    return data


class JobRepository:
    """Related functions for jobs."""

    resource = "job"

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job from data and return it.

        data should be {title, salary, equity, companyHandle}

        Returns {id, title, salary, equity, companyHandle}
        """
        data = _bind_equity(data)
        rows = self.db.query(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
        )
        job = _format_job(rows[0])

        logger = get_logger()
        logger.record_operation(self.resource, "create")
        logger.info("Job created", id=job["id"], company_handle=job["companyHandle"])
        return job

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find all jobs, optionally filtered by title, minSalary and hasEquity.

        Returns [{id, title, salary, equity, companyHandle}, ...]
        """
        sql, values = build_filtered_query(
            f"SELECT {JOB_COLUMNS} FROM jobs",
            JOB_FILTERS,
            filters,
            order_by="title, id",
        )
        rows = self.db.query(sql, values)
        get_logger().record_operation(self.resource, "find_all")
        return [_format_job(row) for row in rows]

    def get(self, job_id: int) -> Dict[str, Any]:
        """
        Given a job id, return data about the job.

        Raises NotFoundError if not found.
        """
        rows = self.db.query(
            f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1",
            [job_id],
        )
        get_logger().record_operation(self.resource, "get")
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        return _format_job(rows[0])

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the supplied fields change.

        Data can include {title, salary, equity}

        Raises NotFoundError if not found, BadRequestError if data is empty.
        """
        update = sql_for_partial_update(_bind_equity(data), JS_TO_SQL)
        values = update["values"]
        id_idx = f"${len(values) + 1}"

        rows = self.db.query(
            f"""UPDATE jobs
                SET {update["set_cols"]}
                WHERE id = {id_idx}
                RETURNING {JOB_COLUMNS}""",
            [*values, job_id],
        )
        logger = get_logger()
        logger.record_operation(self.resource, "update")
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        logger.info("Job updated", id=job_id, fields=list(data))
        return _format_job(rows[0])

    def remove(self, job_id: int) -> None:
        """Delete the given job. Raises NotFoundError if not found."""
        rows = self.db.query(
            "DELETE FROM jobs WHERE id = $1 RETURNING id",
            [job_id],
        )
        logger = get_logger()
        logger.record_operation(self.resource, "remove")
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        logger.info("Job removed", id=job_id)
