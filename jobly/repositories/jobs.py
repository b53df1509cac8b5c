"""
Jobs Repository.

Responsibilities:
- CRUD operations for the jobs table.
- Filtered listing joined against companies.
- Reshaping rows into the dicts callers receive.

Non-Responsibilities:
- No request validation; patches arrive pre-filtered to mutable fields.
- No retries; store errors surface to the caller.

Invariant:
Every statement is parameterized. NotFoundError is raised only after an
empty result, never inferred from a store exception.
"""

import functools
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..database import Store
from ..errors import NotFoundError
from ..filters import compile_filters
from ..logger import get_logger
from ..sql import ColumnMapper, SqlParams, quote_identifier, sql_for_partial_update
from .companies import CompanyRepository

logger = get_logger()

JOB_COLUMNS = ColumnMapper({
    "companyHandle": "company_handle",
})

JOB_FIELDS = ("id", "title", "salary", "equity", "companyHandle")
INSERT_FIELDS = ("title", "salary", "equity", "companyHandle")


def _tracked(operation: str) -> Callable:
    """Record attempt/success/failure metrics for a repository operation."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger.record_operation_attempt(operation)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.record_operation_failure(operation, type(e).__name__)
                raise
            logger.record_operation_success(operation)
            return result
        return wrapper
    return decorator


def equity_to_str(value: Any) -> Optional[str]:
    """Render equity as a plain decimal string, whatever numeric type the driver returns."""
    if value is None:
        return None
    return format(Decimal(str(value)), "f")


def _reshape(row: Mapping[str, Any]) -> Dict[str, Any]:
    job = dict(row)
    if "equity" in job:
        job["equity"] = equity_to_str(job["equity"])
    return job


class JobRepository:
    """
    Data access for jobs.

    Args:
        store: Store executing the SQL
        columns: Logical-to-physical column mapping for the jobs table
        companies: Reader used by get() to embed the owning company
    """

    def __init__(
        self,
        store: Store,
        columns: ColumnMapper = JOB_COLUMNS,
        companies: Optional[CompanyRepository] = None,
    ):
        self.store = store
        self.columns = columns
        self.companies = companies or CompanyRepository(store)

    def _returning(self) -> str:
        return self.columns.select_list(JOB_FIELDS)

    @_tracked("create")
    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job from {title, salary, equity, companyHandle}.

        Returns {id, title, salary, equity, companyHandle}.

        Raises:
            ConstraintViolationError: unknown companyHandle or a failed check
        """
        params = SqlParams()
        columns = ", ".join(quote_identifier(self.columns.map_name(f)) for f in INSERT_FIELDS)
        placeholders = ", ".join(params.add(data.get(f)) for f in INSERT_FIELDS)

        rows = self.store.execute(
            f"""INSERT INTO jobs ({columns})
                VALUES ({placeholders})
                RETURNING {self._returning()}""",
            params.values,
        )
        job = _reshape(rows[0])
        logger.info("Created job", id=job["id"], company=job["companyHandle"])
        return job

    @_tracked("find_all")
    def find_all(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find jobs, optionally filtered by title, minSalary and hasEquity.

        Returns [{id, title, salary, equity, companyHandle, companyName}, ...]
        ordered by title.
        """
        params = SqlParams()
        where, _ = compile_filters(criteria, params, table="j", columns=self.columns)
        company_handle = self.columns.column_ref("companyHandle", "j")
        title = self.columns.column_ref("title", "j")
        job_id = self.columns.column_ref("id", "j")

        rows = self.store.execute(
            f"""SELECT {self.columns.select_list(JOB_FIELDS, table="j")},
                       c.name AS "companyName"
                FROM jobs AS j
                LEFT JOIN companies AS c ON c.handle = {company_handle}
                {where}
                ORDER BY {title}, {job_id}""",
            params.values,
        )
        logger.debug("Listed jobs", criteria=dict(criteria or {}), count=len(rows))
        return [_reshape(row) for row in rows]

    @_tracked("get")
    def get(self, job_id: int) -> Dict[str, Any]:
        """
        Given a job id, return data about the job.

        Returns {id, title, salary, equity, company}
          where company is {handle, name, description, numEmployees, logoUrl}

        Raises:
            NotFoundError: no job with this id
        """
        rows = self.store.execute(
            f"""SELECT {self._returning()}
                FROM jobs
                WHERE {self.columns.column_ref("id")} = $1""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        job = _reshape(rows[0])
        job["company"] = self.companies.get(job.pop("companyHandle"))
        return job

    @_tracked("update")
    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Update job data with `data`.

        This is a "partial update": only the fields in data change. Data can
        include {title, salary, equity}.

        Returns {id, title, salary, equity, companyHandle}.

        Raises:
            InvalidArgumentError: data is empty
            NotFoundError: no job with this id
        """
        params = SqlParams()
        set_cols, _ = sql_for_partial_update(data, self.columns, params)
        id_placeholder = params.add(job_id)

        rows = self.store.execute(
            f"""UPDATE jobs
                SET {set_cols}
                WHERE {self.columns.column_ref("id")} = {id_placeholder}
                RETURNING {self._returning()}""",
            params.values,
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        job = _reshape(rows[0])
        logger.info("Updated job", id=job_id, fields=list(data))
        return job

    @_tracked("remove")
    def remove(self, job_id: int) -> None:
        """
        Delete given job from database.

        Raises:
            NotFoundError: no job with this id
        """
        id_column = self.columns.column_ref("id")
        rows = self.store.execute(
            f"""DELETE FROM jobs
                WHERE {id_column} = $1
                RETURNING {id_column}""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Removed job", id=job_id)
