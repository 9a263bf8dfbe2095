"""
repositories/job_repo.py
------------------------
Data access layer for job postings.
All SQL queries related to the `jobs` table live here.
"""

from typing import Any, Mapping, Optional

from psycopg2.errors import ForeignKeyViolation

from db.connection import query
from db.sql import WhereBuilder, contains_pattern, sql_for_partial_update
from models.company import COMPANY_COLUMNS, Company
from models.job import (
    JOB_COLUMNS,
    JOB_FIELD_COLUMNS,
    JOB_FILTERS,
    Job,
    validate_job_update,
    validate_new_job,
)
from models.validation import clean_filters, filter_flag, filter_int, require_str
from utils.errors import NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class JobRepository:
    """Repository for CRUD operations on the jobs table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: Mapping[str, Any]) -> dict:
        """
        Insert a new job; the store assigns its id.

        Args:
            data: {title, companyHandle, salary?, equity?}

        Returns:
            {id, title, salary, equity, companyHandle}

        Raises:
            ValidationError: If `data` is incomplete or malformed, or the
                company does not exist.
        """
        job = validate_new_job(data)
        sql = f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}
        """
        try:
            rows = query(sql, [job.title, job.salary, job.equity, job.company_handle])
        except ForeignKeyViolation:
            raise ValidationError(f"No company: {job.company_handle}")

        created = Job.from_row(rows[0])
        logger.info(f"Created job {created}")
        return created.to_dict()

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> list[dict]:
        """
        List jobs ordered by title, each with its company's name.

        Args:
            filters: Optional {title, minSalary, hasEquity}.
                `title` is a case-insensitive substring match; `hasEquity`
                restricts to equity > 0 when true and is ignored otherwise.

        Returns:
            List of {id, title, salary, equity, companyHandle, companyName}.

        Raises:
            ValidationError: On unknown filters or a non-integer minSalary.
        """
        filters = clean_filters(filters, JOB_FILTERS)

        where = WhereBuilder()
        title = filters.get("title")
        if title:
            where.add("j.title", "ILIKE", contains_pattern(require_str(title, "title")))
        if "minSalary" in filters:
            where.add("j.salary", ">=", filter_int(filters["minSalary"], "minSalary"))
        if filter_flag(filters.get("hasEquity")):
            where.add_raw("j.equity > 0")

        sql = f"""
            SELECT j.id, j.title, j.salary, j.equity, j.company_handle, c.name
            FROM jobs AS j
            LEFT JOIN companies AS c ON c.handle = j.company_handle
            {where.clause()}
            ORDER BY j.title
        """
        jobs = []
        for row in query(sql, where.values):
            job = Job.from_row(row).to_dict()
            job["companyName"] = row[5]
            jobs.append(job)
        return jobs

    def get(self, job_id: int) -> dict:
        """
        Fetch one job with its company.

        Returns:
            {id, title, salary, equity, company}
            where company is {handle, name, description, numEmployees, logoUrl},
            or None if the company row is gone.

        Raises:
            NotFoundError: If no job has this id.
        """
        job_id = self._parse_id(job_id)
        rows = query(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        job = Job.from_row(rows[0]).to_dict()
        company_handle = job.pop("companyHandle")
        company_rows = query(
            f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
            [company_handle],
        )
        job["company"] = Company.from_row(company_rows[0]).to_dict() if company_rows else None
        return job

    # ── UPDATE ────────────────────────────────────────────

    def update(self, job_id: int, data: Mapping[str, Any]) -> dict:
        """
        Partially update a job; only the supplied fields change.

        Args:
            job_id: Key of the job to update.
            data: Any of {title, salary, equity}.

        Returns:
            {id, title, salary, equity, companyHandle}

        Raises:
            ValidationError: If `data` is empty, names `id` or
                `companyHandle`, or is malformed.
            NotFoundError: If no job has this id.
        """
        job_id = self._parse_id(job_id)
        fields = validate_job_update(data)
        set_cols, values = sql_for_partial_update(fields, JOB_FIELD_COLUMNS)
        id_idx = len(values) + 1

        sql = f"""
            UPDATE jobs
            SET {set_cols}
            WHERE id = ${id_idx}
            RETURNING {JOB_COLUMNS}
        """
        rows = query(sql, [*values, job_id])
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        logger.info(f"Updated job #{job_id}: {', '.join(fields)}")
        return Job.from_row(rows[0]).to_dict()

    # ── DELETE ────────────────────────────────────────────

    def remove(self, job_id: int) -> None:
        """
        Delete a job by id.

        Raises:
            NotFoundError: If no job has this id.
        """
        job_id = self._parse_id(job_id)
        rows = query("DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        logger.info(f"Deleted job #{job_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _parse_id(job_id: Any) -> int:
        """Ids arrive from URLs as strings; anything non-integer cannot match a job."""
        if isinstance(job_id, (bool, float)):
            raise NotFoundError(f"No job: {job_id}")
        try:
            return int(job_id)
        except (TypeError, ValueError):
            raise NotFoundError(f"No job: {job_id}")
