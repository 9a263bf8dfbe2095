"""
repositories/company_repo.py
----------------------------
Data access layer for companies.
All SQL queries related to the `companies` table live here.
"""

from typing import Any, Mapping, Optional

from psycopg2.errors import UniqueViolation

from db.connection import query
from db.sql import WhereBuilder, contains_pattern, sql_for_partial_update
from models.company import (
    COMPANY_COLUMNS,
    COMPANY_FIELD_COLUMNS,
    COMPANY_FILTERS,
    Company,
    validate_company_update,
    validate_new_company,
)
from models.job import JOB_COLUMNS, Job
from models.validation import clean_filters, filter_int, require_str
from utils.errors import DuplicateKeyError, NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class CompanyRepository:
    """Repository for CRUD operations on the companies table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: Mapping[str, Any]) -> dict:
        """
        Insert a new company.

        Args:
            data: {handle, name, description, numEmployees?, logoUrl?}

        Returns:
            {handle, name, description, numEmployees, logoUrl}

        Raises:
            ValidationError: If `data` is incomplete or malformed.
            DuplicateKeyError: If the handle (or name) is already taken.
        """
        company = validate_new_company(data)

        duplicate_check = query(
            "SELECT handle FROM companies WHERE handle = $1", [company.handle]
        )
        if duplicate_check:
            raise DuplicateKeyError(f"Duplicate company: {company.handle}")

        sql = f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}
        """
        try:
            rows = query(sql, [
                company.handle, company.name, company.description,
                company.num_employees, company.logo_url,
            ])
        except UniqueViolation:
            # Lost a race with a concurrent create, or the name is taken.
            raise DuplicateKeyError(f"Duplicate company: {company.handle}")

        created = Company.from_row(rows[0])
        logger.info(f"Created company {created}")
        return created.to_dict()

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> list[dict]:
        """
        List companies ordered by name.

        Args:
            filters: Optional {name, minEmployees, maxEmployees}.
                `name` is a case-insensitive substring match; the employee
                bounds are inclusive.

        Returns:
            List of {handle, name, description, numEmployees, logoUrl}.

        Raises:
            ValidationError: On unknown filters, non-integer bounds, or
                minEmployees greater than maxEmployees.
        """
        filters = clean_filters(filters, COMPANY_FILTERS)
        min_employees = (
            filter_int(filters["minEmployees"], "minEmployees")
            if "minEmployees" in filters else None
        )
        max_employees = (
            filter_int(filters["maxEmployees"], "maxEmployees")
            if "maxEmployees" in filters else None
        )
        if (
            min_employees is not None
            and max_employees is not None
            and min_employees > max_employees
        ):
            raise ValidationError("minEmployees cannot be greater than maxEmployees")

        where = WhereBuilder()
        name = filters.get("name")
        if name:
            where.add("name", "ILIKE", contains_pattern(require_str(name, "name")))
        if min_employees is not None:
            where.add("num_employees", ">=", min_employees)
        if max_employees is not None:
            where.add("num_employees", "<=", max_employees)

        sql = f"SELECT {COMPANY_COLUMNS} FROM companies{where.clause()} ORDER BY name"
        return [Company.from_row(r).to_dict() for r in query(sql, where.values)]

    def get(self, handle: str) -> dict:
        """
        Fetch one company with its jobs.

        Returns:
            {handle, name, description, numEmployees, logoUrl, jobs}
            where jobs is [{id, title, salary, equity, companyHandle}, ...]

        Raises:
            NotFoundError: If no company has this handle.
        """
        rows = query(
            f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle]
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        company = Company.from_row(rows[0]).to_dict()
        job_rows = query(
            f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = $1 ORDER BY id",
            [handle],
        )
        company["jobs"] = [Job.from_row(r).to_dict() for r in job_rows]
        return company

    # ── UPDATE ────────────────────────────────────────────

    def update(self, handle: str, data: Mapping[str, Any]) -> dict:
        """
        Partially update a company; only the supplied fields change.

        Args:
            handle: Key of the company to update.
            data: Any of {name, description, numEmployees, logoUrl}.

        Returns:
            {handle, name, description, numEmployees, logoUrl}

        Raises:
            ValidationError: If `data` is empty, names `handle`, or is malformed.
            DuplicateKeyError: If the new name belongs to another company.
            NotFoundError: If no company has this handle.
        """
        fields = validate_company_update(data)
        set_cols, values = sql_for_partial_update(fields, COMPANY_FIELD_COLUMNS)
        handle_idx = len(values) + 1

        sql = f"""
            UPDATE companies
            SET {set_cols}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_COLUMNS}
        """
        try:
            rows = query(sql, [*values, handle])
        except UniqueViolation:
            raise DuplicateKeyError(f"Duplicate company name: {fields.get('name')}")
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        logger.info(f"Updated company {handle}: {', '.join(fields)}")
        return Company.from_row(rows[0]).to_dict()

    # ── DELETE ────────────────────────────────────────────

    def remove(self, handle: str) -> None:
        """
        Delete a company (its jobs go with it).

        Raises:
            NotFoundError: If no company has this handle.
        """
        rows = query("DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        logger.info(f"Deleted company {handle}")
