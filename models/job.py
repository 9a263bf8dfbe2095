"""
models/job.py
-------------
Domain model for job postings, plus the tables mapping public field names
to columns of the `jobs` table.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from models.validation import (
    check_fields,
    format_equity,
    optional_equity,
    optional_non_negative_int,
    require_str,
)

# Public (API) field name -> column name. Names not listed map to themselves.
JOB_FIELD_COLUMNS: dict[str, str] = {
    "companyHandle": "company_handle",
}

# Column order used by every SELECT / RETURNING list; see Job.from_row.
JOB_COLUMNS = "id, title, salary, equity, company_handle"

JOB_FIELDS = ("title", "salary", "equity", "companyHandle")
JOB_REQUIRED_FIELDS = ("title", "companyHandle")
JOB_UPDATABLE_FIELDS = ("title", "salary", "equity")
JOB_IMMUTABLE_FIELDS = ("id", "companyHandle")
JOB_FILTERS = ("title", "minSalary", "hasEquity")


@dataclass
class Job:
    """
    A job posted by a company.

    Attributes:
        title: Job title.
        company_handle: Handle of the owning company (immutable).
        salary: Yearly salary, if listed.
        equity: Fraction of equity offered, in [0, 1], if any.
        id: Database primary key (None for new records).
    """
    title: str
    company_handle: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: tuple) -> "Job":
        """Build a Job from a row selected with JOB_COLUMNS."""
        return cls(
            id=row[0],
            title=row[1],
            salary=row[2],
            equity=row[3],
            company_handle=row[4],
        )

    def to_dict(self) -> dict:
        """Canonical representation using public field names."""
        return {
            "id": self.id,
            "title": self.title,
            "salary": self.salary,
            "equity": format_equity(self.equity),
            "companyHandle": self.company_handle,
        }

    def __str__(self) -> str:
        return f"#{self.id} {self.title} @ {self.company_handle}"


def validate_new_job(data: Any) -> Job:
    """
    Check a create payload and build the Job to insert.

    Raises:
        ValidationError: On missing, unknown or malformed fields.
    """
    check_fields(data, JOB_FIELDS, JOB_REQUIRED_FIELDS)
    return Job(
        title=require_str(data["title"], "title"),
        company_handle=require_str(data["companyHandle"], "companyHandle"),
        salary=optional_non_negative_int(data.get("salary"), "salary"),
        equity=optional_equity(data.get("equity")),
    )


def validate_job_update(data: Any) -> dict:
    """
    Check a partial-update payload. `id` and `companyHandle` cannot change.

    Returns:
        The fields to update, in the order supplied.

    Raises:
        ValidationError: If a field is unknown, immutable or malformed.
    """
    check_fields(data, JOB_UPDATABLE_FIELDS, immutable=JOB_IMMUTABLE_FIELDS)
    checks = {
        "title": lambda v: require_str(v, "title"),
        "salary": lambda v: optional_non_negative_int(v, "salary"),
        "equity": optional_equity,
    }
    return {name: checks[name](value) for name, value in data.items()}
