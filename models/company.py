"""
models/company.py
-----------------
Domain model for companies, plus the tables mapping public field names
to columns of the `companies` table.
"""

from dataclasses import dataclass
from typing import Any, Optional

from utils.errors import ValidationError
from models.validation import (
    check_fields,
    optional_non_negative_int,
    optional_url,
    require_str,
)

# Public (API) field name -> column name. Names not listed map to themselves.
COMPANY_FIELD_COLUMNS: dict[str, str] = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

# Column order used by every SELECT / RETURNING list; see Company.from_row.
COMPANY_COLUMNS = "handle, name, description, num_employees, logo_url"

COMPANY_FIELDS = ("handle", "name", "description", "numEmployees", "logoUrl")
COMPANY_REQUIRED_FIELDS = ("handle", "name", "description")
COMPANY_UPDATABLE_FIELDS = ("name", "description", "numEmployees", "logoUrl")
COMPANY_FILTERS = ("name", "minEmployees", "maxEmployees")

HANDLE_MAX_LENGTH = 25


@dataclass
class Company:
    """
    A company that posts jobs.

    Attributes:
        handle: Unique lowercase key, immutable once created.
        name: Display name (unique).
        description: Free-text description.
        num_employees: Headcount, if known.
        logo_url: Logo image URL, if any.
    """
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: tuple) -> "Company":
        """Build a Company from a row selected with COMPANY_COLUMNS."""
        return cls(
            handle=row[0],
            name=row[1],
            description=row[2],
            num_employees=row[3],
            logo_url=row[4],
        )

    def to_dict(self) -> dict:
        """Canonical representation using public field names."""
        return {
            "handle": self.handle,
            "name": self.name,
            "description": self.description,
            "numEmployees": self.num_employees,
            "logoUrl": self.logo_url,
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.handle})"


def validate_new_company(data: Any) -> Company:
    """
    Check a create payload and build the Company to insert.

    Raises:
        ValidationError: On missing, unknown or malformed fields.
    """
    check_fields(data, COMPANY_FIELDS, COMPANY_REQUIRED_FIELDS)
    handle = require_str(data["handle"], "handle", HANDLE_MAX_LENGTH)
    if handle != handle.lower():
        raise ValidationError("handle must be lowercase")
    return Company(
        handle=handle,
        name=require_str(data["name"], "name"),
        description=require_str(data["description"], "description"),
        num_employees=optional_non_negative_int(data.get("numEmployees"), "numEmployees"),
        logo_url=optional_url(data.get("logoUrl"), "logoUrl"),
    )


def validate_company_update(data: Any) -> dict:
    """
    Check a partial-update payload.

    Returns:
        The fields to update, in the order supplied.

    Raises:
        ValidationError: If a field is unknown, immutable or malformed.
    """
    check_fields(data, COMPANY_UPDATABLE_FIELDS, immutable=("handle",))
    checks = {
        "name": lambda v: require_str(v, "name"),
        "description": lambda v: require_str(v, "description"),
        "numEmployees": lambda v: optional_non_negative_int(v, "numEmployees"),
        "logoUrl": lambda v: optional_url(v, "logoUrl"),
    }
    return {name: checks[name](value) for name, value in data.items()}
