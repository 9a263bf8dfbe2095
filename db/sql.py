"""
db/sql.py
---------
Helpers for building parameterized SQL fragments.

Column names passed to these helpers always come from application code
(fixed translation tables and repository constants), never from a caller.
Values are only ever bound through positional placeholders.
"""

from typing import Any, Mapping

from utils.errors import ValidationError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str | None],
    start: int = 1,
) -> tuple[str, list]:
    """
    Build the SET clause of a partial UPDATE statement.

    Keys of `data_to_update` are translated to column names through
    `js_to_sql`. A key missing from the table, or mapped to an empty
    target, is used verbatim as the column name.

        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32},
        ...                        {"firstName": "first_name"})
        ('"first_name" = $1, "age" = $2', ['Aliya', 32])

    Args:
        data_to_update: Public field name -> new value, in the order the
            assignments should be emitted.
        js_to_sql: Public field name -> storage column name.
        start: Number of the first placeholder.

    Returns:
        Tuple of (set_cols, values).

    Raises:
        ValidationError: If `data_to_update` is empty.
    """
    if not data_to_update:
        raise ValidationError("No data")

    cols = [
        f'"{js_to_sql.get(key) or key}" = ${idx}'
        for idx, key in enumerate(data_to_update, start=start)
    ]
    return ", ".join(cols), list(data_to_update.values())


def contains_pattern(text: str) -> str:
    """LIKE/ILIKE pattern matching `text` anywhere, with wildcards escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class WhereBuilder:
    """
    Accumulates AND-ed predicates and their values for a WHERE clause.

    Each value-carrying predicate gets the next positional placeholder, so
    the rendered clause and `values` always line up:

        >>> where = WhereBuilder().add("name", "ILIKE", "%net%")
        >>> where = where.add("num_employees", ">=", 10)
        >>> where.clause()
        ' WHERE name ILIKE $1 AND num_employees >= $2'
        >>> where.values
        ['%net%', 10]
    """

    OPERATORS = frozenset({"=", "<", "<=", ">", ">=", "ILIKE"})

    def __init__(self):
        self.predicates: list[str] = []
        self.values: list = []

    def add(self, column: str, operator: str, value: Any) -> "WhereBuilder":
        """Add `<column> <operator> $n` bound to `value`."""
        if operator not in self.OPERATORS:
            raise ValueError(f"Unsupported operator: {operator}")
        self.values.append(value)
        self.predicates.append(f"{column} {operator} ${len(self.values)}")
        return self

    def add_raw(self, predicate: str) -> "WhereBuilder":
        """Add a predicate that binds no values, e.g. ``equity > 0``."""
        self.predicates.append(predicate)
        return self

    def clause(self) -> str:
        """Render the clause, or an empty string when nothing was added."""
        if not self.predicates:
            return ""
        return " WHERE " + " AND ".join(self.predicates)

    def __len__(self) -> int:
        return len(self.predicates)
