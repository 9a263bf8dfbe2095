"""
Pytest configuration and shared fixtures.
"""

from decimal import Decimal

import pytest


class FakeQuery:
    """
    Stand-in for `db.connection.query`.

    Records every statement (whitespace collapsed) with its values and
    answers with queued results, in order. A queued exception is raised
    instead of returned. Once the queue is empty every call returns [].
    """

    def __init__(self):
        self.calls: list[tuple[str, list]] = []
        self._results: list = []

    def queue(self, *results) -> None:
        self._results.extend(results)

    def __call__(self, sql, values=()):
        self.calls.append((" ".join(sql.split()), list(values)))
        if not self._results:
            return []
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def last_sql(self) -> str:
        return self.calls[-1][0]

    @property
    def last_values(self) -> list:
        return self.calls[-1][1]


@pytest.fixture
def fake_query(monkeypatch) -> FakeQuery:
    """Route both repositories' SQL through a FakeQuery."""
    fake = FakeQuery()
    monkeypatch.setattr("repositories.company_repo.query", fake)
    monkeypatch.setattr("repositories.job_repo.query", fake)
    return fake


@pytest.fixture
def company_row() -> tuple:
    """Row for company c1 in COMPANY_COLUMNS order."""
    return ("c1", "C1", "Desc1", 1, "http://c1.img")


@pytest.fixture
def job_rows() -> list[tuple]:
    """Rows for three c1 jobs in JOB_COLUMNS order."""
    return [
        (1, "J1", 1, Decimal("0.1"), "c1"),
        (2, "J2", 2, Decimal("0.2"), "c1"),
        (3, "J3", 3, None, "c1"),
    ]
