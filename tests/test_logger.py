"""
Tests for utils/logger.py - handler setup and log lines from repositories.
"""

import logging
from decimal import Decimal

import pytest

from repositories.company_repo import CompanyRepository
from repositories.job_repo import JobRepository
from utils.logger import configure_logging, get_logger, reset_logging


@pytest.fixture
def restore_logging():
    """Put the default configuration back after a test reconfigures it."""
    yield
    configure_logging()


class TestConfigureLogging:
    """Test console and file handler setup."""

    def test_console_only(self, restore_logging):
        configure_logging(level="WARNING", log_dir="")

        handlers = [h for h in logging.getLogger().handlers
                    if isinstance(h, logging.StreamHandler)
                    and not isinstance(h, logging.FileHandler)]
        assert any(h.level == logging.WARNING for h in handlers)
        assert not any(isinstance(h, logging.FileHandler)
                       for h in logging.getLogger().handlers)

    def test_file_handler_writes_daily_file(self, tmp_path, restore_logging):
        """Debug records land in the file with their line numbers."""
        log_dir = tmp_path / "logs"
        configure_logging(level="INFO", log_dir=str(log_dir))

        get_logger("jobly.test").debug("written to file only")
        reset_logging()

        files = list(log_dir.glob("jobly_*.log"))
        assert len(files) == 1
        content = files[0].read_text(encoding="utf-8")
        assert "written to file only" in content
        assert "jobly.test:" in content

    def test_reconfigure_replaces_handlers(self, restore_logging):
        configure_logging(log_dir="")
        before = len(logging.getLogger().handlers)
        configure_logging(log_dir="")
        assert len(logging.getLogger().handlers) == before

    def test_get_logger_returns_named_logger(self):
        assert get_logger("repositories.job_repo").name == "repositories.job_repo"


class TestRepositoryLogLines:
    """Writes are logged with the model's display form."""

    def test_company_create(self, fake_query, caplog):
        fake_query.queue([], [("new", "New", "Desc", None, None)])

        with caplog.at_level(logging.INFO, logger="repositories.company_repo"):
            CompanyRepository().create({"handle": "new", "name": "New", "description": "Desc"})

        assert "Created company New (new)" in caplog.text

    def test_job_create(self, fake_query, caplog):
        fake_query.queue([(5, "New Job", 70000, Decimal("0.02"), "c1")])

        with caplog.at_level(logging.INFO, logger="repositories.job_repo"):
            JobRepository().create({"title": "New Job", "companyHandle": "c1"})

        assert "Created job #5 New Job @ c1" in caplog.text
