"""Tests for logging setup and the package error base."""

import logging

import pytest

from budget_diff.exceptions import BudgetDiffError, SnapshotFormatError
from budget_diff.logging_config import PACKAGE_LOGGER, get_logger, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)


class TestSetupLogging:
    @pytest.mark.parametrize(
        "verbose, quiet, expected",
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.ERROR),
        ],
    )
    def test_levels(self, package_logger, verbose, quiet, expected):
        logger = setup_logging(verbose=verbose, quiet=quiet)
        assert logger is package_logger
        assert logger.level == expected

    def test_repeated_setup_replaces_handlers(self, package_logger):
        setup_logging()
        setup_logging(verbose=True)
        assert len(package_logger.handlers) == 1

    def test_log_file(self, package_logger, tmp_path):
        log_file = tmp_path / "budget-diff.log"
        setup_logging(verbose=True, log_file=str(log_file))
        get_logger("engine").debug("Reconciled %d lines", 3)
        for handler in package_logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "budget_diff.engine: Reconciled 3 lines" in text


class TestGetLogger:
    def test_default_is_package_logger(self):
        assert get_logger().name == PACKAGE_LOGGER

    def test_module_name_kept(self):
        assert get_logger("budget_diff.comparison.engine").name == "budget_diff.comparison.engine"

    def test_bare_name_prefixed(self):
        assert get_logger("engine").name == "budget_diff.engine"

    def test_lookalike_prefix_is_namespaced(self):
        assert get_logger("budget_diffx").name == "budget_diff.budget_diffx"


class TestBudgetDiffError:
    def test_message_only(self):
        assert str(BudgetDiffError("Nothing to compare")) == "Nothing to compare"

    def test_details_rendered_as_text(self):
        err = BudgetDiffError("Bad line", details={"record": 4, "source": "v2.json"})
        assert err.details == {"record": "4", "source": "v2.json"}
        assert str(err) == "Bad line (record=4, source=v2.json)"

    def test_subclass_carries_context(self):
        err = SnapshotFormatError("amount is not a number", record=2)
        assert isinstance(err, BudgetDiffError)
        assert "record=2" in err.context
