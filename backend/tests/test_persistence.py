"""
Exercise Tracker Backend — Persistence Error Wrapping Tests
============================================================

What:  Tests for persistence_error, shared by both services.
"""

import logging

from sqlalchemy.exc import OperationalError

from app.exceptions import PersistenceError
from app.services.persistence import persistence_error


class TestPersistenceError:

    def test_message_names_action_and_exception_type(self):
        error = persistence_error("delete the exercise", OperationalError("DELETE", {}, Exception("gone")))

        assert isinstance(error, PersistenceError)
        assert error.message == "Could not delete the exercise (OperationalError)"

    def test_context_keeps_caller_fields(self):
        error = persistence_error("add the user", RuntimeError("x"), username="Nguyen Van A")

        assert error.context == {"username": "Nguyen Van A", "original_error": "RuntimeError"}

    def test_driver_detail_only_in_log(self, caplog):
        with caplog.at_level(logging.ERROR, logger="app.services.persistence"):
            error = persistence_error("list users", RuntimeError("password=hunter2"))

        assert "hunter2" not in error.message
        assert "hunter2" in caplog.text
