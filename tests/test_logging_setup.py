import logging

import pytest

from studentix.logging_setup import resolve_level, setup_console_logging


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("error", logging.ERROR),
        (logging.CRITICAL, logging.CRITICAL),
        ("", logging.INFO),
        (None, logging.INFO),
        ("chatty", logging.INFO),
    ],
)
def test_resolve_level(value, expected: int) -> None:
    assert resolve_level(value) == expected


def test_setup_adds_single_handler_and_updates_level() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        setup_console_logging("warning")
        setup_console_logging("debug")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
