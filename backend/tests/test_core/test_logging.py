import logging

from inventory.core.logging import LOG_FORMAT, setup_logging


def test_setup_logging_adds_single_stdout_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    setup_logging()
    setup_logging()

    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == LOG_FORMAT


def test_setup_logging_keeps_existing_handlers(monkeypatch):
    root = logging.getLogger()
    existing = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [existing])
    monkeypatch.setattr(root, "level", root.level)

    setup_logging()

    assert root.handlers == [existing]
