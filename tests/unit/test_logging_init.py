from __future__ import annotations

import logging

from gradestats.logging.init import LOGGER_NAME, log_summary, setup_logging


def test_labeled_output(capsys):
    logger = setup_logging()
    logger.info("hello")
    logger.warning("careful")
    logger.error("broken")
    log_summary("files=1/1")
    out = capsys.readouterr().out.splitlines()
    assert out == ["INFO hello", "WARN careful", "ERROR broken", "SUMMARY files=1/1"]


def test_setup_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert first.name == LOGGER_NAME
    assert len(first.handlers) == 1
    assert first.propagate is False


def test_child_loggers_share_the_handler(capsys):
    setup_logging()
    logging.getLogger("gradestats.services.orchestrator").info("from child")
    assert capsys.readouterr().out == "INFO from child\n"


def test_debug_hidden_by_default(capsys):
    logger = setup_logging()
    logger.debug("hidden")
    assert capsys.readouterr().out == ""
