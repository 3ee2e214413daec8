from __future__ import annotations

import logging

from dashportal.logging_utils import get_logger, log_action


def test_log_action_formats_audit_line(caplog):
    logger = logging.getLogger("dashportal.tests.audit")
    with caplog.at_level(logging.INFO, logger="dashportal.tests.audit"):
        log_action(logger, "grant", actor="a@x.com", entity_type="dashboard", entity_id="d1", target="Ops", skipped=None)
    assert caplog.messages == ["[AUDIT] a@x.com:grant dashboard:d1 target=Ops"]


def test_log_action_defaults_to_system(caplog):
    logger = logging.getLogger("dashportal.tests.audit")
    with caplog.at_level(logging.INFO, logger="dashportal.tests.audit"):
        log_action(logger, "delete")
    assert caplog.messages == ["[AUDIT] system:delete :"]


def test_get_logger_configures_once(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    logger = get_logger("dashportal.tests.configured")
    again = get_logger("dashportal.tests.configured")
    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
