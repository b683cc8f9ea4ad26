from __future__ import annotations

import logging

from melcloud.infrastructure.observability import (
    ContextualFormatter,
    current_log_context,
    log_context,
)


def test_log_context_is_restored_on_exit() -> None:
    with log_context(operation="device list"):
        with log_context(device_id="42"):
            assert current_log_context() == {"operation": "device list", "device_id": "42"}
        assert current_log_context() == {"operation": "device list"}
    assert current_log_context() == {}


def test_contextual_formatter_appends_fields() -> None:
    formatter = ContextualFormatter("%(message)s")
    record = logging.LogRecord("melcloud", logging.INFO, __file__, 1, "Requesting", None, None)

    with log_context(operation="device info", building_id="7"):
        output = formatter.format(record)

    assert output == "Requesting [operation=device info building_id=7]"


def test_contextual_formatter_leaves_record_untouched() -> None:
    formatter = ContextualFormatter("%(message)s")
    record = logging.LogRecord("melcloud", logging.INFO, __file__, 1, "Requesting", None, None)

    with log_context(operation="device list"):
        first = formatter.format(record)
        second = formatter.format(record)

    assert first == second == "Requesting [operation=device list]"
    assert record.msg == "Requesting"
