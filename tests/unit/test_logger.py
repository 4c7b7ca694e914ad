import json
import logging

from gawire.infra.logger import JsonFormatter, get_logger


def test_json_formatter_includes_context_fields() -> None:
    record = logging.LogRecord("gawire.test", logging.INFO, __file__, 1, "built %s", ("page_view",), None)
    record.event_name = "page_view"
    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "gawire.test"
    assert payload["msg"] == "built page_view"
    assert payload["event_name"] == "page_view"
    assert "entry_point" not in payload


def test_get_logger_attaches_one_handler() -> None:
    logger = get_logger("gawire.test-handler")
    get_logger("gawire.test-handler")
    assert sum(isinstance(h.formatter, JsonFormatter) for h in logger.handlers) == 1
