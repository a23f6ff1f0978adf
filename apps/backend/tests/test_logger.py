import json
import logging

from utils.logger import CustomJsonFormatter, get_logger


def test_get_logger_attaches_handlers_once(tmp_path):
    log_file = tmp_path / "migrate.log"
    first = get_logger("test_logger_once", log_file=str(log_file))
    second = get_logger("test_logger_once", log_file=str(log_file))

    assert first is second
    assert len(first.handlers) == 2
    assert first.propagate is False


def test_formatter_emits_timestamp_and_level():
    formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
    record = logging.LogRecord("backfill_service", logging.INFO, __file__, 1, "Updated user u1", None, None)
    record.doc_id = "u1"

    payload = json.loads(formatter.format(record))

    assert payload["level"] == "INFO"
    assert payload["message"] == "Updated user u1"
    assert payload["doc_id"] == "u1"
    assert payload["timestamp"].endswith("Z")
