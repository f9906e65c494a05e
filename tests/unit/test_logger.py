import json
import logging

from pagepath.utils.logger import JsonFormatter, bind, get_logger, log_with_context, unbind


def format_json(adapter, msg):
    msg, kwargs = adapter.process(msg, {})
    record = adapter.logger.makeRecord(adapter.logger.name, logging.INFO, __file__, 1, msg, (), None, extra=kwargs["extra"])
    return json.loads(JsonFormatter().format(record))


def test_bound_context_lands_in_json_lines():
    log = get_logger("pagepath.tests")
    bind(page="Shop")
    try:
        payload = format_json(log, "resolving")
    finally:
        unbind("page")
    assert payload["msg"] == "resolving"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "pagepath.tests"
    assert payload["page"] == "Shop"


def test_unbind_drops_context():
    log = get_logger("pagepath.tests")
    bind(page="Shop")
    unbind("page")
    assert "page" not in format_json(log, "resolving")


def test_log_with_context_adds_scoped_keys():
    scoped = log_with_context(get_logger("pagepath.tests"), path="#2 of Items")
    assert format_json(scoped, "resolving")["path"] == "#2 of Items"
    assert "path" not in format_json(get_logger("pagepath.tests"), "resolving")
