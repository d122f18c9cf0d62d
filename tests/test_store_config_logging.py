import logging

from reactorlab.config import Settings
from reactorlab.logs import get_logger, reset_logger
from reactorlab.web.store import DatasheetStore


def test_store_evicts_oldest():
    store = DatasheetStore(max_entries=2)
    a = store.put({"n": 1})
    b = store.put({"n": 2})
    c = store.put({"n": 3})
    assert store.get(a) is None
    assert store.get(b) == {"n": 2}
    assert store.get(c) == {"n": 3}
    assert len(store) == 2


def test_store_reuses_token():
    store = DatasheetStore()
    token = store.put({"n": 1})
    assert store.put({"n": 2}, token) == token
    assert store.get(token) == {"n": 2}
    assert store.get(None) is None


def test_settings_defaults_and_env(monkeypatch):
    assert Settings().port == 3000
    assert Settings().tau_min == 75
    monkeypatch.setenv("REACTORLAB_PORT", "8080")
    assert Settings().port == 8080


def test_get_logger_is_cached():
    reset_logger("reactorlab.test")
    logger = get_logger("reactorlab.test", level="DEBUG")
    assert get_logger("reactorlab.test") is logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    reset_logger("reactorlab.test")
