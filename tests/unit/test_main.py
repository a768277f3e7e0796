"""Tests for application bootstrap (cyberaware/main.py)"""
import logging

import pytest

from cyberaware import config, main
from cyberaware.exceptions import ConfigurationError
from cyberaware.services.container import ServiceContainer
from cyberaware.store.persistence import InMemoryStorage, save_registered_users


def test_bootstrap_opens_store(monkeypatch, alice):
    """Test bootstrap validates config and loads the stored roster"""
    monkeypatch.setattr(config, "XP_VALIDATION", "allow")
    monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
    monkeypatch.setattr(config, "STREAK_TIMEZONE", "UTC")
    storage = InMemoryStorage()
    save_registered_users(storage, [alice])

    container = main.bootstrap(storage=storage)

    assert isinstance(container, ServiceContainer)
    assert [p.nickname for p in container.store.state.roster] == ["alice"]
    container.dispose()


def test_bootstrap_rejects_bad_config(monkeypatch):
    monkeypatch.setattr(config, "XP_VALIDATION", "sometimes")

    with pytest.raises(ConfigurationError):
        main.bootstrap(storage=InMemoryStorage())


def test_configure_logging(monkeypatch):
    """Test the configured level is passed to basicConfig"""
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    main.configure_logging("debug")

    assert calls[0]["level"] == logging.DEBUG
    assert "%(name)s" in calls[0]["format"]
