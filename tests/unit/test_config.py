from dataclasses import replace

from intranet_search.core.config import Config, config


def test_defaults_are_valid():
    assert config.validate() == []


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORTAL_BASE_URL", "https://intranet.example.com/api")
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "150")
    monkeypatch.setenv("SEARCH_PAGE_LIMIT", "25")
    monkeypatch.setenv("SEARCH_TIMEOUT_SECONDS", "2.5")

    loaded = Config.load()

    assert loaded.portal_base_url == "https://intranet.example.com/api"
    assert loaded.debounce_ms == 150
    assert loaded.page_limit == 25
    assert loaded.timeout_seconds == 2.5


def test_validate_reports_each_problem():
    broken = replace(
        config,
        portal_base_url="intranet.local",
        debounce_ms=-1,
        page_limit=0,
        timeout_seconds=0,
    )

    errors = broken.validate()

    assert len(errors) == 4
    assert any("PORTAL_BASE_URL" in e for e in errors)
    assert any("SEARCH_PAGE_LIMIT" in e for e in errors)
