# tests/test_settings.py

from papermap.config import settings as settings_module
from papermap.config.settings import Settings, get_settings, reset_settings


def test_settings_paths_exist(tmp_path, monkeypatch):
    # Override DATA_DIR for test
    data_dir = tmp_path / "papermap-data"
    monkeypatch.setenv("PAPERMAP_DATA_DIR", str(data_dir))
    monkeypatch.setattr(settings_module, "_settings", None)

    settings = get_settings()

    assert settings.DATA_DIR == data_dir
    assert settings.DATA_DIR.exists()
    assert settings.corpus_path == data_dir / "corpus.json"
    assert settings.store_path == data_dir / "filters.json"
    assert get_settings() is settings


def test_reset_settings_rereads_environment(tmp_path, monkeypatch):
    monkeypatch.setattr(settings_module, "_settings", None)
    monkeypatch.setenv("PAPERMAP_DATA_DIR", str(tmp_path / "first"))
    first = get_settings()

    monkeypatch.setenv("PAPERMAP_DATA_DIR", str(tmp_path / "second"))
    assert get_settings() is first

    reset_settings()
    second = get_settings()

    assert second is not first
    assert second.DATA_DIR == tmp_path / "second"


def test_recommendation_defaults():
    """
    Bridges follow the displayed edges unless the policy is switched on.
    """
    settings = Settings()

    assert settings.bridge_limit == 5
    assert settings.bridge_ignores_min_strength is False
    assert settings.bridge_weights.common_connection == 4.0
    assert settings.bridge_weights.category_match == 3.0
    assert settings.FILTER_SETTINGS_KEY == "graph-filter-settings-v1"
    assert settings.PINNED_FILTER_SETTINGS_KEY == "graph-filter-settings-pinned-v1"


def test_env_overrides(monkeypatch):
    """
    Policy flags and nested weights can be set from the environment.
    """
    monkeypatch.setenv("PAPERMAP_BRIDGE_IGNORES_MIN_STRENGTH", "true")
    monkeypatch.setenv("PAPERMAP_BRIDGE_WEIGHTS__CATEGORY_MATCH", "2")

    settings = Settings()

    assert settings.bridge_ignores_min_strength is True
    assert settings.bridge_weights.category_match == 2.0
    assert settings.bridge_weights.common_connection == 4.0
