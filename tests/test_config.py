from deal_pipeline.config import Settings, get_settings, reset_settings_cache


def _settings(monkeypatch, **env):
    for k, v in env.items():
        if v is None:
            monkeypatch.delenv(k, raising=False)
        else:
            monkeypatch.setenv(k, str(v))
    reset_settings_cache()
    return get_settings()


def test_defaults(monkeypatch):
    settings = _settings(monkeypatch)
    assert settings == Settings(state_token="PA", neutralize_csv=False, log_level="WARNING", debounce_ms=1000)


def test_env_overrides(monkeypatch):
    settings = _settings(
        monkeypatch,
        DEALPIPE_STATE_TOKEN=" FL ",
        DEALPIPE_NEUTRALIZE_CSV="yes",
        DEALPIPE_LOG_LEVEL="debug",
        DEALPIPE_DEBOUNCE_MS="250",
    )
    assert settings.state_token == "FL"
    assert settings.neutralize_csv is True
    assert settings.log_level == "DEBUG"
    assert settings.debounce_ms == 250


def test_garbage_falls_back_to_defaults(monkeypatch):
    settings = _settings(monkeypatch, DEALPIPE_NEUTRALIZE_CSV="maybe", DEALPIPE_DEBOUNCE_MS="soon", DEALPIPE_STATE_TOKEN="  ")
    assert settings.neutralize_csv is False
    assert settings.debounce_ms == 1000
    assert settings.state_token == "PA"


def test_settings_are_cached_until_reset(monkeypatch):
    first = _settings(monkeypatch)
    monkeypatch.setenv("DEALPIPE_DEBOUNCE_MS", "5")
    assert get_settings() is first
    reset_settings_cache()
    assert get_settings().debounce_ms == 5
