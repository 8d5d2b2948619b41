from careerconnect.config import DEFAULT_API_URL, MAX_RESUME_BYTES, load_settings


def _clear_env(monkeypatch):
    for key in ("CAREERCONNECT_API_URL", "CAREERCONNECT_TIMEOUT", "CAREERCONNECT_USE_DEMO_DATA",
                "LOG_LEVEL", "CAREERCONNECT_LOG_TO_FILE"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_file(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    settings = load_settings(tmp_path / "missing.yaml")

    assert settings.api_url == DEFAULT_API_URL
    assert settings.use_demo_data is False
    assert settings.max_resume_bytes == MAX_RESUME_BYTES


def test_yaml_overrides_defaults(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    path = tmp_path / "settings.yaml"
    path.write_text("api_url: https://jobs.example.com/api/\ntimeout: 5\nuse_demo_data: true\n")

    settings = load_settings(path)

    assert settings.api_url == "https://jobs.example.com/api"
    assert settings.timeout == 5.0
    assert settings.use_demo_data is True


def test_env_overrides_yaml(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    path = tmp_path / "settings.yaml"
    path.write_text("use_demo_data: true\n")
    monkeypatch.setenv("CAREERCONNECT_USE_DEMO_DATA", "no")
    monkeypatch.setenv("CAREERCONNECT_API_URL", "http://staging/api")

    settings = load_settings(path)

    assert settings.use_demo_data is False
    assert settings.api_url == "http://staging/api"


def test_unknown_keys_are_ignored(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    path = tmp_path / "settings.yaml"
    path.write_text("theme: dark\n")

    assert load_settings(path).api_url == DEFAULT_API_URL


def test_logging_settings_from_yaml_and_env(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    path = tmp_path / "settings.yaml"
    path.write_text("log_level: debug\nlog_to_file: false\n")

    settings = load_settings(path)
    assert settings.log_level == "DEBUG"
    assert settings.log_to_file is False

    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert load_settings(path).log_level == "WARNING"
