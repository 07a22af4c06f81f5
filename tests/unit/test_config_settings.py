"""Unit tests for application settings configuration."""

from pathlib import Path

from insole_tracker.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_remote_store_url_from_environment(monkeypatch):
    monkeypatch.setenv("REMOTE_STORE_URL", "https://script.example.com/exec")
    monkeypatch.setenv("NOTIFICATION_EXPIRE_SECONDS", "2.5")

    settings = Settings()

    assert settings.remote_store_url == "https://script.example.com/exec"
    assert settings.notification_expire_seconds == 2.5


def test_settings_file_overrides_remote_store_url(monkeypatch, tmp_path: Path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "settings.json").write_text(
        '{"remote_store_url": "https://override.example.com/exec", "data_dir": "ignored"}',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REMOTE_STORE_URL", "https://env.example.com/exec")

    settings = Settings()

    assert settings.remote_store_url == "https://override.example.com/exec"
    assert settings.data_dir == "data"


def test_settings_file_is_read_from_data_dir(monkeypatch, tmp_path: Path):
    store_dir = tmp_path / "store"
    store_dir.mkdir()
    (store_dir / "settings.json").write_text(
        '{"remote_store_url": "https://data-dir.example.com/exec"}', encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATA_DIR", str(store_dir))
    monkeypatch.delenv("REMOTE_STORE_URL", raising=False)

    settings = Settings()

    assert settings.data_dir == str(store_dir)
    assert settings.remote_store_url == "https://data-dir.example.com/exec"
