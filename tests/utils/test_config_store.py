import json
import os

import pytest

from ghkit.errors import InvalidInputError
from ghkit.utils.config_store import ConfigStore, Settings


@pytest.fixture
def temp_config_dir(tmp_path, mocker):
    mocker.patch("platform.system", return_value="Linux")
    mocker.patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)})
    return tmp_path


@pytest.fixture
def store(temp_config_dir):
    return ConfigStore()


def test_get_config_dir_linux_xdg(temp_config_dir):
    store = ConfigStore()
    assert store.base_dir == temp_config_dir / "ghkit"
    assert store.base_dir.is_dir()


def test_get_config_dir_linux_fallback(tmp_path, mocker):
    mocker.patch("platform.system", return_value="Linux")
    mocker.patch.dict(os.environ, {}, clear=True)
    mocker.patch("pathlib.Path.home", return_value=tmp_path)

    store = ConfigStore()
    assert store.base_dir == tmp_path / ".ghkit"


def test_get_config_dir_windows(tmp_path, mocker):
    mocker.patch("platform.system", return_value="Windows")
    mocker.patch.dict(os.environ, {"APPDATA": str(tmp_path)})

    store = ConfigStore()
    assert store.base_dir == tmp_path / "ghkit"


def test_get_config_dir_macos(tmp_path, mocker):
    mocker.patch("platform.system", return_value="Darwin")
    mocker.patch("pathlib.Path.home", return_value=tmp_path)

    store = ConfigStore()
    assert store.base_dir == tmp_path / "Library" / "Application Support" / "ghkit"


def test_load_settings_defaults_when_missing(store):
    settings = store.load_settings()

    assert settings == Settings()
    assert settings.fetch_retry_delay == 0.5
    assert settings.fetch_retry_limit == 10
    assert settings.remote_name == "origin"


def test_load_settings_corrupt_file_gives_defaults(store):
    store.settings_file.write_text("{not json", encoding="utf-8")

    assert store.load_settings() == Settings()


def test_load_settings_non_mapping_gives_defaults(store):
    store.settings_file.write_text("[1, 2]", encoding="utf-8")

    assert store.load_settings() == Settings()


def test_load_settings_ignores_unknown_keys(store):
    store.settings_file.write_text(
        json.dumps({"fetch_retry_limit": 3, "legacy": True}), encoding="utf-8"
    )

    settings = store.load_settings()

    assert settings.fetch_retry_limit == 3


def test_save_and_load_settings(store):
    store.save_settings(Settings(log_level="DEBUG", default_branch="trunk"))

    settings = store.load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.default_branch == "trunk"


def test_set_setting_coerces_type(store):
    settings = store.set_setting("fetch_retry_delay", "1.5")

    assert settings.fetch_retry_delay == 1.5
    assert store.load_settings().fetch_retry_delay == 1.5


def test_set_setting_normalizes_log_level(store):
    assert store.set_setting("log_level", "debug").log_level == "DEBUG"


def test_set_setting_unknown_key(store):
    with pytest.raises(InvalidInputError, match="Unknown setting"):
        store.set_setting("nope", "1")


def test_set_setting_wrong_type(store):
    with pytest.raises(InvalidInputError, match="expects a int"):
        store.set_setting("fetch_retry_limit", "many")


def test_set_setting_rejects_negative(store):
    with pytest.raises(InvalidInputError, match="must not be negative"):
        store.set_setting("fetch_retry_limit", "-1")


def test_set_setting_rejects_bad_log_level(store):
    with pytest.raises(InvalidInputError, match="Invalid log level"):
        store.set_setting("log_level", "loud")
