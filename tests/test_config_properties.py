"""Tests for configuration models and the config loader."""

from pathlib import Path

import pytest
import structlog
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from cosense_sync.errors import ConfigurationError
from cosense_sync.models.config import AppConfig, SyncConfig
from cosense_sync.utils.config_loader import ConfigLoader

log = structlog.stdlib.get_logger()

REQUIRED_VARS = ("SID", "SOURCE_PROJECT_NAME", "DESTINATION_PROJECT_NAME")


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SID", "s3cret")
    monkeypatch.setenv("SOURCE_PROJECT_NAME", "source")
    monkeypatch.setenv("DESTINATION_PROJECT_NAME", "destination")


@given(st.integers(min_value=1, max_value=10_000))
def test_positive_batch_size_accepted(batch_size: int) -> None:
    assert SyncConfig(batch_size=batch_size).batch_size == batch_size


@given(st.integers(max_value=0))
def test_non_positive_batch_size_rejected(batch_size: int) -> None:
    with pytest.raises(ValidationError):
        SyncConfig(batch_size=batch_size)


def test_sync_defaults() -> None:
    config = SyncConfig()

    assert config.batch_size == 100
    assert config.batch_delay_seconds == 1.0
    assert config.checkpoint_file == "last_import.txt"
    assert config.initial_checkpoint == 1745842021
    assert config.exclusion_marker == "[private.icon]"


class TestLoadFromEnvironment:
    def test_required_variables_are_read(self, required_env: None) -> None:
        config = ConfigLoader(env_file=None).load_config()

        assert config.cosense.sid == "s3cret"
        assert config.cosense.source_project == "source"
        assert config.cosense.destination_project == "destination"
        assert str(config.cosense.base_url).startswith("https://scrapbox.io")

    @pytest.mark.parametrize("missing", REQUIRED_VARS)
    def test_missing_variable_is_configuration_error(
        self, required_env: None, monkeypatch: pytest.MonkeyPatch, missing: str
    ) -> None:
        monkeypatch.delenv(missing)

        with pytest.raises(ConfigurationError, match=missing):
            ConfigLoader(env_file=None).load_config()

    @pytest.mark.parametrize("empty", REQUIRED_VARS)
    def test_empty_variable_is_configuration_error(
        self, required_env: None, monkeypatch: pytest.MonkeyPatch, empty: str
    ) -> None:
        monkeypatch.setenv(empty, "")

        with pytest.raises(ConfigurationError):
            ConfigLoader(env_file=None).load_config()

    def test_nested_overrides_from_app_variables(
        self, required_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("APP_SYNC__BATCH_SIZE", "25")
        monkeypatch.setenv("APP_LOGGING__LOG_LEVEL", "DEBUG")

        config = ConfigLoader(env_file=None).load_config()

        assert config.sync.batch_size == 25
        assert config.logging.log_level == "DEBUG"

    def test_dotenv_file_fills_missing_variables(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        for name in REQUIRED_VARS:
            monkeypatch.delenv(name, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(
            "SID=from-file\nSOURCE_PROJECT_NAME=src\nDESTINATION_PROJECT_NAME=dst\n"
        )

        try:
            config = ConfigLoader(env_file=str(env_file)).load_config()
        finally:
            for name in REQUIRED_VARS:
                monkeypatch.delenv(name, raising=False)

        assert config.cosense.sid == "from-file"
        assert config.cosense.destination_project == "dst"


class TestLoadFromYaml:
    def test_yaml_values_and_substitution(self, required_env: None, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "cosense:\n"
            "  sid: ${SID}\n"
            "  source_project: ${SOURCE_PROJECT_NAME}\n"
            "  destination_project: mirror\n"
            "sync:\n"
            "  batch_size: 50\n"
            "  exclusion_marker: '[secret.icon]'\n"
        )

        config = ConfigLoader(env_file=None).load_config(str(path))

        assert config.cosense.sid == "s3cret"
        assert config.cosense.destination_project == "mirror"
        assert config.sync.batch_size == 50
        assert config.sync.exclusion_marker == "[secret.icon]"

    def test_shipped_default_yaml_is_valid(self, required_env: None) -> None:
        path = Path(__file__).parent.parent / "config" / "default.yaml"

        config = ConfigLoader(env_file=None).load_config(str(path))

        assert isinstance(config, AppConfig)
        assert config.sync.batch_size == 100

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader(env_file=None).load_config(str(tmp_path / "nope.yaml"))

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ConfigurationError):
            ConfigLoader(env_file=None).load_config(str(path))

    def test_invalid_values(self, required_env: None, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "cosense:\n  sid: x\n  source_project: a\n  destination_project: b\n"
            "sync:\n  batch_size: 0\n"
        )

        with pytest.raises(ConfigurationError, match="validation failed"):
            ConfigLoader(env_file=None).load_config(str(path))
