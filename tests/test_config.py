"""Tests for AppConfig and JSON persistence."""

import json
from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError

from cuedeck.exceptions import ConfigFileInvalidError, ConfigValidationError
from cuedeck.models import AppConfig, RestartPolicy
from cuedeck.utils import PydanticPersistence


class SampleModel(BaseModel):
    """Simple model for testing."""

    name: str = "test"
    value: int = 42


@pytest.mark.unit
class TestAppConfig:
    """Test AppConfig defaults and validation."""

    def test_defaults(self):
        """Test the documented defaults."""
        config = AppConfig()

        assert config.serial_port is None
        assert config.baud_rate == 250_000
        assert config.universe_count == 2
        assert config.channels_per_universe == 512
        assert config.flush_on_set is True
        assert config.max_concurrent_cues is None
        assert config.restart_policy is RestartPolicy.REPLACE
        assert config.poll_interval == 0.1

    @pytest.mark.parametrize(
        "field,value",
        [
            ("channels_per_universe", 513),
            ("universe_count", 0),
            ("poll_interval", 0),
            ("initial_volume", -1),
            ("restart_policy", "sometimes"),
        ],
    )
    def test_invalid_values(self, field, value):
        """Test out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            AppConfig(**{field: value})

    def test_policy_from_string(self):
        """Test restart_policy accepts its string value."""
        assert AppConfig(restart_policy="reject").restart_policy is RestartPolicy.REJECT

    def test_save_and_load(self, temp_dir):
        """Test a saved config loads back unchanged."""
        path = temp_dir / "config.json"
        config = AppConfig(serial_port="/dev/ttyUSB0", max_concurrent_cues=4)

        config.save(path)
        loaded = AppConfig.load_or_default(path)

        assert loaded == config

    def test_missing_file_gives_defaults(self, temp_dir):
        """Test a missing file falls back to defaults without creating it."""
        path = temp_dir / "absent.json"

        assert AppConfig.load_or_default(path) == AppConfig()
        assert not path.exists()

    def test_invalid_json(self, temp_dir):
        """Test malformed JSON raises ConfigFileInvalidError."""
        path = temp_dir / "config.json"
        path.write_text('{"baud_rate": 9600,}')

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            AppConfig.load_or_default(path)

        assert str(path) in exc_info.value.recovery_hint

    def test_invalid_value_in_file(self, temp_dir):
        """Test a bad field value names the field."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"universe_count": -3}))

        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig.load_or_default(path)

        assert exc_info.value.field == "universe_count"

    def test_empty_file(self, temp_dir):
        """Test an empty file is treated as invalid, not as defaults."""
        path = temp_dir / "config.json"
        path.write_text("  ")

        with pytest.raises(ConfigFileInvalidError):
            AppConfig.load_or_default(path)


@pytest.mark.unit
class TestPersistenceSafety:
    """Test safety features of PydanticPersistence."""

    def test_save_creates_backup(self, tmp_path: Path):
        """Test that save_json creates a .bak file before overwriting."""
        path = tmp_path / "model.json"
        PydanticPersistence.save_json(SampleModel(name="original", value=1), path, backup=False)

        PydanticPersistence.save_json(SampleModel(name="modified", value=2), path)

        backup = PydanticPersistence.load_json(path.with_suffix(".json.bak"), SampleModel)
        assert backup.name == "original"
        assert PydanticPersistence.load_json(path, SampleModel).name == "modified"

    def test_no_temp_file_left(self, tmp_path: Path):
        """Test the atomic write cleans up its temp file."""
        path = tmp_path / "nested" / "model.json"

        PydanticPersistence.save_json(SampleModel(), path)

        assert path.exists()
        assert not path.with_suffix(".json.tmp").exists()

    def test_load_missing_raises(self, tmp_path: Path):
        """Test load_json on a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(tmp_path / "nope.json", SampleModel)

    def test_load_or_default_factory(self, tmp_path: Path):
        """Test a custom default factory is used for missing files."""
        result = PydanticPersistence.load_json_or_default(
            tmp_path / "nope.json", SampleModel, default_factory=lambda: SampleModel(value=7)
        )

        assert result.value == 7
