"""Tests for environment-driven settings (pingreport.config)."""

from pathlib import Path

from pingreport.config import DEFAULT_ORDERS_DIR, DEFAULT_OUTPUT_DIR, Settings


class TestSettings:
    """Test Settings.from_env."""

    def test_defaults(self):
        """Test default directories when nothing is configured."""
        settings = Settings.from_env({})
        assert settings.orders_dir == Path(DEFAULT_ORDERS_DIR)
        assert settings.output_dir == Path(DEFAULT_OUTPUT_DIR)

    def test_overrides(self, tmp_path):
        """Test both directories can be set from the environment."""
        settings = Settings.from_env(
            {
                "PINGREPORT_ORDERS_DIR": str(tmp_path / "o"),
                "PINGREPORT_OUTPUT_DIR": str(tmp_path / "r"),
            }
        )
        assert settings.orders_dir == tmp_path / "o"
        assert settings.output_dir == tmp_path / "r"

    def test_empty_value_uses_default(self):
        """Test an empty variable falls back to the default."""
        settings = Settings.from_env({"PINGREPORT_ORDERS_DIR": ""})
        assert settings.orders_dir == Path(DEFAULT_ORDERS_DIR)

    def test_reads_process_environment(self, monkeypatch, tmp_path):
        """Test os.environ is used when no mapping is passed."""
        monkeypatch.setenv("PINGREPORT_ORDERS_DIR", str(tmp_path))
        assert Settings.from_env().orders_dir == tmp_path
