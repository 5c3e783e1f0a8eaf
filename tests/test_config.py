"""Tests for ripple.config and ripple.config_loader."""

from pathlib import Path

import pytest

from ripple._errors import ConfigError
from ripple.config import RippleConfig
from ripple.config_loader import load_config
from ripple.encoding import register_encoder
from conftest import BareEncoder


class TestRippleConfig:
    """RippleConfig — frozen dataclass with sensible defaults."""

    def test_defaults(self) -> None:
        config = RippleConfig()
        assert config.templates_dir == Path("templates").resolve()
        assert config.wire_format == "envelope"
        assert config.default_channel == "default"
        assert config.channel_timeout is None
        assert config.max_pending == 0
        assert config.publish_interval == 2.0
        assert config.event_name == "update"

    def test_frozen(self) -> None:
        config = RippleConfig()
        with pytest.raises(AttributeError):
            config.wire_format = "oob"  # type: ignore[misc]

    def test_templates_dir_string_coerced(self, tmp_path: Path) -> None:
        config = RippleConfig(templates_dir=str(tmp_path))  # type: ignore[arg-type]
        assert config.templates_dir == tmp_path

    def test_oob_format_accepted(self) -> None:
        assert RippleConfig(wire_format="oob").wire_format == "oob"

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ConfigError, match="wire_format"):
            RippleConfig(wire_format="json")

    @pytest.mark.usefixtures("isolated_encoders")
    def test_registered_format_accepted(self) -> None:
        register_encoder(BareEncoder())
        assert RippleConfig(wire_format="bare").wire_format == "bare"

    def test_empty_default_channel_rejected(self) -> None:
        with pytest.raises(ConfigError, match="default_channel"):
            RippleConfig(default_channel="")

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ConfigError, match="channel_timeout"):
            RippleConfig(channel_timeout=0)

    def test_negative_max_pending_rejected(self) -> None:
        with pytest.raises(ConfigError, match="max_pending"):
            RippleConfig(max_pending=-1)

    def test_non_positive_publish_interval_rejected(self) -> None:
        with pytest.raises(ConfigError, match="publish_interval"):
            RippleConfig(publish_interval=0)


class TestLoadConfig:
    """load_config — ripple.yaml / ripple.toml with keyword overrides."""

    def test_no_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)
        assert config.wire_format == "envelope"
        assert config.templates_dir == tmp_path / "templates"

    def test_yaml_top_level_keys(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.yaml").write_text("wire_format: oob\nchannel_timeout: 30\n")
        config = load_config(tmp_path)
        assert config.wire_format == "oob"
        assert config.channel_timeout == 30

    def test_yaml_ripple_section(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.yml").write_text(
            "title: My App\nripple:\n  default_channel: feed\n  templates_dir: views\n"
        )
        config = load_config(tmp_path)
        assert config.default_channel == "feed"
        assert config.templates_dir == tmp_path / "views"

    def test_toml_ripple_section(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.toml").write_text(
            '[ripple]\nwire_format = "oob"\nmax_pending = 64\n'
        )
        config = load_config(tmp_path)
        assert config.wire_format == "oob"
        assert config.max_pending == 64

    def test_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.yaml").write_text("wire_format: oob\n")
        config = load_config(tmp_path, wire_format="envelope")
        assert config.wire_format == "envelope"

    def test_absolute_templates_dir_preserved(self, tmp_path: Path) -> None:
        elsewhere = tmp_path / "elsewhere"
        config = load_config(tmp_path / "root", templates_dir=elsewhere)
        assert config.templates_dir == elsewhere

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.yaml").write_text("colour: blue\nevent_name: tick\n")
        config = load_config(tmp_path)
        assert config.event_name == "tick"

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.yaml").write_text("wire_format: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(tmp_path)

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(tmp_path)

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.toml").write_text("wire_format = \n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(tmp_path)

    def test_invalid_value_from_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "ripple.yaml").write_text("wire_format: xml\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)
