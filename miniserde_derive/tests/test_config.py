import pytest

from miniserde_derive import DeriveConfig, FormatterConfig, OutputConfig, OutputMode


class TestDeriveConfig:
    def test_defaults(self):
        config = DeriveConfig()
        assert config.attribute_marker == "serde"
        assert config.runtime_module == "miniserde_derive.runtime"
        assert config.source_module is None
        assert config.derive_serialize and config.derive_deserialize
        assert config.formatter == FormatterConfig()
        assert config.output == OutputConfig()
        assert config.output.mode == OutputMode.ERROR_IF_EXISTS

    def test_from_dict(self):
        config = DeriveConfig.from_dict(
            {
                "attribute_marker": "wire",
                "source_module": "app.models",
                "derive_deserialize": False,
                "formatter": {"enabled": True, "tool": "black"},
                "output": {"mode": "force", "atomic_write": False},
                "unknown_key": 1,
            }
        )

        assert config.attribute_marker == "wire"
        assert config.source_module == "app.models"
        assert config.derive_serialize is True
        assert config.derive_deserialize is False
        assert config.formatter.enabled and config.formatter.tool == "black"
        assert config.formatter.line_length == 100
        assert config.output.mode == OutputMode.FORCE
        assert config.output.atomic_write is False
        assert config.output.validate_before_write is True
        assert not hasattr(config, "unknown_key")

    def test_round_trip(self):
        config = DeriveConfig(
            attribute_marker="wire",
            source_module="m",
            formatter=FormatterConfig(enabled=True, line_length=88),
            output=OutputConfig(mode=OutputMode.FORCE),
        )
        assert DeriveConfig.from_dict(config.to_dict()) == config

    def test_to_dict_is_json_friendly(self):
        data = DeriveConfig().to_dict()
        assert data["output"]["mode"] == "error"
        assert data["formatter"]["tool"] == "ruff"


if __name__ == "__main__":
    pytest.main([__file__])
