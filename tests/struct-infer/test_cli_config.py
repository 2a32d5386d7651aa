import pytest
import yaml
from struct_infer.cli_config import StructInferSettings
from struct_infer.config import Config
from struct_infer.exceptions import ConfigurationError


def test_defaults(isolated_env):
    settings = StructInferSettings.load()
    assert settings.output_format == "go"
    assert settings.color_mode == "auto"
    assert settings.to_config() == Config()


def test_load_from_yaml(isolated_env, write_file):
    path = write_file(
        "custom.yml",
        "output_format: pydantic\noptional_fields: true\nrecord_prefix: Rec\n",
    )
    settings = StructInferSettings.load(path)
    assert settings.output_format == "pydantic"
    assert settings.to_config() == Config(optional_fields=True, record_prefix="Rec")


def test_config_file_is_discovered(isolated_env):
    (isolated_env / "struct-infer.yml").write_text("output_format: json_schema\n")
    assert StructInferSettings.find_config_file().endswith("struct-infer.yml")
    assert StructInferSettings.load().output_format == "json_schema"


def test_home_config_is_discovered(isolated_env):
    config_dir = isolated_env / ".config" / "struct-infer"
    config_dir.mkdir(parents=True)
    (config_dir / "config.yml").write_text("color_mode: never\n")
    assert StructInferSettings.load().color_mode == "never"


def test_unknown_keys_are_ignored(isolated_env, write_file):
    path = write_file("c.yml", "output_format: go\nbogus: 1\n")
    assert not hasattr(StructInferSettings.load(path), "bogus")


def test_empty_file_gives_defaults(isolated_env, write_file):
    assert StructInferSettings.load(write_file("c.yml", "")) == StructInferSettings()


def test_env_overrides_file(isolated_env, write_file, monkeypatch):
    path = write_file("c.yml", "output_format: pydantic\noptional_fields: false\n")
    monkeypatch.setenv("STRUCT_INFER_FORMAT", "json_schema")
    monkeypatch.setenv("STRUCT_INFER_OPTIONAL_FIELDS", "yes")
    monkeypatch.setenv("STRUCT_INFER_NUMERIC_STRINGS", "off")
    settings = StructInferSettings.load(path)
    assert settings.output_format == "json_schema"
    assert settings.optional_fields is True
    assert settings.coerce_numeric_strings is False


def test_overrides_win_and_none_is_ignored(isolated_env, monkeypatch):
    monkeypatch.setenv("STRUCT_INFER_FORMAT", "pydantic")
    settings = StructInferSettings.load().apply_overrides(
        output_format="go", optional_fields=None
    )
    assert settings.output_format == "go"
    assert settings.optional_fields is False


def test_missing_explicit_config(isolated_env):
    with pytest.raises(ConfigurationError, match="Config file not found"):
        StructInferSettings.load(str(isolated_env / "missing.yml"))


@pytest.mark.parametrize(
    "text,key",
    [
        ("output_format: rust\n", "output_format"),
        ("color_mode: sometimes\n", "color_mode"),
        ("optional_fields: maybe\n", "optional_fields"),
        ("record_prefix: 1x\n", "record_prefix"),
        ("log_level: LOUD\n", "log_level"),
    ],
)
def test_invalid_values(isolated_env, write_file, text, key):
    with pytest.raises(ConfigurationError) as excinfo:
        StructInferSettings.load(write_file("c.yml", text))
    assert excinfo.value.config_key == key


def test_invalid_yaml(isolated_env, write_file):
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        StructInferSettings.load(write_file("c.yml", "output_format: [go\n"))


def test_non_mapping_yaml(isolated_env, write_file):
    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        StructInferSettings.load(write_file("c.yml", "- go\n- pydantic\n"))


def test_invalid_env_bool(isolated_env, monkeypatch):
    monkeypatch.setenv("STRUCT_INFER_OPTIONAL_FIELDS", "perhaps")
    with pytest.raises(ConfigurationError) as excinfo:
        StructInferSettings.load()
    assert excinfo.value.config_key == "STRUCT_INFER_OPTIONAL_FIELDS"


def test_save_round_trips(isolated_env):
    path = isolated_env / "sub" / "out.yml"
    StructInferSettings(output_format="pydantic", optional_fields=True).save(str(path))
    data = yaml.safe_load(path.read_text())
    assert data["output_format"] == "pydantic"
    assert data["optional_fields"] is True
    assert StructInferSettings.load(str(path)).output_format == "pydantic"
