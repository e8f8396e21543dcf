import pytest

from romnames.config.loader import (
    DEFAULT_CONFIG,
    ConfigError,
    default_config,
    get_config_value,
    load_config,
)


@pytest.mark.unit
def test_load_config_merges_defaults(make_config):
    config_path = make_config({"naming": {"strict": True}})

    cfg = load_config(str(config_path))

    assert cfg["naming"]["strict"] is True
    assert cfg["naming"]["convention"] == "auto"
    assert cfg["naming"]["drop_trailing"] is False
    assert cfg["dats"]["check_header"] is True
    assert cfg["output"]["format"] == "plain"


@pytest.mark.unit
def test_load_config_searches_current_directory(make_config, tmp_path, monkeypatch):
    make_config({"logging": {"level": "DEBUG"}})
    monkeypatch.chdir(tmp_path)

    cfg = load_config()

    assert cfg["logging"]["level"] == "DEBUG"


@pytest.mark.unit
def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "does-not-exist.yaml"))


@pytest.mark.unit
def test_load_config_invalid_yaml(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("invalid: [unclosed")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(str(config_path))


@pytest.mark.unit
def test_load_config_requires_mapping(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="dictionary"):
        load_config(str(config_path))


@pytest.mark.unit
def test_load_config_empty_section_keeps_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging:\nnaming:\n  strict: true\n")

    cfg = load_config(str(config_path))

    assert cfg["logging"] == DEFAULT_CONFIG["logging"]
    assert cfg["naming"]["strict"] is True


@pytest.mark.unit
def test_default_config_is_a_copy():
    cfg = default_config()
    cfg["naming"]["strict"] = True

    assert DEFAULT_CONFIG["naming"]["strict"] is False


@pytest.mark.unit
@pytest.mark.parametrize("path, expected", [
    ("naming.convention", "auto"),
    ("dats.skip_unparseable", True),
    ("naming.missing", None),
    ("nothing.here.at.all", None),
])
def test_get_config_value(path, expected):
    assert get_config_value(default_config(), path) == expected


@pytest.mark.unit
def test_get_config_value_default():
    assert get_config_value({}, "output.format", "table") == "table"
