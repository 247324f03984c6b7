from __future__ import annotations

import pytest

from swc2dot import (
    CompartmentKind,
    ConfigError,
    ConfigStructureError,
    DataNotFound,
    StyleConfig,
    make_config,
)
from swc2dot.config import load_yaml, parse_option_group


def test_default_has_every_group_in_kind_order():
    style = StyleConfig.default()
    assert style.groups() == ["undefined", "soma", "axon", "dendrite", "apicaldendrite", "custom"]
    assert style.get_style(CompartmentKind.SOMA)["shape"] == "circle"
    assert list(style.get_style(CompartmentKind.SOMA)) == ["shape", "style", "color"]


def test_get_style_returns_a_copy():
    style = StyleConfig.default()
    style.get_style(CompartmentKind.AXON)["shape"] = "box"
    assert style.get_style(CompartmentKind.AXON)["shape"] == "point"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("key: value", {"key": "value"}),
        ("key1: value1\nkey2: value2", {"key1": "value1", "key2": "value2"}),
        ("key: 1.23", {"key": "1.23"}),
        ("key: 23", {"key": "23"}),
        ("key: true", {"key": "true"}),
        ("key: True", {"key": "True"}),
        ("key: TRUE", {"key": "TRUE"}),
        ("key:", {"key": None}),
        ("key: ~", {"key": None}),
        ("color: '#ff0000'", {"color": "#ff0000"}),
    ],
)
def test_option_values_keep_their_literal_text(text, expected):
    assert parse_option_group(load_yaml(text, "test"), "soma", "test") == expected


@pytest.mark.parametrize("text", ["key: [1, 2]", "key: {nested: 1}"])
def test_non_scalar_option_values_are_rejected(text):
    with pytest.raises(ConfigStructureError, match="null or string-like"):
        parse_option_group(load_yaml(text, "test"), "soma", "test")


def test_override_replaces_and_adds_options():
    style = StyleConfig.default()
    style.override_from_mapping(load_yaml("soma:\n  color: blue\n  width: 2\n", "test"))

    assert style.get_style(CompartmentKind.SOMA) == {
        "shape": "circle",
        "style": "filled",
        "color": "blue",
        "width": "2",
    }
    # Groups left out of the override keep their defaults
    assert style.get_style(CompartmentKind.AXON) == StyleConfig.default().get_style(CompartmentKind.AXON)


def test_override_never_removes_groups():
    style = StyleConfig.default()
    style.override_from_mapping({"axon": {}})
    assert style.groups() == StyleConfig.default().groups()
    assert style.get_style(CompartmentKind.AXON)["shape"] == "point"


def test_later_override_keeps_earlier_options():
    style = StyleConfig()
    style.override_from_mapping({"dendrite": {"color": "green"}})
    style.override_from_mapping({"soma": {"color": "red"}})
    assert style.get_style(CompartmentKind.DENDRITE) == {"color": "green"}
    assert style.get_style(CompartmentKind.SOMA) == {"color": "red"}


@pytest.mark.parametrize("data", [{"soma": 5}, {"soma": "red"}, {"soma": ["a", "b"]}, {"soma": None}])
def test_group_that_is_not_a_hash_is_a_structure_error(data):
    with pytest.raises(ConfigStructureError, match="config group soma"):
        StyleConfig.default().override_from_mapping(data)


def test_bad_group_leaves_configuration_untouched():
    style = StyleConfig.default()
    with pytest.raises(ConfigStructureError):
        style.override_from_mapping({"axon": {"color": "red"}, "soma": 3})
    assert style.get_style(CompartmentKind.AXON)["color"] == "#1f77b4"


def test_top_level_must_be_a_hash():
    with pytest.raises(ConfigStructureError):
        StyleConfig().override_from_mapping(["soma"])


def test_unknown_groups_and_empty_documents_are_ignored():
    style = StyleConfig()
    style.override_from_mapping({"glia": {"color": "red"}})
    style.override_from_mapping(None)
    assert style.to_dict() == {group: {} for group in style.groups()}


def test_override_from_file(tmp_path):
    path = tmp_path / "style.yml"
    path.write_text("custom:\n  shape: star\n", encoding="utf-8")

    style = StyleConfig.from_file(path)
    assert style.get_style(CompartmentKind.CUSTOM)["shape"] == "star"


def test_invalid_yaml_is_a_config_error(tmp_path):
    path = tmp_path / "style.yml"
    path.write_text("soma: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="as YAML"):
        StyleConfig.default().override_from_file(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(DataNotFound):
        make_config(tmp_path / "missing.yml")


def test_make_config_defaults():
    cfg = make_config()
    assert cfg.layout.line_width == 80
    assert cfg.processing.overwrite
    assert not cfg.processing.keep_going
    assert cfg.style.get_style(CompartmentKind.SOMA)["shape"] == "circle"


def test_make_config_rejects_narrow_lines():
    with pytest.raises(ConfigError, match="line_width"):
        make_config(line_width=8)
    assert make_config(line_width=9).layout.line_width == 9
