import pytest
import yaml

from levelgen.config import (
    Algorithm,
    ConfigError,
    GenerationConfig,
    PropSpec,
    SpawnPolicy,
    load_generation_config,
    load_yaml_config,
)


def test_defaults():
    config = GenerationConfig()
    assert (config.width, config.height) == (50, 50)
    assert config.algorithm is Algorithm.BSP
    assert config.corridor_width == 2
    assert config.waypoint_probability == 0.05
    assert config.prop_table == (PropSpec(10, 0.03),)
    assert config.spawn_policy is SpawnPolicy.RANDOM
    assert config.seed is None


@pytest.mark.parametrize(
    "changes",
    [
        {"width": 0},
        {"height": -4},
        {"room_min_width": 10, "room_max_width": 8},
        {"room_min_height": 0},
        {"room_max_width": 49},
        {"corridor_width": 0},
        {"waypoint_probability": 1.5},
        {"prop_table": (PropSpec("crate", -0.1),)},
        {"max_rooms": 0},
    ],
)
def test_invalid_configs_rejected(changes):
    with pytest.raises(ConfigError):
        GenerationConfig(**changes)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        GenerationConfig(corridor_width=0)


def test_enum_values_coerced_from_strings():
    config = GenerationConfig(algorithm="Cellular", spawn_policy="first")
    assert config.algorithm is Algorithm.CELLULAR
    assert config.spawn_policy is SpawnPolicy.FIRST
    with pytest.raises(ConfigError):
        GenerationConfig(algorithm="maze")


def test_replace_revalidates():
    config = GenerationConfig(seed=3)
    smaller = config.replace(width=20, height=20, room_max_width=8, room_max_height=8)
    assert smaller.seed == 3
    with pytest.raises(ConfigError):
        config.replace(width=10)


def test_from_mapping_with_props():
    config = GenerationConfig.from_mapping(
        {
            "width": 60,
            "algorithm": "drunkard",
            "props": [
                {"kind": "barrel", "probability": 0.02},
                {"kind": "crate", "probability": "0.01"},
            ],
        }
    )
    assert config.width == 60
    assert config.algorithm is Algorithm.DRUNKARD
    assert config.prop_table == (PropSpec("barrel", 0.02), PropSpec("crate", 0.01))


def test_from_mapping_empty_props():
    assert GenerationConfig.from_mapping({"props": []}).prop_table == ()


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ConfigError, match="colour"):
        GenerationConfig.from_mapping({"colour": "red"})


def test_from_mapping_rejects_bad_prop():
    with pytest.raises(ConfigError):
        GenerationConfig.from_mapping({"props": [{"probability": 0.5}]})


def test_load_yaml_config(tmp_path):
    path = tmp_path / "level.yaml"
    path.write_text("width: 40\nheight: 30\nalgorithm: random\nseed: 9\n", encoding="utf-8")
    assert load_yaml_config(path) == {"width": 40, "height": 30, "algorithm": "random", "seed": 9}
    config = load_generation_config(path)
    assert config.algorithm is Algorithm.RANDOM_ROOMS
    assert config.seed == 9


def test_load_yaml_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml_config(path) == {}
    assert load_generation_config(path) == GenerationConfig()


def test_load_yaml_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml_config(tmp_path / "missing.yaml")


def test_load_yaml_config_parse_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("width: [40\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_yaml_config(path)


def test_load_yaml_config_requires_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_config(path)


@pytest.mark.parametrize(
    "changes",
    [
        {"waypoint_probability": "0.05"},
        {"width": "50"},
        {"corridor_width": 1.5},
        {"max_rooms": True},
        {"seed": "42"},
        {"prop_table": (PropSpec("crate", "0.1"),)},
    ],
)
def test_wrong_types_raise_config_error(changes):
    with pytest.raises(ConfigError):
        GenerationConfig(**changes)


def test_quoted_number_in_yaml_is_a_config_error(tmp_path):
    path = tmp_path / "quoted.yaml"
    path.write_text('waypoint_probability: "0.05"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="waypoint_probability"):
        load_generation_config(path)
