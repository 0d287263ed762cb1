"""Generation configuration.

``GenerationConfig`` is validated on construction so that a bad configuration
is rejected before any generation work starts. ``load_yaml_config`` and
``GenerationConfig.from_mapping`` turn a YAML file into a config::

    width: 60
    height: 40
    algorithm: cellular
    corridor_width: 1
    props:
      - {kind: barrel, probability: 0.02}
      - {kind: crate, probability: 0.01}
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Hashable, List, Mapping, Optional, Tuple

import structlog
import yaml

log = structlog.get_logger()


class ConfigError(ValueError):
    """Raised for a configuration that cannot produce a valid level."""


class Algorithm(Enum):
    BSP = "bsp"
    CELLULAR = "cellular"
    DRUNKARD = "drunkard"
    RANDOM_ROOMS = "random"


class SpawnPolicy(Enum):
    FIRST = "first"
    LAST = "last"
    RANDOM = "random"


@dataclass(frozen=True)
class PropSpec:
    kind: Hashable
    probability: float


DEFAULT_PROP_TABLE: Tuple[PropSpec, ...] = (PropSpec(kind=10, probability=0.03),)


@dataclass(frozen=True)
class GenerationConfig:
    width: int = 50
    height: int = 50
    algorithm: Algorithm = Algorithm.BSP
    room_min_width: int = 6
    room_max_width: int = 12
    room_min_height: int = 6
    room_max_height: int = 12
    corridor_width: int = 2
    waypoint_probability: float = 0.05
    prop_table: Tuple[PropSpec, ...] = field(default=DEFAULT_PROP_TABLE)
    spawn_policy: SpawnPolicy = SpawnPolicy.RANDOM
    max_rooms: int = 30
    max_room_attempts: int = 300
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # Normalise loosely typed inputs before validating
        object.__setattr__(self, "algorithm", _coerce_enum(Algorithm, self.algorithm, "algorithm"))
        object.__setattr__(
            self, "spawn_policy", _coerce_enum(SpawnPolicy, self.spawn_policy, "spawn_policy")
        )
        object.__setattr__(self, "prop_table", tuple(self.prop_table))
        self._validate()

    def _validate(self) -> None:
        type_problems = _type_problems(self)
        if type_problems:
            log.error("Invalid generation config", problems=type_problems)
            raise ConfigError("; ".join(type_problems))
        problems = []
        if self.width <= 0 or self.height <= 0:
            problems.append(f"grid dimensions must be positive, got {self.width}x{self.height}")
        if self.room_min_width <= 0 or self.room_min_height <= 0:
            problems.append("minimum room dimensions must be positive")
        if self.room_min_width > self.room_max_width:
            problems.append(
                f"room_min_width {self.room_min_width} > room_max_width {self.room_max_width}"
            )
        if self.room_min_height > self.room_max_height:
            problems.append(
                f"room_min_height {self.room_min_height} > room_max_height {self.room_max_height}"
            )
        # Rooms keep a one-cell margin from the outer edge
        if self.room_max_width > self.width - 2:
            problems.append(
                f"room_max_width {self.room_max_width} does not fit a grid {self.width} wide"
            )
        if self.room_max_height > self.height - 2:
            problems.append(
                f"room_max_height {self.room_max_height} does not fit a grid {self.height} high"
            )
        if self.corridor_width < 1:
            problems.append(f"corridor_width must be >= 1, got {self.corridor_width}")
        if not 0.0 <= self.waypoint_probability <= 1.0:
            problems.append(f"waypoint_probability {self.waypoint_probability} not in [0, 1]")
        for prop in self.prop_table:
            if not isinstance(prop, PropSpec):
                problems.append(f"prop_table entries must be PropSpec, got {prop!r}")
            elif not 0.0 <= prop.probability <= 1.0:
                problems.append(f"prop {prop.kind!r} probability {prop.probability} not in [0, 1]")
        if self.max_rooms < 1 or self.max_room_attempts < 1:
            problems.append("max_rooms and max_room_attempts must be >= 1")
        if problems:
            log.error("Invalid generation config", problems=problems)
            raise ConfigError("; ".join(problems))

    def replace(self, **changes: Any) -> "GenerationConfig":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerationConfig":
        """Builds a config from a plain mapping (e.g. parsed YAML)."""
        data = dict(data)
        props = data.pop("props", None)
        if props is not None:
            if "prop_table" in data:
                raise ConfigError("give either 'props' or 'prop_table', not both")
            data["prop_table"] = props
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        if "prop_table" in data:
            data["prop_table"] = tuple(_parse_prop(p) for p in data["prop_table"] or ())
        return cls(**data)


_INT_FIELDS: Tuple[str, ...] = (
    "width",
    "height",
    "room_min_width",
    "room_max_width",
    "room_min_height",
    "room_max_height",
    "corridor_width",
    "max_rooms",
    "max_room_attempts",
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _type_problems(config: "GenerationConfig") -> List[str]:
    """Fields whose type would make the range checks meaningless."""
    problems = [
        f"{name} must be an integer, got {getattr(config, name)!r}"
        for name in _INT_FIELDS
        if not _is_int(getattr(config, name))
    ]
    if not _is_number(config.waypoint_probability):
        problems.append(
            f"waypoint_probability must be a number, got {config.waypoint_probability!r}"
        )
    if config.seed is not None and not _is_int(config.seed):
        problems.append(f"seed must be an integer or null, got {config.seed!r}")
    for prop in config.prop_table:
        if isinstance(prop, PropSpec) and not _is_number(prop.probability):
            problems.append(
                f"prop {prop.kind!r} probability must be a number, got {prop.probability!r}"
            )
    return problems


def _coerce_enum(enum_cls, value, name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"invalid {name} {value!r}; expected one of: {choices}") from None


def _parse_prop(entry: Any) -> PropSpec:
    if isinstance(entry, PropSpec):
        return entry
    if not isinstance(entry, Mapping) or "kind" not in entry:
        raise ConfigError(f"prop entry needs 'kind' and 'probability': {entry!r}")
    try:
        probability = float(entry.get("probability", 0.0))
    except (TypeError, ValueError):
        raise ConfigError(f"prop probability must be a number: {entry!r}") from None
    return PropSpec(kind=entry["kind"], probability=probability)


def load_yaml_config(config_path: Path, config_name: str = "Generation") -> Dict[str, Any]:
    """Loads a YAML configuration file into a dict."""
    config_path = Path(config_path)
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(f"{config_name} configuration file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(f"Error parsing YAML for {config_name}", path=str(config_path), error=str(e))
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        raise ConfigError(f"{config_name} config must be a mapping, got {type(config_data).__name__}")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data


def load_generation_config(config_path: Path) -> GenerationConfig:
    return GenerationConfig.from_mapping(load_yaml_config(config_path))


__all__ = [
    "Algorithm",
    "ConfigError",
    "GenerationConfig",
    "PropSpec",
    "SpawnPolicy",
    "load_generation_config",
    "load_yaml_config",
]
