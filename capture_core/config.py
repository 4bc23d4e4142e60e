#!/usr/bin/env python3
"""
Run configuration for the satellite capture simulator.

One SimulationConfig is built per run and never mutated afterwards. The scene
variants this engine unifies (edge entry vs. orbital lanes, damped rings,
dying trails, clustered placement) are all expressed as fields here rather than
as separate code paths.

Invalid values are rejected in __post_init__ with ConfigurationError so that a
bad configuration fails before any simulation step runs.
"""
from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Tuple

from . import constants as C


class ConfigurationError(ValueError):
    """Raised when a configuration value is malformed."""


class SpawnMode(Enum):
    EDGE_ENTRY = "edge_entry"
    ORBITAL_LANE = "orbital_lane"


class VelocityMassSource(Enum):
    MEAN = "mean"  # mean mass of the whole field
    NEAREST = "nearest"  # mass of the body the particle is aimed at


def _require(cond: bool, message: str) -> None:
    if not cond:
        raise ConfigurationError(message)


def _require_range(name: str, value: Tuple[float, float], minimum: float = 0.0) -> None:
    _require(
        len(value) == 2 and value[0] <= value[1],
        f"{name} must be a (low, high) pair with low <= high, got {value!r}",
    )
    _require(value[0] >= minimum, f"{name} must not go below {minimum}, got {value!r}")


@dataclass(frozen=True)
class PlacementConfig:
    """Procedural placement of the massive bodies."""
    count_range: Tuple[int, int] = C.BODY_COUNT_RANGE
    min_spacing: float = C.MIN_BODY_SPACING
    grid_size: int = C.GRID_SIZE
    cell_margin_ratio: float = C.CELL_MARGIN_RATIO
    mass_range: Tuple[float, float] = C.BODY_MASS_RANGE
    radius_range: Tuple[float, float] = C.BODY_RADIUS_RANGE
    clustered: bool = False
    cluster_spread: float = C.CLUSTER_SPREAD
    max_attempts: int = C.PLACEMENT_MAX_ATTEMPTS
    lanes_per_body: int = C.LANES_PER_BODY
    lane_range: Tuple[float, float] = C.LANE_RADIUS_RANGE

    def __post_init__(self):
        object.__setattr__(self, "count_range", tuple(int(v) for v in self.count_range))
        object.__setattr__(self, "mass_range", tuple(float(v) for v in self.mass_range))
        object.__setattr__(self, "radius_range", tuple(float(v) for v in self.radius_range))
        object.__setattr__(self, "lane_range", tuple(float(v) for v in self.lane_range))

        _require_range("placement.count_range", self.count_range, minimum=1)
        _require(self.min_spacing >= 0, f"placement.min_spacing must be >= 0, got {self.min_spacing}")
        _require(self.grid_size >= 1, f"placement.grid_size must be >= 1, got {self.grid_size}")
        _require(
            0.0 <= self.cell_margin_ratio <= 0.5,
            f"placement.cell_margin_ratio must lie in [0, 0.5], got {self.cell_margin_ratio}",
        )
        _require_range("placement.mass_range", self.mass_range)
        _require(self.mass_range[0] > 0, f"placement.mass_range must be positive, got {self.mass_range}")
        _require_range("placement.radius_range", self.radius_range)
        _require(self.radius_range[0] > 0, f"placement.radius_range must be positive, got {self.radius_range}")
        _require(self.cluster_spread > 0, f"placement.cluster_spread must be > 0, got {self.cluster_spread}")
        _require(self.max_attempts >= 1, f"placement.max_attempts must be >= 1, got {self.max_attempts}")
        _require(self.lanes_per_body >= 0, f"placement.lanes_per_body must be >= 0, got {self.lanes_per_body}")
        _require_range("placement.lane_range", self.lane_range, minimum=1.0)


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable per-run settings: physics, spawning, capture, culling, trails and placement."""
    half_size: float = C.DOMAIN_HALF_SIZE
    G: float = C.G
    softening_floor: float = C.SOFTENING_FLOOR
    particle_mass: float = C.PARTICLE_MASS
    particle_radius: float = C.PARTICLE_RADIUS
    dt: float = C.BASE_DT
    steps_per_frame: int = C.STEPS_PER_FRAME
    max_particles: int = C.MAX_PARTICLES

    spawn_probability: float = C.SPAWN_PROBABILITY
    capturable_fraction: float = C.CAPTURABLE_FRACTION
    capture_probability: float = C.CAPTURE_PROBABILITY
    uncapture_probability: float = C.UNCAPTURE_PROBABILITY

    ring_min_distance: float = C.RING_MIN_DISTANCE
    ring_max_distance: float = C.RING_MAX_DISTANCE
    tangential_tolerance: float = C.TANGENTIAL_TOLERANCE
    capture_blend_factor: float = C.CAPTURE_BLEND_FACTOR

    trail_capacity: int = C.TRAIL_CAPACITY
    trail_interval: int = C.TRAIL_INTERVAL

    spawn_mode: SpawnMode = SpawnMode.EDGE_ENTRY
    spawn_radius: float = C.SPAWN_RADIUS
    speed_multiplier_range: Tuple[float, float] = C.SPEED_MULTIPLIER_RANGE
    velocity_mass_source: VelocityMassSource = VelocityMassSource.MEAN

    ejection_factor: float = C.EJECTION_FACTOR
    dying_trails_enabled: bool = True
    dying_trail_ticks: int = C.DYING_TRAIL_TICKS

    damping_enabled: bool = False
    damping_factor: float = C.DAMPING_FACTOR
    damping_distance_ratio: float = C.DAMPING_DISTANCE_RATIO

    placement: PlacementConfig = field(default_factory=PlacementConfig)

    def __post_init__(self):
        # Accept plain strings and dicts so presets can be built from JSON.
        try:
            object.__setattr__(self, "spawn_mode", SpawnMode(self.spawn_mode))
            object.__setattr__(self, "velocity_mass_source", VelocityMassSource(self.velocity_mass_source))
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        if isinstance(self.placement, dict):
            object.__setattr__(self, "placement", PlacementConfig(**self.placement))
        _require(
            isinstance(self.placement, PlacementConfig),
            f"placement must be an object of placement settings, got {self.placement!r}",
        )
        object.__setattr__(
            self, "speed_multiplier_range", tuple(float(v) for v in self.speed_multiplier_range)
        )
        self._validate()

    def _validate(self) -> None:
        for name in ("half_size", "G", "particle_mass", "particle_radius", "dt", "spawn_radius"):
            value = getattr(self, name)
            _require(value > 0, f"{name} must be > 0, got {value}")
        _require(self.softening_floor >= 0, f"softening_floor must be >= 0, got {self.softening_floor}")
        for name in ("steps_per_frame", "max_particles", "trail_capacity", "trail_interval"):
            value = getattr(self, name)
            _require(
                isinstance(value, int) and not isinstance(value, bool) and value >= 1,
                f"{name} must be an integer >= 1, got {value!r}",
            )
        for name in (
            "spawn_probability",
            "capturable_fraction",
            "capture_probability",
            "uncapture_probability",
            "capture_blend_factor",
        ):
            value = getattr(self, name)
            _require(0.0 <= value <= 1.0, f"{name} must lie in [0, 1], got {value}")
        _require(
            0 <= self.ring_min_distance <= self.ring_max_distance,
            f"capture band must satisfy 0 <= ring_min_distance <= ring_max_distance, "
            f"got [{self.ring_min_distance}, {self.ring_max_distance}]",
        )
        _require(
            0.0 < self.tangential_tolerance <= 1.0,
            f"tangential_tolerance must lie in (0, 1], got {self.tangential_tolerance}",
        )
        _require_range("speed_multiplier_range", self.speed_multiplier_range)
        _require(self.ejection_factor > 0, f"ejection_factor must be > 0, got {self.ejection_factor}")
        _require(self.dying_trail_ticks >= 1, f"dying_trail_ticks must be >= 1, got {self.dying_trail_ticks}")
        _require(0.0 < self.damping_factor <= 1.0, f"damping_factor must lie in (0, 1], got {self.damping_factor}")
        _require(
            self.damping_distance_ratio >= 1.0,
            f"damping_distance_ratio must be >= 1, got {self.damping_distance_ratio}",
        )

    @property
    def domain_size(self) -> float:
        """Characteristic size of the domain (full width)."""
        return 2.0 * self.half_size

    @property
    def ejection_distance(self) -> float:
        return self.ejection_factor * self.domain_size

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["spawn_mode"] = self.spawn_mode.value
        data["velocity_mass_source"] = self.velocity_mass_source.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        placement = data.get("placement", {})
        if isinstance(placement, dict):
            known_placement = {f.name for f in fields(PlacementConfig)}
            unknown = sorted(set(placement) - known_placement)
            if unknown:
                raise ConfigurationError(f"Unknown placement keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
