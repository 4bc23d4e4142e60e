"""Simulation core: bodies, satellites, capture rules and the per-frame driver."""

from .config import ConfigurationError, PlacementConfig, SimulationConfig, SpawnMode, VelocityMassSource
from .data_models import CaptureState, DyingTrail, MassiveBody, Particle, World
from .simulation import FrameSnapshot, SatelliteSimulation, advance

__all__ = [
    "ConfigurationError",
    "PlacementConfig",
    "SimulationConfig",
    "SpawnMode",
    "VelocityMassSource",
    "CaptureState",
    "DyingTrail",
    "MassiveBody",
    "Particle",
    "World",
    "FrameSnapshot",
    "SatelliteSimulation",
    "advance",
]
