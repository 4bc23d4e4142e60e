#!/usr/bin/env python3
"""
Preset loading utilities.

Presets are JSON files in capture_core/presets/*.json. Each one names a scene variant and overrides
any subset of SimulationConfig fields; omitted fields keep their defaults.

Schema
======
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "config": {
    "spawn_mode": "orbital_lane",
    "damping_enabled": true,
    "placement": {"clustered": true, "count_range": [3, 5]}
  }
}

Users can add their own JSON files into the folder and they'll be picked up by the loader.
"""
import json
import logging
import os
from typing import List, Tuple

from .config import ConfigurationError, SimulationConfig

logger = logging.getLogger(__name__)

PRESETS_DIR = os.path.join(os.path.dirname(__file__), "presets")


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    raise ConfigurationError(f"Cannot read preset {path}: {exc}") from exc
  if not isinstance(data, dict):
    raise ConfigurationError(f"Preset {path} must contain a JSON object")
  return data


def _preset_path(name: str, presets_dir: str) -> str:
  file_name = name if name.lower().endswith(".json") else f"{name}.json"
  return os.path.join(presets_dir, file_name)


def list_presets(presets_dir: str = PRESETS_DIR) -> List[Tuple[str, str]]:
  """Return list of (preset_key, display_name) for available presets."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(presets_dir):
    return items
  for fn in sorted(os.listdir(presets_dir)):
    if not fn.lower().endswith(".json"):
      continue
    key = os.path.splitext(fn)[0]
    try:
      display = _read_json(os.path.join(presets_dir, fn)).get("name") or key
    except ConfigurationError as exc:
      logger.warning("Skipping unreadable preset %s: %s", fn, exc)
      continue
    items.append((key, display))
  return items


def load_preset(name: str, presets_dir: str = PRESETS_DIR) -> SimulationConfig:
  """
  Load a preset by key (file name with or without .json).
  Raises ConfigurationError for missing files, bad JSON, unknown keys or invalid values.
  """
  path = _preset_path(name, presets_dir)
  data = _read_json(path)
  overrides = data.get("config", {})
  if not isinstance(overrides, dict):
    raise ConfigurationError(f"Preset {name}: 'config' must be an object")
  config = SimulationConfig.from_dict(overrides)
  logger.info("Loaded preset '%s' (%s)", data.get("name") or name, path)
  return config
