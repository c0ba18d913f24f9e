#!/usr/bin/env python3
"""
Scenario preset loading.

A preset is a JSON file in presets/ that configures any subset of the views.

Schema
======
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "orbit": {"a": 5.0, "e": 0.5, "q": 2.0, "omega": 1.0},   # optional
  "frame": "co-rotating",                                   # optional: inertial | co-rotating | observer
  "spin_lock": "retrograde",                                # optional: synchronous | static | retrograde
  "roche": {"m1": 1.0, "m2": 0.3, "a": 1.0, "omega": 1.0},  # optional
  "disk": {"temperature": 1e7, "mu_mol": 1.0, "mass": 100}  # optional
}

Users can add their own JSON files into the folder and they'll be picked up by
the loader. A block that fails validation is dropped with a warning; the rest
of the preset still loads.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .data_models import OrbitParameters, ReferenceFrame, SpinLock
from .errors import InvalidParameter, require_positive

logger = logging.getLogger(__name__)

PRESETS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "presets")

_ORBIT_KEYS = ("a", "e", "q", "omega")
# Keys that may be zero or negative; OrbitParameters checks e itself
_UNSIGNED_KEYS = ("e", "omega")
_ROCHE_KEYS = ("m1", "m2", "a", "omega")
_DISK_KEYS = ("temperature", "mu_mol", "mass")


@dataclass(frozen=True)
class Preset:
    name: str
    description: str = ""
    orbit: Optional[OrbitParameters] = None
    frame: Optional[ReferenceFrame] = None
    spin_lock: Optional[SpinLock] = None
    roche: Optional[Dict[str, float]] = None
    disk: Optional[Dict[str, float]] = None


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Skipping preset %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping preset %s: top level is not an object", path)
        return None
    return data


def _numeric_block(block, keys, name: str, source: str) -> Optional[Dict[str, float]]:
    if block is None:
        return None
    try:
        values = {k: float(block[k]) for k in keys if k in block}
        for k, v in values.items():
            if k not in _UNSIGNED_KEYS:
                require_positive(f"{name}.{k}", v)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring %s block of %s: %s", name, source, exc)
        return None
    return values


def _enum_value(enum_cls, value, name: str, source: str):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Ignoring %s=%r in %s", name, value, source)
        return None


def parse_preset(data: dict, source: str = "<preset>") -> Preset:
    """Build a Preset from decoded JSON, dropping invalid blocks."""
    orbit_block = _numeric_block(data.get("orbit"), _ORBIT_KEYS, "orbit", source)
    orbit = None
    if orbit_block is not None:
        try:
            orbit = OrbitParameters(**orbit_block)
        except InvalidParameter as exc:
            logger.warning("Ignoring orbit block of %s: %s", source, exc)
    return Preset(
        name=data.get("name") or os.path.splitext(os.path.basename(source))[0],
        description=data.get("description", ""),
        orbit=orbit,
        frame=_enum_value(ReferenceFrame, data.get("frame"), "frame", source),
        spin_lock=_enum_value(SpinLock, data.get("spin_lock"), "spin_lock", source),
        roche=_numeric_block(data.get("roche"), _ROCHE_KEYS, "roche", source),
        disk=_numeric_block(data.get("disk"), _DISK_KEYS, "disk", source),
    )


def list_presets(directory: str = PRESETS_DIR) -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available presets."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(directory):
        return items
    for fn in sorted(os.listdir(directory)):
        if not fn.lower().endswith(".json"):
            continue
        data = _read_json(os.path.join(directory, fn))
        if data is None:
            continue
        items.append((fn, data.get("name") or os.path.splitext(fn)[0]))
    return items


def load_preset(file_name: str, directory: str = PRESETS_DIR) -> Optional[Preset]:
    """Load a preset by file name; None if the file cannot be read."""
    path = os.path.join(directory, file_name)
    data = _read_json(path)
    if data is None:
        return None
    return parse_preset(data, source=path)
