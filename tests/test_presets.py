"""
tests/test_presets.py - JSON scenario presets.
"""

import json

import pytest

from twobody.data_models import OrbitParameters, ReferenceFrame, SpinLock
from twobody.presets_loader import PRESETS_DIR, list_presets, load_preset, parse_preset


def _write(directory, name, payload):
    path = directory / name
    if isinstance(payload, str):
        path.write_text(payload, encoding="utf-8")
    else:
        path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestParsePreset:
    """Blocks are validated independently."""

    def test_full_preset(self):
        preset = parse_preset({
            "name": "Demo",
            "orbit": {"a": 4.0, "e": 0.3, "q": 2.0, "omega": 1.5},
            "frame": "observer",
            "spin_lock": "static",
            "roche": {"m1": 1.0, "m2": 0.5},
            "disk": {"temperature": 2e7},
        })
        assert preset.name == "Demo"
        assert preset.orbit == OrbitParameters(a=4.0, e=0.3, q=2.0, omega=1.5)
        assert preset.frame is ReferenceFrame.OBSERVER
        assert preset.spin_lock is SpinLock.STATIC
        assert preset.roche == {"m1": 1.0, "m2": 0.5}
        assert preset.disk == {"temperature": 2e7}

    def test_invalid_orbit_dropped(self):
        preset = parse_preset({"name": "Bad", "orbit": {"e": 1.5}, "frame": "inertial"})
        assert preset.orbit is None
        assert preset.frame is ReferenceFrame.INERTIAL

    def test_circular_orbit_kept(self):
        preset = parse_preset({"orbit": {"a": 5.0, "e": 0.0, "q": 1.0, "omega": 1.0}})
        assert preset.orbit == OrbitParameters()

    def test_negative_mass_dropped(self):
        assert parse_preset({"roche": {"m1": -1.0}}).roche is None

    def test_unknown_frame_dropped(self):
        assert parse_preset({"frame": "galactic"}).frame is None

    def test_name_defaults_to_file(self):
        assert parse_preset({}, source="/tmp/my_preset.json").name == "my_preset"


class TestPresetFiles:
    """Directory scanning and loading."""

    def test_list_skips_broken_files(self, tmp_path):
        _write(tmp_path, "b.json", {"name": "Second"})
        _write(tmp_path, "a.json", {"name": "First"})
        _write(tmp_path, "broken.json", "{not json")
        _write(tmp_path, "list.json", [1, 2, 3])
        _write(tmp_path, "notes.txt", "ignored")
        assert list_presets(str(tmp_path)) == [("a.json", "First"), ("b.json", "Second")]

    def test_missing_directory(self, tmp_path):
        assert list_presets(str(tmp_path / "missing")) == []

    def test_load(self, tmp_path):
        _write(tmp_path, "p.json", {"orbit": {"e": 0.5}})
        preset = load_preset("p.json", str(tmp_path))
        assert preset.orbit == OrbitParameters(e=0.5)

    def test_load_missing(self, tmp_path):
        assert load_preset("nope.json", str(tmp_path)) is None

    def test_bundled_presets_load(self):
        items = list_presets(PRESETS_DIR)
        assert len(items) == 4
        for file_name, _ in items:
            preset = load_preset(file_name)
            assert preset is not None
            assert preset.orbit is not None or preset.disk is not None


@pytest.mark.parametrize("lock", ["synchronous", "static", "retrograde"])
def test_spin_lock_values(lock):
    assert parse_preset({"spin_lock": lock}).spin_lock is SpinLock(lock)
