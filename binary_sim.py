#!/usr/bin/env python3
"""
Binary Systems Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController that owns the orbit and rotation sessions
  and the Roche and disk models; all access is guarded by a re-entrant lock.
- The viewport animates the binary orbit in the selected frame (with trails) and the
  companion rotation in all three frames side by side.
- The control window holds the sliders and the heat maps of the Roche potential and
  of the accretion disk density.

Threading model
- PygameRenderer runs in a background thread and is the only caller of the sessions'
  tick(); it locks the controller around each tick and snapshot.
- The UI class runs in the main thread via Dear PyGui. Slider callbacks call
  controller methods, which reconfigure under the lock. Grids are re-evaluated only
  on those callbacks, never per frame.

Running
1) Install dependencies: `pip install -e .[viewer]`
2) Run this module: `python binary_sim.py`
"""

import logging
import math
import threading
import time
from typing import Dict, List, Optional

import numpy as np
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from twobody.camera import Camera2D
from twobody.constants import (
    BACKGROUND_COLOR,
    CONNECTOR_COLOR,
    DISK_MASS_BOUNDS,
    DISK_MU_BOUNDS,
    DISK_TEMPERATURE_BOUNDS,
    ECCENTRICITY_BOUNDS,
    GRID_COLOR,
    MASS_RATIO_BOUNDS,
    PLANET_COLOR,
    ROCHE_MASS_BOUNDS,
    ROCHE_OMEGA_BOUNDS,
    ROCHE_SEPARATION_BOUNDS,
    SAFE_COORD_LIMIT,
    SPEED_BOUNDS,
    SPIN_BODY_RADIUS,
    SPIN_DISTANCE,
    STAR_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from twobody.data_models import BodyId, ReferenceFrame, SpinLock
from twobody.errors import InvalidParameter
from twobody.orbit import apoapsis, periapsis
from twobody.presets_loader import list_presets, load_preset
from twobody.session import DiskModel, OrbitSession, RocheModel, SpinSession
from twobody.spin import SpinLayout
from twobody.vector_utils import clamp

logger = logging.getLogger("binary_sim")

SPIN_PANEL_SIZE = 260
ORBIT_VIEW_HEIGHT = VIEW_HEIGHT - SPIN_PANEL_SIZE - 40

# ============================================================
# Simulation Controller (Shared State)
# ============================================================


class SimulationController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.running = True
        self.playing = True
        self.orbit = OrbitSession()
        self.spin = SpinSession()
        self.roche = RocheModel()
        self.disk = DiskModel()
        self.status: Optional[str] = None
        self.status_is_error = False

    def _report(self, msg: str, error: bool = False) -> None:
        self.status = msg
        self.status_is_error = error
        (logger.warning if error else logger.info)(msg)

    def set_orbit(self, **changes) -> bool:
        with self.lock:
            try:
                changed = self.orbit.update(**changes)
            except InvalidParameter as exc:
                self._report(f"Rejected orbit change: {exc}", error=True)
                return False
            if changed:
                self._report("Orbit reconfigured; trails cleared.")
            return changed

    def set_frame(self, frame: ReferenceFrame) -> None:
        with self.lock:
            if self.orbit.configure(frame=frame):
                self._report(f"Frame: {frame.label}")

    def set_spin_lock(self, lock: SpinLock) -> None:
        with self.lock:
            self.spin.set_lock(lock)
            self._report(f"Companion rotation: {lock.value}")

    def set_roche(self, **changes) -> bool:
        with self.lock:
            try:
                return self.roche.configure(**changes)
            except InvalidParameter as exc:
                self._report(f"Rejected Roche change: {exc}", error=True)
                return False

    def set_disk(self, **changes) -> bool:
        with self.lock:
            try:
                return self.disk.configure(**changes)
            except InvalidParameter as exc:
                self._report(f"Rejected disk change: {exc}", error=True)
                return False

    def step(self, dt_real_seconds: float) -> None:
        """One animation tick for both the orbit and the rotation view."""
        if dt_real_seconds <= 0:
            return
        with self.lock:
            self.orbit.tick(dt_real_seconds)
            self.spin.tick()

    def apply_preset(self, file_name: str) -> bool:
        preset = load_preset(file_name)
        if preset is None:
            with self.lock:
                self._report(f"Failed to load preset '{file_name}'.", error=True)
            return False
        with self.lock:
            if preset.orbit is not None or preset.frame is not None:
                self.orbit.configure(params=preset.orbit, frame=preset.frame)
            if preset.spin_lock is not None:
                self.spin.set_lock(preset.spin_lock)
            if preset.roche:
                self.set_roche(**preset.roche)
            if preset.disk:
                self.set_disk(**preset.disk)
            self._report(f"Loaded preset: {preset.name}")
        return True

    def take_status(self):
        with self.lock:
            msg, err = self.status, self.status_is_error
            self.status = None
            return msg, err


# ============================================================
# Pygame Renderer Thread
# ============================================================


class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the sessions and draws the orbit view and the three
    companion rotation panels. Mouse wheel zooms the orbit view, arrows pan.
    """

    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(viewport_size=(VIEW_WIDTH, ORBIT_VIEW_HEIGHT))
        self.surface = None
        self.clock = None
        self.pan_speed_keys = 600
        self.running = True
        self._fitted_params = None

    def auto_frame_camera(self):
        with self.sim.lock:
            params = self.sim.orbit.params
        self.camera.fit(apoapsis(params.a, params.e) + 0.5)
        self._fitted_params = params

    def run(self):
        pygame.init()
        pygame.display.set_caption("Binary Systems Simulator - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT))
        self.clock = pygame.time.Clock()
        self.auto_frame_camera()

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events(real_dt)

            with self.sim.lock:
                playing = self.sim.playing
                params = self.sim.orbit.params
            if params != self._fitted_params:
                self.auto_frame_camera()
            if playing:
                self.sim.step(real_dt)

            self.draw()
            self.clock.tick(60)

        pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.pan_pixels(self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.pan_pixels(-self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.pan_pixels(0, self.pan_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.pan_pixels(0, -self.pan_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False
            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                with self.sim.lock:
                    self.sim.playing = not self.sim.playing

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        with self.sim.lock:
            orbit = self.sim.orbit
            frame = orbit.frame
            bodies = {bid: (b.position, b.color, b.rotation) for bid, b in orbit.bodies.items()}
            params = orbit.params
            trails = {bid: buf.points() for bid, buf in orbit.trails.items()}
            layouts = self.sim.spin.layouts()
            lock_state = self.sim.spin.lock
            playing = self.sim.playing

        self.draw_orbit(surf, frame, bodies, trails)
        for i, rf in enumerate((ReferenceFrame.OBSERVER, ReferenceFrame.INERTIAL,
                                ReferenceFrame.CO_ROTATING)):
            x0 = 20 + i * (SPIN_PANEL_SIZE + 40)
            self.draw_spin_panel(surf, layouts[rf], x0, ORBIT_VIEW_HEIGHT + 20)

        draw_text(surf, "Wheel: zoom | Arrows: pan | Space: Pause/Play", 10, 10, (200, 200, 200))
        draw_text(surf, f"{frame.label}  [{'Playing' if playing else 'Paused'}]"
                        f"  Companion: {lock_state.value}", 10, 30, (200, 200, 200))
        draw_text(surf, f"P = {params.period:.2f}  r_peri = {periapsis(params.a, params.e):.2f}"
                        f"  r_apo = {apoapsis(params.a, params.e):.2f}", 10, 50, (200, 200, 200))
        pygame.display.flip()

    def draw_orbit(self, surf, frame, bodies, trails):
        pygame.draw.line(surf, GRID_COLOR, (0, ORBIT_VIEW_HEIGHT), (VIEW_WIDTH, ORBIT_VIEW_HEIGHT), 1)
        for bid, pts in trails.items():
            if bid is BodyId.CENTER_OF_MASS and frame is ReferenceFrame.CO_ROTATING:
                continue
            screen_pts = [p for p in (_safe_point(self.camera.world_to_screen(q)) for q in pts) if p]
            if len(screen_pts) > 1:
                pygame.draw.aalines(surf, bodies[bid][1], False, screen_pts)

        p1 = _safe_point(self.camera.world_to_screen(bodies[BodyId.PRIMARY][0]))
        p2 = _safe_point(self.camera.world_to_screen(bodies[BodyId.SECONDARY][0]))
        if frame is not ReferenceFrame.CO_ROTATING and p1 and p2:
            pygame.draw.aaline(surf, CONNECTOR_COLOR, p1, p2)
        for bid in (BodyId.PRIMARY, BodyId.SECONDARY):
            sp = _safe_point(self.camera.world_to_screen(bodies[bid][0]))
            if sp:
                vis_r = max(4, int(0.2 / self.camera.upp))
                gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, bodies[bid][1])
                gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, (0, 0, 0))
                rot = bodies[bid][2]
                tip = (int(sp[0] + vis_r * math.cos(rot)), int(sp[1] - vis_r * math.sin(rot)))
                pygame.draw.line(surf, (255, 255, 255), sp, tip, 1)
        com = _safe_point(self.camera.world_to_screen(bodies[BodyId.CENTER_OF_MASS][0]))
        if com:
            gfxdraw.filled_circle(surf, com[0], com[1], 3, (230, 230, 230))

    def draw_spin_panel(self, surf, layout: SpinLayout, x0: int, y0: int):
        half = SPIN_PANEL_SIZE / 2.0
        scale = SPIN_PANEL_SIZE / (2.0 * (SPIN_DISTANCE + SPIN_BODY_RADIUS))
        cx, cy = x0 + half, y0 + half

        def to_panel(p):
            return (int(cx + p[0] * scale), int(cy - p[1] * scale))

        pygame.draw.rect(surf, GRID_COLOR, (x0, y0, SPIN_PANEL_SIZE, SPIN_PANEL_SIZE), 1)
        for center, radius in layout.guide_circles:
            c = to_panel(center)
            gfxdraw.aacircle(surf, c[0], c[1], int(radius * scale), CONNECTOR_COLOR)
        r = int(SPIN_BODY_RADIUS * scale)
        for pos, rot, color in ((layout.star, layout.star_rotation, STAR_COLOR),
                                (layout.planet, layout.planet_rotation, PLANET_COLOR)):
            p = to_panel(pos)
            gfxdraw.filled_circle(surf, p[0], p[1], r, color)
            tip = (int(p[0] + r * math.cos(rot)), int(p[1] - r * math.sin(rot)))
            pygame.draw.line(surf, (255, 255, 255), p, tip, 2)
        com = to_panel(layout.center_of_mass)
        gfxdraw.filled_circle(surf, com[0], com[1], 3, (230, 230, 230))
        draw_text(surf, layout.frame.label, x0 + 4, y0 + 4, (200, 200, 200))


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    x, y = int(pt[0]), int(pt[1])
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


# ============================================================
# Dear PyGui UI
# ============================================================

_FRAME_BY_LABEL = {f.label: f for f in ReferenceFrame}
_LOCK_BY_LABEL = {lock.value.capitalize(): lock for lock in SpinLock}


def heat_rows(values: np.ndarray) -> List[float]:
    """Flatten a (rows=y ascending, cols=x) grid top row first, as heat series expect."""
    return np.asarray(values, dtype=float)[::-1].ravel().tolist()


class UI:
    """
    Dear PyGui interface: orbit and rotation controls, Roche and disk heat maps.
    """

    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer
        self.status_msg_id = None
        self._preset_map: Dict[str, str] = {}
        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="Binary Systems Simulator - Controls", width=860, height=900)

        with dpg.window(label="Controls", tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                self._preset_map = {display: fn for fn, display in list_presets()}
                items = list(self._preset_map) or ["No presets found (add JSONs to presets/)"]
                dpg.add_combo(items, default_value=items[0], width=320, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self._load_preset(dpg.get_value("preset_combo")))
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
            self.status_msg_id = dpg.add_text("")

            with dpg.tab_bar():
                with dpg.tab(label="Binary orbit"):
                    self._build_orbit_tab()
                with dpg.tab(label="Roche potential"):
                    self._build_roche_tab()
                with dpg.tab(label="Accretion disk"):
                    self._build_disk_tab()

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _build_orbit_tab(self):
        params = self.sim.orbit.params
        dpg.add_slider_float(label="Mass ratio", min_value=MASS_RATIO_BOUNDS[0], max_value=MASS_RATIO_BOUNDS[1],
                             default_value=params.q, width=300, tag="orbit_q",
                             callback=lambda s, a, u: self.sim.set_orbit(q=float(a)))
        dpg.add_slider_float(label="Eccentricity", min_value=ECCENTRICITY_BOUNDS[0],
                             max_value=ECCENTRICITY_BOUNDS[1], default_value=params.e, width=300, tag="orbit_e",
                             callback=lambda s, a, u: self.sim.set_orbit(e=float(a)))
        dpg.add_slider_float(label="Playback speed", min_value=SPEED_BOUNDS[0], max_value=SPEED_BOUNDS[1],
                             default_value=params.omega, width=300, tag="orbit_omega",
                             callback=lambda s, a, u: self.sim.set_orbit(omega=float(a)))
        dpg.add_combo(list(_FRAME_BY_LABEL), default_value=self.sim.orbit.frame.label, width=300,
                      label="Frame", tag="orbit_frame",
                      callback=lambda s, a, u: self.sim.set_frame(_FRAME_BY_LABEL[a]))
        dpg.add_separator()
        dpg.add_text("Companion rotation")
        dpg.add_radio_button(list(_LOCK_BY_LABEL), default_value=self.sim.spin.lock.value.capitalize(),
                             horizontal=True, tag="spin_lock",
                             callback=lambda s, a, u: self.sim.set_spin_lock(_LOCK_BY_LABEL[a]))

    def _build_roche_tab(self):
        model = self.sim.roche
        for key, label, bounds in (("m1", "Mass 1", ROCHE_MASS_BOUNDS), ("m2", "Mass 2", ROCHE_MASS_BOUNDS),
                                   ("a", "Separation (a)", ROCHE_SEPARATION_BOUNDS),
                                   ("omega", "Ang. velocity", ROCHE_OMEGA_BOUNDS)):
            dpg.add_slider_float(label=label, min_value=bounds[0], max_value=bounds[1],
                                 default_value=getattr(model, key), width=300, tag=f"roche_{key}",
                                 callback=self._on_roche_slider, user_data=key)
        with dpg.group(horizontal=True):
            with dpg.plot(label="Roche potential log10|phi|", width=600, height=560,
                          equal_aspects=True, tag="roche_plot"):
                dpg.add_plot_axis(dpg.mvXAxis, label="x")
                dpg.add_plot_axis(dpg.mvYAxis, label="y", tag="roche_y_axis")
            dpg.add_colormap_scale(min_scale=0.0, max_scale=1.0, height=560, tag="roche_scale")
        dpg.bind_colormap("roche_plot", dpg.mvPlotColormap_Viridis)
        dpg.bind_colormap("roche_scale", dpg.mvPlotColormap_Viridis)
        self._refresh_roche_plot()

    def _build_disk_tab(self):
        model = self.sim.disk
        dpg.add_slider_float(label="Temperature T (K)", min_value=DISK_TEMPERATURE_BOUNDS[0],
                             max_value=DISK_TEMPERATURE_BOUNDS[1], default_value=model.temperature,
                             format="%.2e", width=300, tag="disk_temperature",
                             callback=lambda s, a, u: self._on_disk_change(temperature=float(a)))
        dpg.add_slider_int(label="Molecular weight mu", min_value=int(DISK_MU_BOUNDS[0]),
                           max_value=int(DISK_MU_BOUNDS[1]), default_value=int(model.mu_mol), width=300,
                           tag="disk_mu", callback=lambda s, a, u: self._on_disk_change(mu_mol=float(a)))
        dpg.add_slider_int(label="Mass M (solar masses)", min_value=int(DISK_MASS_BOUNDS[0]),
                           max_value=int(DISK_MASS_BOUNDS[1]), default_value=int(model.mass), width=300,
                           tag="disk_mass", callback=lambda s, a, u: self._on_disk_change(mass=float(a)))
        with dpg.group(horizontal=True):
            with dpg.plot(label="Normalized density rho(z)/rho(0)", width=600, height=560, tag="disk_plot"):
                dpg.add_plot_axis(dpg.mvXAxis, label="x / rs (radius)")
                dpg.add_plot_axis(dpg.mvYAxis, label="z / rs (height)", tag="disk_y_axis")
            dpg.add_colormap_scale(min_scale=0.0, max_scale=1.0, height=560, tag="disk_scale")
        dpg.bind_colormap("disk_plot", dpg.mvPlotColormap_Hot)
        dpg.bind_colormap("disk_scale", dpg.mvPlotColormap_Hot)
        self._refresh_disk_plot()

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _toggle_play(self):
        with self.sim.lock:
            self.sim.playing = not self.sim.playing
            state = "Playing" if self.sim.playing else "Paused"
        self._set_status(f"Simulation {state}.")

    def _on_roche_slider(self, sender, app_data, user_data):
        if self.sim.set_roche(**{user_data: float(app_data)}):
            self._refresh_roche_plot()

    def _on_disk_change(self, **changes):
        if self.sim.set_disk(**changes):
            self._refresh_disk_plot()

    def _refresh_roche_plot(self):
        with self.sim.lock:
            grid = self.sim.roche.grid
            lagrange = self.sim.roche.lagrange
            x1, x2 = self.sim.roche.mass_positions()
        for tag in ("roche_heat", "roche_masses", "roche_lagrange"):
            if dpg.does_item_exist(tag):
                dpg.delete_item(tag)
        z_min, z_max = grid.z_range
        rows, cols = grid.shape
        dpg.add_heat_series(heat_rows(grid.z), rows, cols, scale_min=z_min, scale_max=z_max,
                            bounds_min=(float(grid.x[0]), float(grid.y[0])),
                            bounds_max=(float(grid.x[-1]), float(grid.y[-1])),
                            format="", parent="roche_y_axis", tag="roche_heat")
        points = list(lagrange.as_dict().values())
        dpg.add_scatter_series([p[0] for p in points], [p[1] for p in points], label="Lagrange points",
                               parent="roche_y_axis", tag="roche_lagrange")
        dpg.add_scatter_series([x1, x2], [0.0, 0.0], label="Point mass", parent="roche_y_axis",
                               tag="roche_masses")
        dpg.configure_item("roche_scale", min_scale=z_min, max_scale=z_max)
        dpg.fit_axis_data("roche_y_axis")

    def _refresh_disk_plot(self):
        with self.sim.lock:
            grid = self.sim.disk.grid
        if dpg.does_item_exist("disk_heat"):
            dpg.delete_item("disk_heat")
        values = grid.density.T
        rows, cols = values.shape
        dpg.add_heat_series(heat_rows(values), rows, cols, scale_min=0.0, scale_max=1.0,
                            bounds_min=(float(grid.x[0]), float(grid.z[0])),
                            bounds_max=(float(grid.x[-1]), float(grid.z[-1])),
                            format="", parent="disk_y_axis", tag="disk_heat")
        dpg.fit_axis_data("disk_y_axis")

    def _load_preset(self, display_name: str):
        fn = self._preset_map.get(display_name)
        if fn is None:
            self._set_error("No preset selected.")
            return
        if self.sim.apply_preset(fn):
            self._sync_widgets_from_sim()
            self._refresh_roche_plot()
            self._refresh_disk_plot()

    def _sync_widgets_from_sim(self):
        with self.sim.lock:
            params = self.sim.orbit.params
            frame = self.sim.orbit.frame
            lock = self.sim.spin.lock
            roche = self.sim.roche.parameters()
            disk = self.sim.disk
            t, mu, m = disk.temperature, disk.mu_mol, disk.mass
        dpg.set_value("orbit_q", params.q)
        dpg.set_value("orbit_e", params.e)
        dpg.set_value("orbit_omega", params.omega)
        dpg.set_value("orbit_frame", frame.label)
        dpg.set_value("spin_lock", lock.value.capitalize())
        for key in ("m1", "m2", "a", "omega"):
            dpg.set_value(f"roche_{key}", roche[key])
        dpg.set_value("disk_temperature", t)
        dpg.set_value("disk_mu", int(clamp(mu, *DISK_MU_BOUNDS)))
        dpg.set_value("disk_mass", int(clamp(m, *DISK_MASS_BOUNDS)))

    def _sync_ui_with_sim(self):
        """Mirror controller status messages into the status line (~10Hz)."""
        msg, is_error = self.sim.take_status()
        if msg:
            if is_error:
                self._set_error(msg)
            else:
                self._set_status(msg)
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    sim = SimulationController()
    renderer = PygameRenderer(sim)
    renderer.start()

    UI(sim, renderer)

    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
