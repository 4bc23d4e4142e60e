#!/usr/bin/env python3
"""
Satellite capture simulator entry point and viewport.

What this module does
- Parses the command line, sets up logging and builds a SatelliteSimulation from a preset.
- Either runs a fixed number of frames headless and prints the running totals, or opens a
  Pygame viewport that advances the simulation once per display frame and draws the
  resulting snapshot.

Frame model
- Single-threaded: each loop iteration is input -> SatelliteSimulation.step() -> draw.
  Drawing only reads the FrameSnapshot returned by step(), never the live world.

Controls
- Space: pause/play | R: new world (next seed) | Wheel: zoom | Right/Middle-drag or arrows: pan
- Esc or closing the window quits.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python orbit_capture.py --preset edge_entry --seed 7`
"""

import argparse
import logging
import sys
import time
from typing import Optional, Sequence

import pygame
from pygame import gfxdraw

from capture_core.camera import DomainView
from capture_core.config import ConfigurationError, SimulationConfig
from capture_core.constants import (
    BACKGROUND_COLOR,
    CAPTURED_COLOR,
    PARTICLE_COLOR,
    TRAIL_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from capture_core.data_models import CaptureState
from capture_core.logging_config import setup_logging
from capture_core.presets_loader import list_presets, load_preset
from capture_core.simulation import FrameSnapshot, SatelliteSimulation

logger = logging.getLogger("capture_core.viewer")


def _scale_color(color, fraction):
    return tuple(int(c * fraction) for c in color)


class PygameViewer:
    """
    Pygame loop: advances the simulation and draws bodies, trails, dying trails and satellites.
    Handles pause, reset, camera panning and zoom.
    """
    def __init__(self, sim: SatelliteSimulation):
        self.sim = sim
        self.view = DomainView()
        self.surface = None
        self.clock = None
        self.font = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.pan_speed_keys = 600  # pixels per second
        self.playing = True
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Orbit Capture")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.view.frame(self.sim.config.half_size)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 18)

        snapshot = self.sim.snapshot()
        last_time = time.perf_counter()
        while self.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events(real_dt)
            if self.playing:
                snapshot = self.sim.step()
            self.draw(snapshot)
            self.clock.tick(60)

        pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.view.drag(self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.view.drag(-self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.view.drag(0, self.pan_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.view.drag(0, -self.pan_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.playing = not self.playing
                elif event.key == pygame.K_r:
                    next_seed = None if self.sim.seed is None else self.sim.seed + 1
                    self.sim.reset(next_seed)

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.view.resize(event.w, event.h)
                self.view.frame(self.sim.config.half_size)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.view.zoom_at(pygame.mouse.get_pos(), factor)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (2, 3):
                self.dragging_background = True
                self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP and event.button in (2, 3):
                self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION and self.dragging_background:
                mouse = pygame.mouse.get_pos()
                dx = mouse[0] - self.drag_start_screen[0]
                dy = mouse[1] - self.drag_start_screen[1]
                self.view.drag(dx, dy)
                self.drag_start_screen = mouse

    def _polyline(self, surf, color, positions):
        pts = [p for p in (self.view.project(pos) for pos in positions) if p]
        if len(pts) > 1:
            pygame.draw.aalines(surf, color, False, pts)

    def draw(self, snapshot: FrameSnapshot):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        for body in snapshot.bodies:
            centre = self.view.project(body.position)
            if centre is None:
                continue
            vis_r = max(2, int(self.view.length(body.radius)))
            gfxdraw.filled_circle(surf, centre[0], centre[1], vis_r, body.color)
            gfxdraw.aacircle(surf, centre[0], centre[1], vis_r, body.color)

        for dying in snapshot.dying_trails:
            self._polyline(surf, _scale_color(TRAIL_COLOR, 0.8 * dying.fade_fraction), dying.positions)

        for particle in snapshot.particles:
            self._polyline(surf, _scale_color(TRAIL_COLOR, 0.6), particle.trail)

        for particle in snapshot.particles:
            pt = self.view.project(particle.position)
            if pt is None:
                continue
            color = CAPTURED_COLOR if particle.state is CaptureState.CAPTURED else PARTICLE_COLOR
            pygame.draw.circle(surf, color, pt, 1)

        stats = self.sim.stats
        hud = (
            f"Frame {snapshot.frame}  Satellites {len(snapshot.particles)}  "
            f"Captured {stats.captured}  Released {stats.released}  "
            f"Collided {stats.collided}  Ejected {stats.ejected}  "
            f"[{'Playing' if self.playing else 'Paused'}]"
        )
        surf.blit(self.font.render(hud, True, (200, 200, 200)), (10, 10))
        pygame.display.flip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Satellites captured into orbit around procedurally placed planets.")
    parser.add_argument("--preset", default=None, help="preset name from capture_core/presets (default: built-in defaults)")
    parser.add_argument("--list-presets", action="store_true", help="list available presets and exit")
    parser.add_argument("--seed", type=int, default=None, help="random seed for world generation and all draws")
    parser.add_argument("--frames", type=int, default=None, help="run this many frames without a window and print totals")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    return parser


def run_headless(sim: SatelliteSimulation, frames: int) -> None:
    started = time.perf_counter()
    snapshot = sim.step(frames)
    elapsed = time.perf_counter() - started
    stats = sim.stats
    print(f"frames={snapshot.frame} satellites={len(snapshot.particles)} dying_trails={len(snapshot.dying_trails)}")
    print(f"spawned={stats.spawned} evicted={stats.evicted} captured={stats.captured} "
          f"released={stats.released} collided={stats.collided} ejected={stats.ejected}")
    logger.info("Ran %d frames in %.2fs", frames, elapsed)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    if args.list_presets:
        for key, display in list_presets():
            print(f"{key}: {display}")
        return 0

    try:
        config = load_preset(args.preset) if args.preset else SimulationConfig()
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    sim = SatelliteSimulation(config, seed=args.seed)
    if args.frames is not None:
        run_headless(sim, args.frames)
    else:
        PygameViewer(sim).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
