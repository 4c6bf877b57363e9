"""Window host for the starfield and the orbital display."""
from __future__ import annotations

import argparse
import random
import time
from pathlib import Path
from typing import Sequence

import pygame
from pygame.locals import DOUBLEBUF, RESIZABLE

from orbit_canvas import __version__
from orbit_canvas.core.config import VIEWPORT_CFG, ViewportCfg
from orbit_canvas.core.logging_utils import RunLogger
from orbit_canvas.core.timekeeping import FrameHost, FrameTimer
from orbit_canvas.data.distributions import DEFAULT_REPORT, FleetReport, load_report
from orbit_canvas.render import CanvasComponent, HostViewport, OrbitalDisplay, ParticleField


def _set_display_mode_with_vsync(size: tuple[int, int], flags: int = 0) -> pygame.Surface:
    """Create the display surface with double buffering and vsync when available."""
    flags |= DOUBLEBUF
    try:
        return pygame.display.set_mode(size, flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode(size, flags)
    except pygame.error as err:
        try:
            return pygame.display.set_mode(size, flags)
        except pygame.error:
            raise err


def panel_layout(fraction: float):
    """Centred square panel covering ``fraction`` of the shorter window side."""

    def layout(size: tuple[float, float]) -> tuple[float, float, float, float]:
        width, height = size
        side = max(0.0, min(width, height) * fraction)
        return ((width - side) / 2.0, (height - side) / 2.0, side, side)

    return layout


def blit_component(screen: pygame.Surface, component: CanvasComponent, rect) -> None:
    canvas = component.surface
    if canvas is None or canvas.surface is None:
        return
    x, y, width, height = rect
    image = canvas.surface
    target = (max(1, int(round(width))), max(1, int(round(height))))
    if image.get_size() != target:
        image = pygame.transform.smoothscale(image, target)
    screen.blit(image, (int(round(x)), int(round(y))))


def reload_report(path: Path, current: FleetReport) -> FleetReport:
    """Re-read *path*, keeping *current* if the file is missing or invalid."""

    try:
        return load_report(path)
    except (OSError, ValueError) as exc:
        print(f"Could not reload {path}: {exc}; keeping the previous distribution.")
        return current


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render the drifting starfield and the rotating orbital display.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default window with the built-in distribution
  orbit-canvas

  # Feed a distribution file and record the run
  orbit-canvas --distribution fleet.json --log-dir data/runs

  # Render 300 frames and exit
  orbit-canvas --frames 300
        """,
    )
    parser.add_argument("--width", type=int, default=VIEWPORT_CFG.width, help="Window width")
    parser.add_argument("--height", type=int, default=VIEWPORT_CFG.height, help="Window height")
    parser.add_argument(
        "--pixel-ratio",
        type=float,
        default=VIEWPORT_CFG.pixel_ratio,
        help="Device pixels per CSS pixel for both canvases",
    )
    parser.add_argument("--particles", type=int, default=None, help="Starfield population")
    parser.add_argument("--fps", type=int, default=VIEWPORT_CFG.target_fps, help="Frame rate cap")
    parser.add_argument(
        "--frames", type=int, default=0, help="Quit after this many frames (0 runs until closed)"
    )
    parser.add_argument(
        "--distribution",
        type=Path,
        default=None,
        help="JSON file with 'total' and 'by_country'; press R to reload it",
    )
    parser.add_argument("--log-dir", type=Path, default=None, help="Record the run under this directory")
    parser.add_argument("--seed", type=int, default=None, help="Seed for particles and fleet")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, cfg: ViewportCfg = VIEWPORT_CFG) -> int:
    report: FleetReport = load_report(args.distribution) if args.distribution else DEFAULT_REPORT

    pygame.init()
    pygame.display.set_caption(cfg.title)
    screen = _set_display_mode_with_vsync((args.width, args.height), RESIZABLE)
    font_fps = pygame.font.SysFont("consolas", 14)

    logger = RunLogger(args.log_dir) if args.log_dir else None
    if logger is not None:
        logger.write_meta(
            {
                "version": __version__,
                "width": args.width,
                "height": args.height,
                "pixel_ratio": args.pixel_ratio,
                "fps": args.fps,
                "seed": args.seed,
                "distribution": str(args.distribution) if args.distribution else "default",
            }
        )

    rng = random.Random(args.seed)
    root = HostViewport(screen.get_size(), args.pixel_ratio)
    panel = root.child(panel_layout(cfg.panel_fraction))
    host = FrameHost()

    starfield = ParticleField(
        population=args.particles,
        rng=random.Random(rng.random()),
        logger=logger,
    )
    orbital = OrbitalDisplay(rng=random.Random(rng.random()), logger=logger)
    orbital.regenerate_fleet(report.by_country, report.total)

    clock = pygame.time.Clock()
    timer = FrameTimer()
    frames = 0
    running = True
    try:
        starfield.mount(root, host)
        orbital.mount(panel, host)
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and args.distribution:
                        report = reload_report(args.distribution, report)
                else:
                    root.handle_event(event)
            if not running:
                break

            # no-op unless the per-country counts changed
            orbital.regenerate_fleet(report.by_country, report.total)

            host.dispatch(time.perf_counter())

            screen.fill((0, 0, 0))
            blit_component(screen, starfield, root.rect)
            blit_component(screen, orbital, panel.rect)

            fps_value = clock.get_fps()
            fps_text = font_fps.render(f"FPS: {fps_value:.1f}", True, cfg.fps_text_color)
            fps_text.set_alpha(cfg.fps_text_alpha)
            width, height = screen.get_size()
            screen.blit(fps_text, fps_text.get_rect(bottomright=(width - 16, height - 16)))

            pygame.display.flip()
            clock.tick(args.fps)
            dt = timer.tick()
            frames += 1

            if logger is not None:
                logger.log_ts(
                    [
                        frames,
                        logger.elapsed(),
                        dt,
                        fps_value,
                        orbital.angle,
                        len(orbital.fleet),
                        len(starfield.particles),
                        root.size[0],
                        root.size[1],
                    ]
                )
            if args.frames and frames >= args.frames:
                running = False
    finally:
        orbital.teardown()
        starfield.teardown()
        panel.detach()
        if logger is not None:
            logger.close()
        pygame.quit()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        return run(args)
    except KeyboardInterrupt:
        pygame.quit()
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
