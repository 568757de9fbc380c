"""
Orbit Tracker Demonstration

This script runs the tracking engine against the in-memory headless renderer:
- Catalog loading (including a truncated record that gets dropped)
- Realtime ticks driving position refresh
- Picking an object with a simulated pointer press
- Orbit trail lifecycle and reference frame switching
- Deep-link selection and share links
- Optional plot of the selected orbit trail

Usage:
    python demo.py [--ticks N] [--earth-fixed] [--plot] [--remote GROUP] [--verbose]

Arguments:
    --ticks: Number of realtime ticks to run (default: 5)
    --earth-fixed: Start in the earth-fixed reference frame
    --plot: Save a 3D plot of the selected trails (requires matplotlib)
    --remote: Also load a CelesTrak group (network access required)
    --verbose: Enable debug logging

The sample elements have a 2019-09-02 epoch, so the simulation clock starts
there and ticks advance it one second at a time.
"""

import argparse
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import List

from logging_config import configure_logging, get_logger
from orbit_tracker.catalog_source import CATALOG_GROUPS, celestrak_url
from orbit_tracker.clock import SimulationClock
from orbit_tracker.config import SAMPLE_ISS_TLE, TrackerConfig
from orbit_tracker.models import ReferenceFrame, StationSeed, TrackedObject
from orbit_tracker.propagator import SGP4Propagator
from orbit_tracker.renderer import HeadlessRenderer
from orbit_tracker.session import TrackerSession

logger = get_logger(__name__)

SAMPLE_CATALOG = f"""
{SAMPLE_ISS_TLE['name']}
{SAMPLE_ISS_TLE['line1']}
{SAMPLE_ISS_TLE['line2']}
GPS BIIR-2  (PRN 13)
1 24876U 97035A   19245.47522263 -.00000027  00000-0  00000+0 0  9993
2 24876  55.4587 176.3817 0043937  95.0836 265.4452  2.00563150162173
TRUNCATED SAT
1 99999U 19999A   19245.00000000  .00000000  00000-0  00000-0 0  9990
"""

SAMPLE_EPOCH = datetime(2019, 9, 2, 4, 30, tzinfo=timezone.utc)


class SteppedWallClock:
    """Wall clock replacement that starts at the sample epoch."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        self.current += self.step
        return self.current


def pin_iss(seed: StationSeed) -> bool:
    """Keep everything, and show the ISS orbit continuously."""
    if seed.name == SAMPLE_ISS_TLE["name"]:
        seed.options.orbit_minutes = SAMPLE_ISS_TLE["orbit_minutes"]
    return True


def pointer_for(renderer: HeadlessRenderer, obj: TrackedObject, width: int, height: int):
    """Pixel coordinates of an object's marker."""
    ndc_x, ndc_y, _depth = renderer.project(obj.visual)
    return (ndc_x + 1) / 2 * width, (1 - ndc_y) / 2 * height


def plot_trails(objects: List[TrackedObject], output_file: str = "orbit_trails.png") -> None:
    """Save a 3D plot of the trails of objects."""
    import matplotlib.pyplot as plt

    fig = plt.figure(figsize=(10, 10))
    ax = fig.add_subplot(111, projection="3d")
    for obj in objects:
        if obj.trail is None:
            continue
        xs, ys, zs = zip(*obj.trail.points)
        ax.plot(xs, ys, zs, label=obj.name, linewidth=1.5)

    ax.set_xlabel("X (km)")
    ax.set_ylabel("Y (km, up)")
    ax.set_zlabel("Z (km)")
    ax.set_title("Orbit Trails")
    ax.legend(loc="upper left")
    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches="tight")
    logger.info(f"Saved trail plot to {output_file}")
    plt.close()


async def run(args: argparse.Namespace) -> None:
    config = TrackerConfig.from_env()
    clock = SimulationClock(start=SAMPLE_EPOCH, wall_clock=SteppedWallClock(SAMPLE_EPOCH))
    renderer = HeadlessRenderer.from_config(config)
    session = TrackerSession(renderer, SGP4Propagator(), config, clock)

    # Catalog
    loaded = session.engine.load_catalog(SAMPLE_CATALOG, color_hint=0xFFFF00,
                                         filter_predicate=pin_iss)
    logger.info(f"Loaded {len(loaded)} objects, dropped {len(session.engine.parser.issues)}")
    for issue in session.engine.parser.issues:
        logger.info(f"  dropped: {issue}")

    if args.remote:
        result = await session.engine.load_remote_catalog(
            celestrak_url(args.remote, config.celestrak_base), color_hint=0xFFFFFF
        )
        if result.ok:
            logger.info(f"Loaded {len(result.objects)} objects from {args.remote}")
        else:
            logger.warning(f"Remote load failed: {result.error}")

    if args.earth_fixed:
        session.engine.set_reference_frame(ReferenceFrame.EARTH_FIXED)

    # Realtime ticks
    for _ in range(args.ticks):
        report = session.tick()
        frames = renderer.render()
        logger.info(f"t={report.instant.isoformat()} updated={report.updated} "
                    f"skipped={len(report.skipped)} frames={frames}")

    # Picking
    width, height = 1280, 800
    gps = session.engine.catalog.find_by_catalog_number(24876)
    if gps is not None and gps.position is not None:
        x, y = pointer_for(renderer, gps, width, height)
        picked = session.on_pointer_down(x, y, width, height)
        logger.info(f"Pointer at ({x:.0f}, {y:.0f}) picked: {picked.name if picked else 'nothing'}")
    logger.info(f"Pointer at the corner picked: {session.on_pointer_down(0, 0, width, height)}")

    # Frame switch keeps trails and positions in step
    other = (ReferenceFrame.INERTIAL if session.engine.frame is ReferenceFrame.EARTH_FIXED
             else ReferenceFrame.EARTH_FIXED)
    session.engine.set_reference_frame(other)
    logger.info(f"Switched to {other.value}: {len(renderer.trails)} trails live")

    # Deep links
    outcome = session.apply_deep_link("?ss=25544,99999&highlight=gps")
    logger.info(f"Deep link selected {[o.name for o in outcome.selected]}, "
                f"highlighted {outcome.highlight_count}")
    logger.info(f"Share link: {session.share_link()}")

    # Scrub one hour ahead
    session.scrub(SAMPLE_EPOCH + timedelta(hours=1))
    summary = session.summary()
    logger.info(f"Focused: {summary.focused_name}; total objects: {summary.total_objects}; "
                f"selected: {summary.selected_count}")

    if args.plot:
        plot_trails(list(session.selection.members))

    await session.dispose()
    logger.info(f"Disposed: {len(renderer.visuals)} visuals, {len(renderer.trails)} trails left")


def main() -> None:
    """Main demonstration entry point."""
    parser = argparse.ArgumentParser(description="Orbit Tracker Demonstration")
    parser.add_argument("--ticks", type=int, default=5, help="Number of realtime ticks")
    parser.add_argument("--earth-fixed", action="store_true",
                        help="Start in the earth-fixed reference frame")
    parser.add_argument("--plot", action="store_true", help="Save a plot of selected trails")
    parser.add_argument("--remote", choices=CATALOG_GROUPS, help="Also load a CelesTrak group")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    # Configure logging
    configure_logging(level=logging.DEBUG if args.verbose else None)

    logger.info("Orbit Tracker Demonstration")
    logger.info("=" * 60)
    asyncio.run(run(args))
    logger.info("=" * 60)
    logger.info("Demonstration complete")


if __name__ == "__main__":
    main()
