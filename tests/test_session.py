"""
Unit Tests for the Tracker Session

Run with:
    python -m pytest tests/test_session.py -v
"""

import unittest
from datetime import timedelta

from orbit_tracker.clock import ClockMode, SimulationClock
from orbit_tracker.renderer import HeadlessRenderer
from orbit_tracker.session import TrackerSession
from tests.fakes import REFERENCE, CircularOrbitPropagator, make_catalog

CATALOG = make_catalog(
    ("FRONT SAT", 270),
    ("BACK SAT", 90),
    ("STARLINK-1", 44235),
    ("STARLINK-2", 44236),
)


class FixedWallClock:

    def __init__(self, instant):
        self.instant = instant

    def __call__(self):
        return self.instant


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.renderer = HeadlessRenderer()
        self.wall = FixedWallClock(REFERENCE)
        self.session = TrackerSession(self.renderer, CircularOrbitPropagator(),
                                      clock=SimulationClock(wall_clock=self.wall))
        self.session.engine.load_catalog(CATALOG)

    def obj(self, number):
        return self.session.engine.catalog.find_by_catalog_number(number)


class TestPointer(SessionTestCase):

    def test_press_toggles_selection_and_focus(self):
        front = self.session.on_pointer_down(500, 500, 1000, 1000)

        self.assertIs(front, self.obj(270))
        self.assertIn(front, self.session.selection)
        self.assertIs(self.session.focused, front)
        self.assertIsNotNone(front.trail)

        self.session.on_pointer_down(500, 500, 1000, 1000)
        self.assertNotIn(front, self.session.selection)
        self.assertIsNone(self.session.focused)
        self.assertIsNone(front.trail)

    def test_remove_object(self):
        front = self.session.on_pointer_down(500, 500, 1000, 1000)

        self.assertIs(self.session.remove_object(270), front)

        self.assertNotIn(front, self.session.selection)
        self.assertIsNone(self.session.focused)
        self.assertEqual(self.renderer.trails, [])
        self.assertEqual(len(self.renderer.visuals), 3)
        self.assertIsNone(self.session.on_pointer_down(500, 500, 1000, 1000))
        self.assertIsNone(self.session.remove_object(270))

    def test_press_on_empty_space(self):
        self.assertIsNone(self.session.on_pointer_down(0, 0, 1000, 1000))
        self.assertEqual(len(self.session.selection), 0)


class TestTime(SessionTestCase):

    def test_tick_moves_to_wall_clock(self):
        self.wall.instant = REFERENCE + timedelta(seconds=1)
        report = self.session.tick()
        self.assertEqual(report.instant, REFERENCE + timedelta(seconds=1))
        self.assertEqual(report.updated, 4)

    def test_scrub_rebuilds_trails_and_holds(self):
        self.session.selection.select(self.obj(270))
        old = self.obj(270).trail
        target = REFERENCE + timedelta(hours=1)

        report = self.session.scrub(target)

        self.assertEqual(report.instant, target)
        self.assertTrue(old.disposed)
        self.assertEqual(self.renderer.trails, [self.obj(270).trail])
        self.assertIs(self.session.clock.mode, ClockMode.SCRUBBED)

        self.wall.instant = REFERENCE + timedelta(seconds=5)
        self.assertEqual(self.session.tick().instant, target)

    def test_resume_realtime(self):
        self.session.scrub(REFERENCE + timedelta(hours=1))
        self.wall.instant = REFERENCE + timedelta(seconds=5)

        report = self.session.resume_realtime()

        self.assertEqual(report.instant, REFERENCE + timedelta(seconds=5))
        self.assertIs(self.session.clock.mode, ClockMode.REALTIME)


class TestLinksAndHighlight(SessionTestCase):

    def test_deep_link_selects_and_focuses(self):
        outcome = self.session.apply_deep_link("?ss=44235,99999,270&highlight=starlink")

        self.assertEqual([o.catalog_number for o in outcome.selected], [44235, 270])
        self.assertIs(self.session.focused, self.obj(270))
        summary = self.session.summary()
        self.assertEqual(summary.selected_count, 2)
        self.assertEqual(summary.highlight_query, "starlink")
        self.assertEqual(summary.highlight_count, 2)
        self.assertEqual(summary.focused_name, "FRONT SAT")

    def test_deep_link_highlight_replaces_previous(self):
        self.session.set_highlight("front")
        self.session.apply_deep_link("?highlight=starlink")
        self.assertFalse(self.obj(270).highlighted)
        self.assertTrue(self.obj(44235).highlighted)

    def test_share_link_round_trip(self):
        self.session.apply_deep_link("?ss=90,44236")
        self.session.set_highlight("sat")
        self.assertEqual(self.session.share_link(), "?ss=90,44236&highlight=sat")

    def test_share_link_empty(self):
        self.assertEqual(self.session.share_link(), "")

    def test_set_highlight(self):
        self.assertEqual(self.session.set_highlight("SAT"), 2)
        self.assertEqual(self.session.set_highlight("  "), 0)
        self.assertIsNone(self.session.highlight_query)
        self.assertFalse(any(o.highlighted for o in self.session.engine.catalog))

    def test_search(self):
        names = [o.name for o in self.session.search("starlink-\\d")]
        self.assertEqual(names, ["STARLINK-1", "STARLINK-2"])


class TestAsyncLifecycle(unittest.IsolatedAsyncioTestCase):

    async def test_realtime_and_dispose(self):
        renderer = HeadlessRenderer()
        session = TrackerSession(renderer, CircularOrbitPropagator())
        session.engine.load_catalog(CATALOG)
        session.selection.select(session.engine.catalog.find_by_catalog_number(270))

        session.start_realtime()
        self.assertTrue(session.ticker.running)
        await session.stop_realtime()
        self.assertFalse(session.ticker.running)

        await session.dispose()

        self.assertFalse(session.ticker.running)
        self.assertEqual(renderer.visuals, [])
        self.assertEqual(renderer.trails, [])
        self.assertEqual(len(session.selection), 0)
        self.assertIsNone(session.focused)


if __name__ == "__main__":
    unittest.main()
