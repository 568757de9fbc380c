"""
Tracker Configuration and Constants

This module contains the rendering constants, the runtime configuration model
and the per-catalog display options used throughout the tracker.

Constants:
    Render scale follows the mean Earth radius used by the globe model
    (6371 km, one render unit per kilometre).

Runtime configuration:
    TrackerConfig can be built from environment variables (TRACKER_* prefix)
    so a host can tune tick rate, trail resolution and network timeouts without
    code changes.

Sample TLE data:
    ISS elements used by the demo and the tests. The epoch is old on purpose:
    positions are only meaningful around 2019-09-02, which is the instant the
    demo and tests propagate to.
"""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

# Render constants
EARTH_RADIUS_KM: float = 6371.0  # Globe radius in render units (km)
DEFAULT_VISUAL_SIZE: float = 50.0  # Edge length of an object marker (km)
MINUTES_PER_DAY: float = 1440.0

# Engine defaults
TRAIL_STEP_MINUTES: float = 1.0  # One trail sample per minute
TICK_INTERVAL_SECONDS: float = 1.0  # Realtime refresh period
MAX_SEARCH_RESULTS: int = 100
FAILURE_HISTORY_LIMIT: int = 100  # Propagation failures kept per object
PICK_RADIUS_NDC: float = 0.02  # Headless picking tolerance (normalized device units)
VIEW_HALF_EXTENT_KM: float = 30000.0  # Headless orthographic view half-width

# Catalog sources
CELESTRAK_BASE: str = "https://celestrak.org"
FETCH_TIMEOUT_SECONDS: float = 30.0

# Deep-link query parameters
SELECTION_PARAM: str = "ss"
HIGHLIGHT_PARAM: str = "highlight"
ID_SEPARATOR: str = ","

# Sample ISS TLE (epoch 2019-09-02)
SAMPLE_ISS_TLE: Dict[str, Any] = {
    "name": "ISS (ZARYA)",
    "norad_id": 25544,
    "line1": "1 25544U 98067A   19245.18443877  .00012516  00000-0  22337-3 0  9998",
    "line2": "2 25544  51.6455 339.3385 0007918 357.2134  84.5192 15.50431138187200",
    "mean_motion": 15.50431138,
    "orbit_minutes": 96,
}


class DisplayOptions(BaseModel):
    """Per-object display configuration (not physics)."""

    color_hint: Optional[int] = None
    size_hint: float = DEFAULT_VISUAL_SIZE
    orbit_minutes: Optional[float] = Field(default=None, gt=0)
    pinned_trail: bool = False


class TrackerConfig(BaseModel):
    """Runtime configuration for the tracking engine and session."""

    earth_radius_km: float = EARTH_RADIUS_KM
    trail_step_minutes: float = Field(default=TRAIL_STEP_MINUTES, gt=0)
    tick_interval_seconds: float = Field(default=TICK_INTERVAL_SECONDS, gt=0)
    max_search_results: int = Field(default=MAX_SEARCH_RESULTS, gt=0)
    failure_history_limit: int = Field(default=FAILURE_HISTORY_LIMIT, gt=0)
    celestrak_base: str = CELESTRAK_BASE
    fetch_timeout_seconds: float = Field(default=FETCH_TIMEOUT_SECONDS, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "TrackerConfig":
        """Build a configuration from TRACKER_* environment variables."""
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        mapping = {
            "TRACKER_TRAIL_STEP_MINUTES": "trail_step_minutes",
            "TRACKER_TICK_INTERVAL": "tick_interval_seconds",
            "TRACKER_MAX_SEARCH_RESULTS": "max_search_results",
            "TRACKER_FAILURE_HISTORY": "failure_history_limit",
            "TRACKER_CELESTRAK_BASE": "celestrak_base",
            "TRACKER_FETCH_TIMEOUT": "fetch_timeout_seconds",
        }
        for variable, field_name in mapping.items():
            if variable in env:
                values[field_name] = env[variable]
        return cls(**values)
