"""
TLE Parser Module

Turns catalog text in the usual three-line layout (name line followed by the
two element lines) into an ordered list of station seeds.

Structural problems are handled in two tiers:
- An element line that appears before any name line makes the whole text
  unusable and raises MalformedCatalog.
- A named record that is missing an element line, or whose element lines do
  not identify a catalog number, is dropped and reported as a TruncatedRecord.
"""

import logging
from typing import List, Optional

from orbit_tracker.config import DisplayOptions
from orbit_tracker.errors import MalformedCatalog, TruncatedRecord
from orbit_tracker.models import StationSeed, TleRecord
from orbit_tracker.tle_format import checksum_matches, parse_catalog_number

logger = logging.getLogger(__name__)


class _PendingRecord:
    __slots__ = ("name", "line1", "line2", "line_number")

    def __init__(self, name: str, line_number: int):
        self.name = name
        self.line1: Optional[str] = None
        self.line2: Optional[str] = None
        self.line_number = line_number


class TLEParser:
    """
    Parser for TLE catalog text.

    Dropped records from the last call are available in ``issues``.
    """

    def __init__(self):
        self.issues: List[TruncatedRecord] = []

    def parse_catalog(self, text: str,
                      defaults: Optional[DisplayOptions] = None) -> List[StationSeed]:
        """
        Parse catalog text into station seeds.

        Args:
            text: Raw catalog text
            defaults: Display options copied onto every record

        Returns:
            Seeds in input order

        Raises:
            MalformedCatalog: an element line precedes every name line
        """
        self.issues = []
        pending: List[_PendingRecord] = []
        current: Optional[_PendingRecord] = None

        for number, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue

            if line[0] in ("1", "2"):
                if current is None:
                    raise MalformedCatalog(
                        f"element line {line[0]} found before any name line", number
                    )
                if line[0] == "1":
                    current.line1 = line
                else:
                    current.line2 = line
            else:
                current = _PendingRecord(line, number)
                pending.append(current)

        seeds = []
        for item in pending:
            record = self._complete(item)
            if record is None:
                continue
            options = defaults.model_copy() if defaults is not None else DisplayOptions()
            seeds.append(StationSeed(record, options))

        if self.issues:
            logger.warning(f"Dropped {len(self.issues)} incomplete catalog records")
        return seeds

    def _complete(self, item: _PendingRecord) -> Optional[TleRecord]:
        if item.line1 is None or item.line2 is None:
            missing = "line 1" if item.line1 is None else "line 2"
            self._drop(item, f"missing {missing}")
            return None

        first = parse_catalog_number(item.line1)
        second = parse_catalog_number(item.line2)
        if first is None:
            self._drop(item, "unreadable catalog number")
            return None
        if first != second:
            self._drop(item, f"catalog numbers differ ({first} / {second})")
            return None

        for line in (item.line1, item.line2):
            if not checksum_matches(line):
                logger.debug(f"Checksum mismatch for {item.name}: {line}")

        return TleRecord(item.name, item.line1, item.line2)

    def _drop(self, item: _PendingRecord, reason: str) -> None:
        issue = TruncatedRecord(item.name, reason)
        self.issues.append(issue)
        logger.warning(f"Skipping record at line {item.line_number}: {issue}")


def parse_catalog(text: str, defaults: Optional[DisplayOptions] = None) -> List[StationSeed]:
    """Parse catalog text with a throwaway parser."""
    return TLEParser().parse_catalog(text, defaults)
