"""
Deep-Link Codec

Share links carry the selection and an optional highlight query:

    ?ss=25544,43013&highlight=starlink

ss        comma-separated catalog numbers to select
highlight case-insensitive substring matched against object names

Unknown catalog numbers are skipped silently (they may belong to a catalog
that is not loaded in this session).
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from urllib.parse import parse_qs, urlencode

from orbit_tracker.catalog import Catalog
from orbit_tracker.config import HIGHLIGHT_PARAM, ID_SEPARATOR, SELECTION_PARAM
from orbit_tracker.engine import TrackingEngine
from orbit_tracker.errors import UnresolvedDeepLinkId
from orbit_tracker.models import TrackedObject
from orbit_tracker.selection import SelectionController

logger = logging.getLogger(__name__)


@dataclass
class DeepLinkState:
    selected_ids: List[int] = field(default_factory=list)
    highlight: Optional[str] = None


@dataclass
class DeepLinkOutcome:
    selected: List[TrackedObject] = field(default_factory=list)
    unresolved: List[UnresolvedDeepLinkId] = field(default_factory=list)
    highlight: Optional[str] = None
    highlight_count: int = 0


def decode_query(query: str) -> DeepLinkState:
    """
    Decode a query string (leading '?' optional).

    Non-numeric ids are ignored; repeated ids are kept once, in order.
    """
    params = parse_qs(query.lstrip("?"), keep_blank_values=False)
    state = DeepLinkState()

    for value in params.get(SELECTION_PARAM, []):
        for token in value.split(ID_SEPARATOR):
            token = token.strip()
            if not token.isdecimal():
                continue
            catalog_number = int(token)
            if catalog_number not in state.selected_ids:
                state.selected_ids.append(catalog_number)

    highlight = params.get(HIGHLIGHT_PARAM, [""])[0].strip()
    state.highlight = highlight or None
    return state


def encode_query(selected: Iterable[TrackedObject], highlight: Optional[str] = None) -> str:
    """Build the share-link query string ('' when there is nothing to share)."""
    params = {}
    ids = ID_SEPARATOR.join(str(obj.catalog_number) for obj in selected)
    if ids:
        params[SELECTION_PARAM] = ids
    if highlight:
        params[HIGHLIGHT_PARAM] = highlight
    if not params:
        return ""
    return "?" + urlencode(params, safe=ID_SEPARATOR)


def matching_objects(objects: Iterable[TrackedObject], text: str) -> List[TrackedObject]:
    """Objects whose name contains text, ignoring case."""
    needle = text.casefold()
    return [obj for obj in objects if needle in obj.name.casefold()]


def apply_deep_link(state: DeepLinkState, catalog: Catalog,
                    selection: SelectionController,
                    engine: TrackingEngine) -> DeepLinkOutcome:
    """Select and highlight what the link asks for in the loaded catalog."""
    outcome = DeepLinkOutcome(highlight=state.highlight)

    for catalog_number in state.selected_ids:
        obj = catalog.find_by_catalog_number(catalog_number)
        if obj is None:
            outcome.unresolved.append(UnresolvedDeepLinkId(catalog_number))
            logger.debug(f"Deep link: catalog number {catalog_number} not loaded")
            continue
        selection.select(obj)
        outcome.selected.append(obj)

    if state.highlight:
        matches = matching_objects(catalog.all(), state.highlight)
        for obj in matches:
            engine.highlight(obj)
        outcome.highlight_count = len(matches)

    return outcome
