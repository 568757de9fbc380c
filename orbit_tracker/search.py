"""Name search over tracked objects."""

import re
from typing import Iterable, List

from orbit_tracker.config import MAX_SEARCH_RESULTS
from orbit_tracker.models import TrackedObject


def search_by_name(objects: Iterable[TrackedObject], text: str,
                   limit: int = MAX_SEARCH_RESULTS) -> List[TrackedObject]:
    """
    Objects whose name matches text as a case-insensitive pattern.

    Text that is not a valid regular expression is matched literally.
    """
    if not text:
        return []
    try:
        pattern = re.compile(text, re.IGNORECASE)
    except re.error:
        pattern = re.compile(re.escape(text), re.IGNORECASE)

    results = []
    for obj in objects:
        if pattern.search(obj.name):
            results.append(obj)
            if len(results) >= limit:
                break
    return results
