"""
Variable namespace threaded through a simplification pass.
"""

import logging
from typing import Dict, Iterator, List, Optional


logger = logging.getLogger(__name__)


class Namespace:
    """
    Ordered mapping from variable name to its value segments.

    A name that was never assigned is absent, which is different from a
    name bound to an empty list. Assigning overwrites; nothing is ever
    unset.
    """

    def __init__(self, bindings: Optional[Dict[str, List[str]]] = None):
        self._bindings: Dict[str, List[str]] = {}
        if bindings:
            for name, segments in bindings.items():
                self.insert(name, segments)

    def lookup(self, name: str) -> Optional[List[str]]:
        """Return the segments bound to name, or None if unbound."""
        segments = self._bindings.get(name)
        if segments is None:
            return None
        return list(segments)

    def insert(self, name: str, segments: List[str]) -> 'Namespace':
        """Bind name to segments, replacing any earlier binding."""
        # Re-inserting moves the name to the end so ordering follows assignment order
        self._bindings.pop(name, None)
        self._bindings[name] = list(segments)
        logger.debug(f"Bound {name} -> {segments}")
        return self

    def copy(self) -> 'Namespace':
        clone = Namespace()
        clone._bindings = {name: list(segments) for name, segments in self._bindings.items()}
        return clone

    def names(self) -> List[str]:
        return list(self._bindings)

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(segments) for name, segments in self._bindings.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Namespace):
            return NotImplemented
        return self._bindings == other._bindings

    def __repr__(self) -> str:
        return f"Namespace({self._bindings!r})"
