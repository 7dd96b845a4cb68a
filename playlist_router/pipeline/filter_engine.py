from typing import List, Optional, Tuple

from playlist_router.core import ChildPlaylist, FilterRules, TrackInfo

from .filters import PREDICATES, Predicate


class FilterEngine:
    """
    All-must-pass evaluation of one child playlist's filter rules.

    Without rules the engine holds no predicates and matches every track.
    Otherwise it holds the eight predicates of PREDICATES, in that order, and
    stops at the first one that fails.
    """

    def __init__(self, filter_rules: Optional[FilterRules]):
        self.filter_rules = filter_rules
        self.predicates: List[Tuple[str, Predicate]] = (
            [] if filter_rules is None else list(PREDICATES)
        )

    @classmethod
    def for_child(cls, child: ChildPlaylist) -> "FilterEngine":
        return cls(child.filter_rules)

    def match_track(self, track: TrackInfo) -> bool:
        for _name, predicate in self.predicates:
            if not predicate(self.filter_rules, track):
                return False
        return True

    def first_failure(self, track: TrackInfo) -> Optional[str]:
        """Name of the first failing filter slot, or None when the track matches."""
        for name, predicate in self.predicates:
            if not predicate(self.filter_rules, track):
                return name
        return None
