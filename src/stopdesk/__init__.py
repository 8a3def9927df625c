"""Top-level package for the stop desk checker."""

from .desks import DeskDirectory, DeskRecord
from .errors import DatasetFormatError, DatasetLoadError
from .gazetteer import CommuneIndex, CommuneRecord
from .matcher import CommuneMatcher, MatchResult
from .normalization import normalize
from .session import LookupSession

__all__ = [
    "CommuneIndex",
    "CommuneMatcher",
    "CommuneRecord",
    "DatasetFormatError",
    "DatasetLoadError",
    "DeskDirectory",
    "DeskRecord",
    "LookupSession",
    "MatchResult",
    "normalize",
]
