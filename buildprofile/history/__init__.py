"""Release history tracking."""

from .store import ReleaseHistory
from .store import ReleaseRecord

__all__ = [
    "ReleaseHistory",
    "ReleaseRecord",
]
