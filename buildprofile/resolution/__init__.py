"""Profile resolution.

Public Interface:
    - resolve: Resolve raw settings into a ResolvedProfile
    - merge_settings: Deep merge raw settings
    - substitute_framework_refs: Replace flutter.* references
"""

from .merge import merge_settings
from .merge import normalize_keys
from .merge import substitute_framework_refs
from .resolver import resolve

__all__ = [
    "resolve",
    "merge_settings",
    "normalize_keys",
    "substitute_framework_refs",
]
