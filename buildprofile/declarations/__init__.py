"""Build declaration loading.

Public Interface:
    - load_declaration: Read and flatten a YAML declaration
    - read_declaration: Read a declaration document
    - flatten_declaration: Flatten a nested declaration into raw settings
"""

from .loader import flatten_declaration
from .loader import load_declaration
from .loader import read_declaration

__all__ = [
    "load_declaration",
    "read_declaration",
    "flatten_declaration",
]
