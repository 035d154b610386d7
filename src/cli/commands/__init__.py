"""CLI command modules."""

from .ers import ers
from .init import init
from .journal import journal
from .mood import mood
from .serve import serve

__all__ = ["journal", "mood", "ers", "init", "serve"]
