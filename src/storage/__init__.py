"""Storage collaborator for the wellness engine."""

from .store import WellnessStore

__all__ = ["WellnessStore"]
