"""Error taxonomy shared by the analysis, mood and ERS engines."""


class PacefulError(Exception):
    """Base error for the wellness engine."""


class InvalidInputError(PacefulError, ValueError):
    """Raised when a call argument violates the engine's contract."""


class StorageUnavailableError(PacefulError):
    """Raised when the storage collaborator cannot serve a read or write."""
