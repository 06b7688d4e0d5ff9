class ProtectedPagesError(Exception):
    """Base error for the protected pages app."""


class CollaboratorUnavailable(ProtectedPagesError):
    """The records store or alias resolver could not be read."""
