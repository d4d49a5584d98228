"""Base exception for tracker errors."""


class TrackerError(Exception):
    """Root of every error the tracker raises on purpose.

    The interactive loop reports these and keeps running; anything else is
    a bug and is allowed to propagate.
    """
    pass
