"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
"""


class ProgressionDataError(Exception):
    """Error reading or writing progression data.

    Raised by repository implementations when the backing store fails
    (network errors, query errors, constraint violations). The pure
    analytics pipeline never raises this; only data access does.
    """

    pass


class DatabaseNotConfiguredError(Exception):
    """Supabase credentials are missing from settings."""

    pass
