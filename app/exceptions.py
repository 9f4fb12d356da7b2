"""Exception classes for the transaction dashboard."""


class DashboardError(Exception):
    """Base exception for the dashboard backend."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameter(DashboardError):
    """A query-string parameter could not be accepted (e.g. unknown month name)."""

    status_code = 400


class StorageFailure(DashboardError):
    """The datastore was unreachable or a query failed."""
    pass


class UpstreamFailure(DashboardError):
    """One of the reads behind the combined view failed."""
    pass


class SeedFailure(DashboardError):
    """Fetching the remote feed or replacing the stored records failed."""
    pass
