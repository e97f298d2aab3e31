# support_dashboard/backend/app/errors.py


class StoreUnavailable(Exception):
    """The ticket store could not be reached or returned unusable data."""
