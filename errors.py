class IdentifyError(Exception):
    """Base class for failures surfaced by the identify flow."""

    status_code = 500


class InvalidRequest(IdentifyError):
    """Neither email nor phoneNumber was supplied."""

    status_code = 400


class StoreFailure(IdentifyError):
    """The contact store failed; the request was rolled back."""

    status_code = 500
