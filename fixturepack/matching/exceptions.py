"""Request matching exceptions."""


class RequestMatchError(Exception):
    """A request could not be compared, e.g. its body is not JSON."""
