"""Error taxonomy for card requests.

Client errors (``MissingParameter``, ``UnknownRoute``) become plain-text
responses. Everything raised while talking to GitHub is rendered as an error
card by the handlers.
"""


class StatsCardError(Exception):
    status = 500


class MissingParameter(StatsCardError):
    status = 400

    def __init__(self, name: str):
        super().__init__(f"Missing {name} parameter")
        self.name = name


class UnknownRoute(StatsCardError):
    status = 404

    def __init__(self, path: str):
        super().__init__("Not Found")
        self.path = path


class UpstreamError(StatsCardError):
    """GitHub answered with a non-success status."""

    def __init__(self, message: str, upstream_status: int = 0):
        super().__init__(message)
        self.upstream_status = upstream_status


class UpstreamNotFound(UpstreamError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class UserNotFound(UpstreamNotFound):
    def __init__(self, username: str):
        super().__init__(f"User not found: {username}")
        self.username = username


class UpstreamTransportFailure(StatsCardError):
    """Network error or timeout while reaching GitHub."""
