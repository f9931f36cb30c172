"""Exceptions raised at the boundary between the console and the gateway.

Data problems inside a metrics dump never raise: malformed lines are
skipped, missing metrics read as 0 and rates with a zero denominator are 0.
"""


class GatewayLensError(Exception):
    """Base class for gatewaylens errors."""


class GatewayError(GatewayLensError):
    """The gateway answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status returned by the gateway.
        body: Response body returned by the gateway.
    """

    def __init__(self, body: str, status_code: int) -> None:
        super().__init__(f"Gateway error: {body}")
        self.body = body
        self.status_code = status_code


class GatewayUnavailableError(GatewayLensError):
    """The gateway could not be reached (connection error, timeout)."""


class ConfigurationError(GatewayLensError):
    """A required setting is missing, such as the admin token."""
