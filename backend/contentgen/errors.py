from typing import Any, Dict, List


class RequestValidationFailed(ValueError):
    """Inbound generation body did not match the request schema."""

    def __init__(self, details: List[Dict[str, Any]]):
        super().__init__("Invalid request data")
        self.details = details


class UpstreamError(RuntimeError):
    """The upstream completion service failed before streaming began."""


class InvalidTransition(RuntimeError):
    pass
