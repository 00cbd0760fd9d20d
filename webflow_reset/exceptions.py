"""
Error types raised while emptying a Webflow workspace.

- ValidationError: bad operator input, raised before any request is sent
- RateLimitError: HTTP 429, recovered by the bulk pipeline
- RemoteOperationError: everything else that went wrong remotely (fatal)
"""

from typing import Optional


class WebflowResetError(Exception):
    """Base class for all errors raised by webflow_reset"""


class ValidationError(WebflowResetError):
    """Malformed operator input (e.g. a collection ID of the wrong shape)"""


class RemoteOperationError(WebflowResetError):
    """A remote call failed or reported that it had no effect"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(RemoteOperationError):
    """Webflow rejected the call with HTTP 429"""

    def __init__(self, message: str = "Rate limit exceeded", status_code: int = 429):
        super().__init__(message, status_code=status_code)
