"""Exception types for chain editing and execution."""

from __future__ import annotations


class ApiChainError(Exception):
    """Base error."""


class ChainBusyError(ApiChainError):
    """A run was requested while another run is in progress."""


class InvalidBodyError(ApiChainError, ValueError):
    """Request body text is not a JSON object."""


class ChainFileError(ApiChainError, ValueError):
    """Chain definition file could not be loaded."""


class StepError(ApiChainError):
    """A step failed. The message becomes the step's failure text."""


class NetworkError(StepError):
    pass


class HttpStatusError(StepError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error: status {status_code}")
        self.status_code = status_code


class DecodeError(StepError):
    pass


class StepConfigError(StepError):
    pass
