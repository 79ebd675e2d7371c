"""Exceptions raised while talking to the completion service."""

from enum import Enum
from typing import Optional

import openai


class FailureKind(str, Enum):
    """Why a completion request failed."""

    NETWORK = "network"
    STATUS = "status"
    MALFORMED = "malformed"
    CREDENTIAL = "credential"


class CompletionError(RuntimeError):
    """A completion request failed."""

    def __init__(self, message: str, kind: FailureKind, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class MissingCredentialError(CompletionError):
    """No API key was configured."""

    def __init__(self, message: str = "No API key configured. Set OPENAI_API_KEY or pass --api-key."):
        super().__init__(message, FailureKind.CREDENTIAL)


class MalformedResponseError(CompletionError):
    """The service answered but the body had no usable completion."""

    def __init__(self, message: str):
        super().__init__(message, FailureKind.MALFORMED)


def classify_exception(exc: BaseException) -> FailureKind:
    """
    Map an exception raised during a completion call to a failure kind.

    Args:
        exc: Exception raised by the client or while reading the response

    Returns:
        FailureKind for diagnostics
    """
    if isinstance(exc, CompletionError):
        return exc.kind
    # APITimeoutError subclasses APIConnectionError
    if isinstance(exc, openai.APIConnectionError):
        return FailureKind.NETWORK
    if isinstance(exc, openai.APIStatusError):
        return FailureKind.STATUS
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return FailureKind.NETWORK
    return FailureKind.MALFORMED
