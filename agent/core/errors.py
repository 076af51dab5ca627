from __future__ import annotations


class DispatchError(Exception):
    """Base class for request-terminal dispatch failures.

    ``detail`` is the fixed, user-visible message returned to the caller.
    """

    detail: str = "Internal server error"

    def __init__(self, reason: str = "") -> None:
        super().__init__(reason or self.detail)
        self.reason = reason


class MalformedInput(DispatchError):
    detail = "Invalid messages format"


class NoUserTurn(DispatchError):
    detail = "No user message found"


class TemplateError(RuntimeError):
    pass
