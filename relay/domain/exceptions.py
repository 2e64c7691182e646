from __future__ import annotations


class RelayInputError(Exception):
    """Raised when an inbound relay request is rejected before reaching the upstream."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidJSONError(RelayInputError):
    def __init__(self) -> None:
        super().__init__("Invalid JSON")


class MissingInputError(RelayInputError):
    def __init__(self) -> None:
        super().__init__("Missing input")
