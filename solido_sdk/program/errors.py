"""Custom exceptions for the Solido program module."""

from typing import Iterable


class SolidoError(Exception):
    """Base exception for all Solido SDK errors."""

    pass


class InvalidSeedError(SolidoError):
    """Raised when PDA seeds are rejected before or during derivation."""

    def __init__(self, message: str):
        super().__init__(f"Invalid seed: {message}")


class DerivationExhaustedError(SolidoError):
    """Raised when no bump seed yields an off-curve address."""

    def __init__(self, program_id: str):
        self.program_id = program_id
        super().__init__(
            f"Unable to find a viable program address bump seed for program {program_id}"
        )


class FieldOverflowError(SolidoError):
    """Raised when a value does not fit its declared field width."""

    def __init__(self, field: str, value: int, max_value: int):
        self.field = field
        self.value = value
        self.max_value = max_value
        super().__init__(
            f"{field} value out of range: {value} (must be 0-{max_value})"
        )


class MalformedPayloadError(SolidoError):
    """Raised when instruction data cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(f"Malformed payload: {message}")


class MissingAccountError(SolidoError):
    """Raised when an instruction is missing required accounts."""

    def __init__(self, instruction: str, roles: Iterable[str]):
        self.instruction = instruction
        self.roles = list(roles)
        super().__init__(
            f"Missing accounts for {instruction}: {', '.join(self.roles)}"
        )


class InvalidFieldError(SolidoError):
    """Raised when instruction arguments are missing, unexpected or mistyped."""

    def __init__(self, message: str):
        super().__init__(f"Invalid field: {message}")


class UnsupportedInstructionError(SolidoError):
    """Raised when encoding an instruction kind with no known layout."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unsupported instruction: {kind!r}")


class ConfigError(SolidoError):
    """Raised when program addresses cannot be loaded from configuration."""

    def __init__(self, message: str):
        super().__init__(f"Invalid configuration: {message}")
