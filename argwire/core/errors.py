class ArgwireError(Exception):
    """Base class for every error raised by argwire."""


class MissingRequiredFieldError(ArgwireError, ValueError):
    """
    A required field was absent when a value was validated or built.
    The value is never produced.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"`{field}` cannot be null.")
        self.field = field


class ConflictingRepresentationError(ArgwireError, ValueError):
    """
    Both the raw bytes and the structured form of the same field were
    supplied to a builder. Raised by the offending setter.
    """

    def __init__(self, raw_field: str, structured_field: str) -> None:
        super().__init__(f"Cannot set both `{raw_field}` and `{structured_field}`.")
        self.raw_field = raw_field
        self.structured_field = structured_field


class UnsupportedSchemeError(ArgwireError, LookupError):
    """No codec is registered for the requested argument scheme."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"No codec registered for arg scheme '{scheme}'")
        self.scheme = scheme


class CodecError(ArgwireError, ValueError):
    """
    An encode or decode call failed: malformed bytes, a type mismatch,
    or an internal codec failure. Never retried.
    """

    def __init__(self, scheme: str, operation: str, reason: str) -> None:
        super().__init__(f"[{scheme}] {operation} failed: {reason}")
        self.scheme = scheme
        self.operation = operation
