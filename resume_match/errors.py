from __future__ import annotations


class ExternalCapabilityError(RuntimeError):
    """An extraction, generation or embedding call failed or timed out."""

    def __init__(self, message: str, *, code: str = "provider_error"):
        super().__init__(message)
        self.code = code


class ResponseValidationError(ExternalCapabilityError):
    """A provider answered, but the payload does not match the expected schema."""

    def __init__(self, message: str, *, code: str = "invalid_schema"):
        super().__init__(message, code=code)


class DimensionMismatch(ValueError):
    pass


class UnsupportedFormat(ValueError):
    def __init__(self, mime_type: str, original_name: str = ""):
        super().__init__(f"Unsupported document type '{mime_type}' ({original_name or 'upload'}).")
        self.mime_type = mime_type
        self.original_name = original_name


class ParseError(ValueError):
    pass
