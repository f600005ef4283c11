"""Custom exceptions for fb2md."""


class Fb2mdError(Exception):
    """Base exception for fb2md operations."""


class ParseError(Fb2mdError):
    """Source document is not well-formed XML."""


class ConversionError(Fb2mdError):
    """Error during FB2 to Markdown conversion."""


class ImageDecodeError(ConversionError):
    """Embedded image payload is not valid base64."""
