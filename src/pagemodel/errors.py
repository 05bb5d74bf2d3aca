"""Exception types raised by the converter."""


class PageModelError(Exception):
    """Base class for conversion failures surfaced to the caller."""


class InputTooLarge(PageModelError):
    """Raised when the input document exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Input is {size} bytes, limit is {limit} bytes")


class DepthExceeded(PageModelError):
    """Raised when the document nests deeper than the configured limit."""

    def __init__(self, depth: int, limit: int):
        self.depth = depth
        self.limit = limit
        super().__init__(f"Document nesting depth {depth} exceeds limit {limit}")


class SelectorSyntaxError(Exception):
    """Raised when a CSS selector cannot be parsed.

    Never escapes the stylesheet parser: the offending rule is skipped.
    """

    def __init__(
        self, message: str, selector: str = "", column: int | None = None
    ):
        self.selector = selector
        self.column = column
        super().__init__(message)
