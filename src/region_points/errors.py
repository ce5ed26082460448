class LineStateError(RuntimeError):
    """Raised when a `LineReader` is asked for line data it does not hold."""


class BedParseError(ValueError):
    """A malformed row, annotated with the 1-based line it was found on.

    **Attributes:**

    - `line_number`: 1-based line number of the offending row.
    """

    def __init__(self, message: str, line_number: int):
        super().__init__(message)
        self.line_number = line_number
