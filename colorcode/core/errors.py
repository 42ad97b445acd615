"""
Error types for PyColorCode
Every parse failure is a FormatError so callers can catch one type
"""


class FormatError(ValueError):
    """Text could not be parsed as a color or a GameShark code"""


class EmptyInputError(FormatError):
    """Decode was given empty or whitespace-only text"""

    def __init__(self, message='No GameShark code to import'):
        super().__init__(message)


class MalformedLineError(FormatError):
    """A line is not two fixed-width hex tokens"""

    def __init__(self, line_number, line):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Malformed GameShark line {line_number}: {line!r}")


class HexColorError(FormatError):
    """Hex color text is not exactly six hex digits"""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Invalid hex color: {text!r} (must be #RRGGBB)")
