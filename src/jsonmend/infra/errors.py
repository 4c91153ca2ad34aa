"""Typed failures raised by the repairer.

Every failure is terminal: the first one aborts the repair and no partial
output is returned.
"""

from typing import Optional


class RepairError(ValueError):
    """Base class for all repair failures."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)


class UnexpectedEndOfInput(RepairError):
    """A value was required but the input was exhausted."""

    def __init__(self, position: int, context: str = "value") -> None:
        super().__init__(f"Unexpected end of input while parsing {context}", position)


class UnexpectedCharacter(RepairError):
    """The next character cannot start any recognized production."""

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        super().__init__(f"Unexpected character {char!r}", position)


class InvalidNumber(RepairError):
    """A numeric literal violates the JSON number grammar."""

    def __init__(self, literal: str, position: int) -> None:
        self.literal = literal
        super().__init__(f"Invalid number {literal!r}", position)


class ExpectedToken(RepairError):
    """A required token was missing and no recovery rule applies."""

    def __init__(self, expected: str, position: int, found: Optional[str] = None) -> None:
        self.expected = expected
        self.found = found
        if found is None:
            message = f"Expected {expected!r} but reached end of input"
        else:
            message = f"Expected {expected!r} but found {found!r}"
        super().__init__(message, position)


class InvalidExtensionType(RepairError):
    """An extension-type keyword (ObjectId, ISODate, ...) was not followed by '('."""

    def __init__(self, name: str, position: int) -> None:
        self.name = name
        super().__init__(f"Invalid {name} constructor, expected '('", position)


class MaxDepthExceeded(RepairError):
    """Nesting went deeper than the configured limit."""

    def __init__(self, max_depth: int, position: Optional[int] = None) -> None:
        self.max_depth = max_depth
        super().__init__(f"Nesting deeper than {max_depth} levels", position)
