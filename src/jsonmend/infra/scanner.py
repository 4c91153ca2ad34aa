"""Cursor over an immutable input text.

Provides character classification and trivia skipping shared by the
repair grammar. Trivia is whitespace plus ``//`` line comments and
non-nested ``/* ... */`` block comments.
"""

DIGITS = frozenset("0123456789")

# Characters allowed after a leading letter in identifiers and keywords
_IDENTIFIER_EXTRA = "_$"


def is_identifier_char(ch: str) -> bool:
    """True for letters, decimal digits, ``_`` and ``$``."""
    return bool(ch) and (ch.isalnum() or ch in _IDENTIFIER_EXTRA)


class Scanner:
    """Owns the input text and the single mutable cursor."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        """Return the character at ``pos + offset``, or ``""`` past the end."""
        index = self.pos + offset
        if index < len(self.text):
            return self.text[index]
        return ""

    def startswith(self, token: str) -> bool:
        return self.text.startswith(token, self.pos)

    def peek_word(self, word: str) -> bool:
        """True if ``word`` sits at the cursor as a whole identifier.

        ``None`` matches in ``None,`` and ``None}`` but not in ``Nonesuch``.
        """
        if not self.text.startswith(word, self.pos):
            return False
        return not is_identifier_char(self.peek(len(word)))

    def skip_trivia(self) -> None:
        """Advance past whitespace and comments.

        An unterminated block comment swallows the rest of the input.
        """
        text = self.text
        length = len(text)
        while self.pos < length:
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif ch == "/" and self.pos + 1 < length and text[self.pos + 1] == "/":
                newline = text.find("\n", self.pos + 2)
                self.pos = length if newline == -1 else newline
            elif ch == "/" and self.pos + 1 < length and text[self.pos + 1] == "*":
                closer = text.find("*/", self.pos + 2)
                self.pos = length if closer == -1 else closer + 2
            else:
                break
