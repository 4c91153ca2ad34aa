"""Repair malformed JSON from LLM responses, logs and hand-written config.

Single-pass recursive-descent parser over a superset of JSON that writes
strict JSON as it goes. Handled deviations:

    - markdown code fences and JSONP ``callback(...)`` wrappers
    - ``//`` and ``/* */`` comments
    - single-quoted strings, unquoted keys and bare-word values
    - trailing commas, missing commas, ``...`` placeholders in arrays
    - ``"a" + "b"`` string concatenation
    - Python ``True``/``False``/``None``
    - MongoDB ``ObjectId(...)``, ``ISODate(...)``, ``NumberLong(...)``,
      ``NumberInt(...)`` wrappers (only the argument survives)
    - truncated input: open strings and containers are closed and a
      missing value becomes ``null``

Usage:

    from jsonmend import repair_json

    data = json.loads(repair_json("{name: 'John', tags: ['a', 'b',]"))
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from loguru import logger

from jsonmend.infra.errors import (
    ExpectedToken,
    InvalidExtensionType,
    InvalidNumber,
    MaxDepthExceeded,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
)
from jsonmend.infra.scanner import DIGITS, Scanner
from jsonmend.utils.config import settings


CODE_FENCE = "```"
ELLIPSIS = "..."

# Lowercase literals are dispatched on their first character
_JSON_LITERALS = {"n": "null", "t": "true", "f": "false"}

# Python constants, matched case-sensitively as whole words
_PYTHON_CONSTANTS = {"None": "null", "True": "true", "False": "false"}

# MongoDB shell constructors whose single argument is kept
EXTENSION_TYPES = ("NumberLong", "NumberInt", "ISODate", "ObjectId")

# Characters that may follow a backslash in a JSON string (``u`` checked separately)
_JSON_ESCAPES = frozenset('"\\/bfnrt')
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_CONTROL_ESCAPES = {"\b": "\\b", "\f": "\\f", "\n": "\\n", "\r": "\\r", "\t": "\\t"}

# A code-fence language tag stops at anything that can only start a value
_FENCE_VALUE_STARTS = frozenset('{["-0123456789')
_FENCE_SPACED_STARTS = frozenset("'tfn")

_UNQUOTED_VALUE_STOPS = frozenset(",}]:")
_UNQUOTED_KEY_STOPS = frozenset(":/")


def _escape_char(ch: str) -> str:
    """Return ``ch`` as it must appear inside a JSON string."""
    if ch == '"' or ch == "\\":
        return "\\" + ch
    if ch < " ":
        return _CONTROL_ESCAPES.get(ch, f"\\u{ord(ch):04x}")
    return ch


def _quote_bare(token: str) -> str:
    """Wrap an unquoted token in double quotes."""
    return '"' + "".join(_escape_char(ch) for ch in token) + '"'


class Repairer(Scanner):
    """Parses one input text and accumulates the repaired JSON.

    An instance is single-use: create one per input and call ``repair()``.
    """

    def __init__(self, text: str, max_depth: Optional[int] = None) -> None:
        super().__init__(text)
        self.output: List[str] = []
        self.max_depth = settings.max_depth if max_depth is None else max_depth
        self._depth = 0

    # ------------------------------------------------------------------
    # Entry point and envelopes
    # ------------------------------------------------------------------

    def repair(self) -> str:
        """Run the parser and return the repaired JSON text.

        Raises:
            RepairError: on the first unrecoverable problem.
        """
        try:
            self._parse_document()
        except RecursionError as e:
            raise MaxDepthExceeded(self.max_depth, self.pos) from e

        self.skip_trivia()
        if not self.at_end():
            logger.debug(
                f"Ignoring {len(self.text) - self.pos} trailing character(s) at position {self.pos}"
            )
        return "".join(self.output)

    def _parse_document(self) -> None:
        self.skip_trivia()
        if self.startswith(CODE_FENCE):
            self._parse_code_fence()
        elif self._at_jsonp_wrapper():
            self._parse_jsonp_wrapper()
        else:
            self.parse_value()

    def _parse_code_fence(self) -> None:
        self.pos += len(CODE_FENCE)
        tag_start = self.pos

        # Skip the language tag; JSON may follow on the same line
        while not self.at_end() and self.peek() != "\n":
            ch = self.peek()
            if ch in _FENCE_VALUE_STARTS:
                break
            if (
                ch in _FENCE_SPACED_STARTS
                and self.pos > tag_start
                and self.text[self.pos - 1] in " \t"
            ):
                break
            self.pos += 1
        logger.debug(f"Stripping code fence (tag={self.text[tag_start:self.pos].strip()!r})")

        if self.peek() == "\n":
            self.pos += 1

        self.parse_value()
        self.skip_trivia()

        if self.startswith(CODE_FENCE):
            self.pos += len(CODE_FENCE)
        else:
            logger.debug("Code fence has no closing marker")

    def _at_jsonp_wrapper(self) -> bool:
        """Look ahead for ``identifier`` + optional whitespace + ``(``."""
        text = self.text
        i = self.pos
        if i >= len(text) or not text[i].isalpha():
            return False
        while i < len(text) and (text[i].isalpha() or text[i].isdecimal() or text[i] == "_"):
            i += 1
        while i < len(text) and text[i].isspace():
            i += 1
        return i < len(text) and text[i] == "("

    def _parse_jsonp_wrapper(self) -> None:
        start = self.pos
        while not self.at_end() and (
            self.peek().isalpha() or self.peek().isdecimal() or self.peek() == "_"
        ):
            self.pos += 1
        logger.debug(f"Stripping JSONP wrapper {self.text[start:self.pos]}(...)")

        self.skip_trivia()
        self.pos += 1  # '(' guaranteed by _at_jsonp_wrapper

        self.parse_value()
        self.skip_trivia()

        if self.peek() == ")":
            self.pos += 1
        else:
            logger.debug("JSONP wrapper has no closing parenthesis")

    # ------------------------------------------------------------------
    # Value dispatch
    # ------------------------------------------------------------------

    def parse_value(self) -> None:
        """Parse exactly one value at the cursor and emit its JSON form."""
        self.skip_trivia()
        if self.at_end():
            raise UnexpectedEndOfInput(self.pos)

        ch = self.peek()
        if ch == "{":
            self._parse_object()
        elif ch == "[":
            self._parse_array()
        elif ch == '"' or ch == "'":
            self._parse_string()
        elif ch in _JSON_LITERALS:
            self._parse_json_literal(_JSON_LITERALS[ch])
        elif ch in "NTFIO":
            self._parse_capitalized_word()
        elif ch == "-" or ch in DIGITS:
            self._parse_number()
        elif ch.isalpha() or ch == "_" or ch == "$":
            self._parse_unquoted_value()
        else:
            raise UnexpectedCharacter(ch, self.pos)

    def _parse_json_literal(self, literal: str) -> None:
        if self.peek_word(literal):
            self.pos += len(literal)
            self._emit(literal)
        else:
            self._parse_unquoted_value()

    def _parse_capitalized_word(self) -> None:
        """Extension-type constructors and Python constants, else a bare word."""
        for name in EXTENSION_TYPES:
            if self.peek_word(name):
                self._parse_extension_type(name)
                return

        for constant, literal in _PYTHON_CONSTANTS.items():
            if self.peek_word(constant):
                self.pos += len(constant)
                self._emit(literal)
                return

        self._parse_unquoted_value()

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self._depth >= self.max_depth:
            raise MaxDepthExceeded(self.max_depth, self.pos)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _emit(self, chunk: str) -> None:
        self.output.append(chunk)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _parse_object(self) -> None:
        with self._nested():
            self._emit("{")
            self.pos += 1
            self.skip_trivia()

            first = True
            while not self.at_end() and self.peek() != "}":
                if not first:
                    self._emit(",")
                first = False

                self._parse_key()
                self.skip_trivia()

                if self.at_end():
                    logger.debug("Input ended after object key, closing with null value")
                    self._emit(":null}")
                    return
                if self.peek() != ":":
                    raise ExpectedToken(":", self.pos, self.peek())
                self._emit(":")
                self.pos += 1
                self.skip_trivia()

                if self.at_end():
                    logger.debug("Input ended before object value, substituting null")
                    self._emit("null}")
                    return

                self.parse_value()
                self.skip_trivia()

                if self.peek() == ",":
                    self.pos += 1
                    self.skip_trivia()
                    if self.peek() == "}":
                        logger.debug(f"Dropping trailing comma in object at position {self.pos}")
                        break

            self._close_container("}")

    def _parse_array(self) -> None:
        with self._nested():
            self._emit("[")
            self.pos += 1
            self.skip_trivia()

            first = True
            while not self.at_end() and self.peek() != "]":
                if self.startswith(ELLIPSIS):
                    self._skip_ellipsis()
                    if self.peek() == ",":
                        self.pos += 1
                        self.skip_trivia()
                    if self.at_end() or self.peek() == "]":
                        break

                if not first:
                    self._emit(",")
                first = False

                self.parse_value()
                self.skip_trivia()

                if self.peek() == ",":
                    self.pos += 1
                    self.skip_trivia()
                    if self.peek() == "]":
                        logger.debug(f"Dropping trailing comma in array at position {self.pos}")
                        break
                    if self.startswith(ELLIPSIS):
                        self._skip_ellipsis()
                        if self.at_end() or self.peek() == "]":
                            break
                        if self.peek() == ",":
                            self.pos += 1
                            self.skip_trivia()

            self._close_container("]")

    def _skip_ellipsis(self) -> None:
        logger.debug(f"Skipping ellipsis in array at position {self.pos}")
        self.pos += len(ELLIPSIS)
        self.skip_trivia()

    def _close_container(self, closer: str) -> None:
        if self.at_end():
            logger.debug(f"Input ended inside container, closing with {closer!r}")
        else:
            self.pos += 1
        self._emit(closer)

    # ------------------------------------------------------------------
    # Strings and keys
    # ------------------------------------------------------------------

    def _parse_key(self) -> None:
        if self.peek() == '"' or self.peek() == "'":
            self._parse_string()
        else:
            self._parse_unquoted_key()

    def _parse_string(self) -> None:
        """Parse a quoted string, following ``+`` concatenations.

        Each segment ends at its own opening quote, so ``"a" + 'b'`` works.
        Output is always double-quoted.
        """
        quote = self.peek()
        self.pos += 1
        self._emit('"')

        while not self.at_end():
            ch = self.peek()
            if ch == quote:
                self.pos += 1
                next_quote = self._concatenated_quote()
                if next_quote is None:
                    self._emit('"')
                    return
                quote = next_quote
            elif ch == "\\":
                self._copy_escape()
            else:
                self._emit(_escape_char(ch))
                self.pos += 1

        logger.debug("Input ended inside string, closing it")
        self._emit('"')

    def _concatenated_quote(self) -> Optional[str]:
        """After a closing quote, look for ``+ "``. Restores the cursor on miss.

        Returns the opening quote of the next segment (already consumed).
        """
        saved = self.pos
        self.skip_trivia()
        if self.peek() == "+":
            self.pos += 1
            self.skip_trivia()
            ch = self.peek()
            if ch == '"' or ch == "'":
                self.pos += 1
                return ch
        self.pos = saved
        return None

    def _copy_escape(self) -> None:
        nxt = self.peek(1)
        if not nxt:
            # Lone backslash before end of input
            self.pos += 1
            return

        if nxt == "u":
            hex_digits = self.text[self.pos + 2:self.pos + 6]
            if len(hex_digits) == 4 and all(c in _HEX_DIGITS for c in hex_digits):
                self._emit("\\u" + hex_digits)
                self.pos += 6
                return
        elif nxt in _JSON_ESCAPES:
            self._emit("\\" + nxt)
            self.pos += 2
            return

        # Not a JSON escape (\', \-, \x, ...): keep the character only
        self._emit(_escape_char(nxt))
        self.pos += 2

    def _parse_unquoted_key(self) -> None:
        start = self.pos
        while not self.at_end():
            ch = self.peek()
            if ch in _UNQUOTED_KEY_STOPS or ch.isspace():
                break
            self.pos += 1
        self._emit(_quote_bare(self.text[start:self.pos]))

    def _parse_unquoted_value(self) -> None:
        start = self.pos
        while not self.at_end():
            ch = self.peek()
            if ch in _UNQUOTED_VALUE_STOPS or ch.isspace():
                break
            self.pos += 1
        self._emit(_quote_bare(self.text[start:self.pos]))

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _parse_number(self) -> None:
        start = self.pos

        if self.peek() == "-":
            self.pos += 1

        if self.peek() == "0":
            self.pos += 1
            if self.peek() in DIGITS:
                raise InvalidNumber(self.text[start:self.pos + 1], start)
        elif self.peek() in DIGITS:
            self._skip_digits()
        else:
            raise InvalidNumber(self.text[start:self.pos + 1], start)

        if self.peek() == ".":
            self.pos += 1
            if self.peek() not in DIGITS:
                raise InvalidNumber(self.text[start:self.pos + 1], start)
            self._skip_digits()

        if self.peek() in ("e", "E"):
            self.pos += 1
            if self.peek() in ("+", "-"):
                self.pos += 1
            if self.peek() not in DIGITS:
                raise InvalidNumber(self.text[start:self.pos + 1], start)
            self._skip_digits()

        self._emit(self.text[start:self.pos])

    def _skip_digits(self) -> None:
        while self.peek() in DIGITS:
            self.pos += 1

    def _parse_extension_type(self, name: str) -> None:
        """``ObjectId("abc")`` -> ``"abc"``; the wrapper name is discarded."""
        with self._nested():
            self.pos += len(name)
            self.skip_trivia()
            if self.peek() != "(":
                raise InvalidExtensionType(name, self.pos)
            self.pos += 1

            self.parse_value()
            self.skip_trivia()

            if self.at_end():
                raise ExpectedToken(")", self.pos)
            if self.peek() != ")":
                raise ExpectedToken(")", self.pos, self.peek())
            self.pos += 1


def repair_json(text: str, max_depth: Optional[int] = None) -> str:
    """Turn malformed or truncated JSON-like text into valid JSON.

    Args:
        text: Raw text, e.g. an LLM response that may contain JSON.
        max_depth: Nesting limit; defaults to ``settings.max_depth``.

    Returns:
        JSON text ready for ``json.loads()``.

    Raises:
        RepairError: If the text cannot be repaired.
    """
    return Repairer(text, max_depth=max_depth).repair()
