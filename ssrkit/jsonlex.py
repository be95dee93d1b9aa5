"""Low-level scanning of JSON text: whitespace, comments, strings, numbers, literals."""

from __future__ import annotations

from dataclasses import dataclass

from .jsonvalue import JsonType, JsonValue

_BOM_TEXT = "\ufeff"
_BOM_BYTES = b"\xef\xbb\xbf"

_WHITESPACE = " \t\r\n"
_DIGITS = "0123456789"
_HEX_DIGITS = {c: int(c, 16) for c in "0123456789abcdefABCDEF"}

_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_LITERALS = {
    "t": ("true", JsonType.BOOLEAN, True),
    "f": ("false", JsonType.BOOLEAN, False),
    "n": ("null", JsonType.NULL, None),
}

_INT64_MASK = (1 << 64) - 1
_INT64_SIGN = 1 << 63


def _wrap64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value & _INT64_SIGN else value


def _pow10(exponent: int) -> float:
    try:
        return 10.0 ** exponent
    except OverflowError:
        return float("inf")


class JsonParseError(ValueError):
    """Raised when JSON text cannot be parsed."""

    def __init__(self, message: str = "Unknown error",
                 line: int | None = None, column: int | None = None) -> None:
        super().__init__(message or "Unknown error")
        self.line = line
        self.column = column


@dataclass
class JsonSettings:
    """Parser options.

    ``max_memory`` bounds the estimated memory of the parsed values
    (0 means no limit); ``enable_comments`` allows ``//`` and ``/* */``.
    """

    max_memory: int = 0
    enable_comments: bool = False


def strip_bom(text: str | bytes) -> str | bytes:
    """Remove a leading UTF-8 byte order mark, if present."""
    if isinstance(text, (bytes, bytearray)):
        return bytes(text[3:]) if text.startswith(_BOM_BYTES) else bytes(text)
    return text[1:] if text.startswith(_BOM_TEXT) else text


def hex_value(char: str) -> int | None:
    """Value of a single hexadecimal digit, or None if it is not one."""
    return _HEX_DIGITS.get(char)


class Scanner:
    """Cursor over JSON text that reads one token at a time.

    ``pos`` is the index of the next unread character; ``line`` and
    ``line_begin`` track the position used in error messages.
    """

    def __init__(self, text: str | bytes, settings: JsonSettings | None = None) -> None:
        text = strip_bom(text)
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="surrogateescape")
        self.text: str = text
        self.settings = settings if settings is not None else JsonSettings()
        self.pos = 0
        self.line = 1
        self.line_begin = 0

    def _char(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _column(self) -> int:
        return self.pos - self.line_begin

    def error(self, message: str) -> JsonParseError:
        """Build an error located at the current position; the caller raises it."""
        line, column = self.line, self._column()
        return JsonParseError(f"{line}:{column}: {message}", line, column)

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs and line breaks, counting lines."""
        text, n = self.text, len(self.text)
        while self.pos < n and text[self.pos] in _WHITESPACE:
            if text[self.pos] == "\n":
                self.line += 1
                self.line_begin = self.pos
            self.pos += 1

    def skip_comment(self) -> bool:
        """Skip one comment starting at the cursor.

        Returns False without moving when comments are disabled or the
        cursor is not on ``/``. A line comment stops before its line break.
        """
        if not self.settings.enable_comments or self._char() != "/":
            return False
        text, n = self.text, len(self.text)
        self.pos += 1
        if self.pos >= n:
            raise self.error("EOF unexpected")
        opener = text[self.pos]
        if opener == "/":
            self.pos += 1
            while self.pos < n and text[self.pos] not in "\r\n\0":
                self.pos += 1
            return True
        if opener == "*":
            close = text.find("*/", self.pos + 1)
            if close < 0:
                self.pos = n
                raise self.error("Unexpected EOF in block comment")
            self.pos = close + 2
            return True
        raise self.error(f"Unexpected `{opener}` in comment opening sequence")

    def _string_eof(self) -> JsonParseError:
        line, column = self.line, self._column()
        return JsonParseError(
            f"Unexpected EOF in string (at {line}:{column})", line, column
        )

    def _read_unicode_escape(self) -> str:
        text, n = self.text, len(self.text)
        start = self.pos
        code = 0
        for offset in range(1, 5):
            index = start + offset
            value = hex_value(text[index]) if index < n else None
            if n - start < 4 or value is None:
                if n - start >= 4:
                    self.pos = index
                line, column = self.line, self._column()
                raise JsonParseError(
                    f"Invalid character value `u` (at {line}:{column})", line, column
                )
            code = code * 16 + value
        self.pos = start + 4
        return chr(code)

    def read_string(self) -> str:
        """Read a quoted string at the cursor and return its decoded text."""
        if self._char() != '"':
            raise self.error(f"Unexpected {self._char()} when seeking value")
        text, n = self.text, len(self.text)
        self.pos += 1
        parts: list[str] = []
        while True:
            if self.pos >= n or text[self.pos] == "\0":
                raise self._string_eof()
            char = text[self.pos]
            if char == '"':
                self.pos += 1
                return "".join(parts)
            if char == "\\":
                self.pos += 1
                if self.pos >= n or text[self.pos] == "\0":
                    raise self._string_eof()
                escape = text[self.pos]
                if escape == "u":
                    parts.append(self._read_unicode_escape())
                else:
                    parts.append(_ESCAPES.get(escape, escape))
            else:
                parts.append(char)
            self.pos += 1

    def read_number(self) -> JsonValue:
        """Read a number at the cursor; the terminating character is left unread."""
        first = self._char()
        if not first or (first not in _DIGITS and first != "-"):
            raise self.error(f"Unexpected {first} when seeking value")
        negative = first == "-"
        if negative:
            self.pos += 1

        text, n = self.text, len(self.text)
        is_double = False
        integer = 0
        dbl = 0.0
        digits = 0
        fraction = 0
        in_exponent = False
        exponent_started = False
        exponent_negative = False
        exponent = 0
        leading_zero = False

        while True:
            char = text[self.pos] if self.pos < n else ""
            if char == "/" and self.settings.enable_comments:
                raise self.error("Comment not allowed here")

            if char and char in _DIGITS:
                digits += 1
                digit = ord(char) - ord("0")
                if in_exponent:
                    exponent_started = True
                    exponent = _wrap64(exponent * 10 + digit)
                elif not is_double:
                    if leading_zero:
                        raise self.error(f"Unexpected `0` before `{char}`")
                    if digits == 1 and char == "0":
                        leading_zero = True
                    integer = _wrap64(integer * 10 + digit)
                else:
                    fraction = _wrap64(fraction * 10 + digit)
                self.pos += 1
                continue

            if char in ("+", "-"):
                if in_exponent and not exponent_started:
                    exponent_started = True
                    exponent_negative = char == "-"
                    self.pos += 1
                    continue
            elif char == "." and not is_double:
                if not digits:
                    raise self.error("Expected digit before `.`")
                is_double = True
                dbl = float(integer)
                digits = 0
                self.pos += 1
                continue

            if not in_exponent:
                if is_double:
                    if not digits:
                        raise self.error("Expected digit after `.`")
                    dbl += fraction / _pow10(digits)
                if char in ("e", "E"):
                    in_exponent = True
                    if not is_double:
                        is_double = True
                        dbl = float(integer)
                    digits = 0
                    leading_zero = False
                    self.pos += 1
                    continue
            else:
                if not digits:
                    raise self.error("Expected digit after `e`")
                dbl *= _pow10(-exponent if exponent_negative else exponent)
            break

        if is_double:
            return JsonValue(JsonType.DOUBLE, -dbl if negative else dbl)
        return JsonValue(JsonType.INTEGER, _wrap64(-integer) if negative else integer)

    def read_literal(self) -> JsonValue:
        """Read ``true``, ``false`` or ``null`` at the cursor."""
        entry = _LITERALS.get(self._char())
        if entry is None:
            raise self.error(f"Unexpected {self._char()} when seeking value")
        word, kind, value = entry
        text, n = self.text, len(self.text)
        start = self.pos
        if n - start < len(word) - 1:
            raise self.error("Unknown value")
        for offset in range(1, len(word)):
            index = start + offset
            if index >= n or text[index] != word[offset]:
                self.pos = min(index, n)
                raise self.error("Unknown value")
        self.pos = start + len(word)
        return JsonValue(kind, value)