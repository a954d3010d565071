"""Parsing JSON text into JsonNode trees and rendering trees back to text."""

from __future__ import annotations

import math
from typing import List, Tuple

from xcl.json_node import JsonNode, JsonType

_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_UNESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}
_ESCAPES = {"\\": "\\\\", '"': '\\"', "\b": "\\b", "\f": "\\f", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


class JsonParseError(ValueError):
    """Raised when text cannot be parsed; ``position`` is where parsing stopped."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


def _to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf


def _scaled(base: float, exponent: int) -> float:
    try:
        return base * 10.0 ** exponent
    except OverflowError:
        return math.inf if base else 0.0


class _Parser:
    def __init__(self, text: str) -> None:
        nul = text.find("\0")
        self.text = text if nul < 0 else text[:nul]
        self.size = len(self.text)

    def char(self, pos: int) -> str:
        return self.text[pos] if pos < self.size else ""

    def skip(self, pos: int) -> int:
        while pos < self.size and ord(self.text[pos]) <= 32:
            pos += 1
        return pos

    def fail(self, message: str, pos: int) -> JsonParseError:
        if pos >= self.size:
            return JsonParseError("unexpected end of input", pos)
        return JsonParseError(message, pos)

    def value(self, pos: int) -> Tuple[JsonNode, int]:
        text = self.text
        if text.startswith("null", pos):
            return JsonNode(JsonType.NULL), pos + 4
        if text.startswith("false", pos):
            return JsonNode(JsonType.FALSE), pos + 5
        if text.startswith("true", pos):
            return JsonNode(JsonType.TRUE, value_int=1), pos + 4
        c = self.char(pos)
        if c == '"':
            s, pos = self.string(pos)
            return JsonNode(JsonType.STRING, value_string=s), pos
        if c == "-" or (c and c in _DIGITS):
            return self.number(pos)
        if c == "[":
            return self.array(pos)
        if c == "{":
            return self.object(pos)
        raise self.fail(f"unexpected character {c!r}", pos)

    def hex4(self, pos: int) -> int:
        digits = []
        while len(digits) < 4 and pos < self.size and self.text[pos] in _HEX_DIGITS:
            digits.append(self.text[pos])
            pos += 1
        return int("".join(digits), 16) if digits else 0

    def string(self, pos: int) -> Tuple[str, int]:
        if self.char(pos) != '"':
            raise self.fail("expected string", pos)
        text = self.text
        out: List[str] = []
        pos += 1
        while pos < self.size and text[pos] != '"':
            c = text[pos]
            if c != "\\":
                out.append(c)
                pos += 1
                continue
            pos += 1
            if pos >= self.size:
                break
            escape = text[pos]
            if escape in _UNESCAPES:
                out.append(_UNESCAPES[escape])
            elif escape == "u":
                code = self.hex4(pos + 1)
                pos += 4
                if code and not 0xDC00 <= code <= 0xDFFF:
                    if 0xD800 <= code <= 0xDBFF:
                        if self.char(pos + 1) != "\\" or self.char(pos + 2) != "u":
                            code = 0
                        else:
                            low = self.hex4(pos + 3)
                            pos += 6
                            if 0xDC00 <= low <= 0xDFFF:
                                code = 0x10000 | ((code & 0x3FF) << 10) | (low & 0x3FF)
                            else:
                                code = 0
                    if code:
                        out.append(chr(code))
            else:
                out.append(escape)
            pos += 1
        pos = min(pos, self.size)
        if self.char(pos) == '"':
            pos += 1
        return "".join(out), pos

    def number(self, pos: int) -> Tuple[JsonNode, int]:
        sign = 1
        if self.char(pos) == "-":
            sign = -1
            pos += 1
        if self.char(pos) == "0":
            pos += 1
        start = pos
        while self.char(pos) and self.char(pos) in _DIGITS:
            pos += 1
        whole = int(self.text[start:pos] or "0")
        d = _to_float(whole)
        base = d
        scale = 0
        nxt = self.char(pos + 1)
        if self.char(pos) == "." and nxt and nxt in _DIGITS:
            pos += 1
            point = 0.1
            while self.char(pos) and self.char(pos) in _DIGITS:
                digit = int(self.text[pos])
                d += point * digit
                point *= 0.1
                base = base * 10.0 + digit
                scale -= 1
                pos += 1
        exponent = 0
        exponent_sign = 1
        if self.char(pos) in ("e", "E"):
            pos += 1
            if self.char(pos) == "+":
                pos += 1
            elif self.char(pos) == "-":
                exponent_sign = -1
                pos += 1
            while self.char(pos) and self.char(pos) in _DIGITS:
                exponent = exponent * 10 + int(self.text[pos])
                pos += 1
        if scale == 0 and exponent == 0:
            node = JsonNode(JsonType.INT, value_int=whole, value_double=d, sign=sign)
        else:
            value = _scaled(base, scale + exponent * exponent_sign) if exponent else d
            node = JsonNode(JsonType.DOUBLE, value_int=whole, value_double=value, sign=sign)
        return node, pos

    def array(self, pos: int) -> Tuple[JsonNode, int]:
        node = JsonNode(JsonType.ARRAY)
        pos = self.skip(pos + 1)
        if self.char(pos) == "]":
            return node, pos + 1
        while True:
            child, pos = self.value(self.skip(pos))
            node.children.append(child)
            pos = self.skip(pos)
            if self.char(pos) != ",":
                break
            pos += 1
        if self.char(pos) == "]":
            return node, pos + 1
        raise self.fail("expected ',' or ']'", pos)

    def object(self, pos: int) -> Tuple[JsonNode, int]:
        node = JsonNode(JsonType.OBJECT)
        pos = self.skip(pos + 1)
        if self.char(pos) == "}":
            return node, pos + 1
        while True:
            name, pos = self.string(self.skip(pos))
            pos = self.skip(pos)
            if self.char(pos) != ":":
                raise self.fail("expected ':'", pos)
            child, pos = self.value(self.skip(pos + 1))
            child.name = name
            node.children.append(child)
            pos = self.skip(pos)
            if self.char(pos) != ",":
                break
            pos += 1
        if self.char(pos) == "}":
            return node, pos + 1
        raise self.fail("expected ',' or '}'", pos)


def parse(text: str) -> JsonNode:
    """Parse the first JSON value in ``text``; anything after it is ignored."""
    parser = _Parser(text)
    node, _ = parser.value(parser.skip(0))
    return node


def _quote(s: object) -> str:
    if s is None:
        return ""
    parts = ['"']
    for c in str(s):
        if c in _ESCAPES:
            parts.append(_ESCAPES[c])
        elif ord(c) < 32:
            parts.append(f"\\u{ord(c):04x}")
        else:
            parts.append(c)
    parts.append('"')
    return "".join(parts)


def _render(node: JsonNode, depth: int, fmt: bool) -> str:
    kind = node.type
    negative = node.sign < 0
    if kind is JsonType.NULL:
        return "null"
    if kind is JsonType.FALSE:
        return "false"
    if kind is JsonType.TRUE:
        return "true"
    if kind is JsonType.INT:
        return str(-node.value_int if negative else node.value_int)
    if kind is JsonType.DOUBLE:
        return "%.16f" % (-node.value_double if negative else node.value_double)
    if kind is JsonType.STRING:
        return _quote(node.value_string)
    if kind is JsonType.ARRAY:
        separator = ", " if fmt else ","
        return "[" + separator.join(_render(c, depth + 1, fmt) for c in node.children) + "]"
    depth += 1
    parts = ["{"]
    if fmt:
        parts.append("\n")
    last = len(node.children) - 1
    for index, child in enumerate(node.children):
        if fmt:
            parts.append("\t" * depth)
        parts.append(_quote(child.name))
        parts.append(":")
        if fmt:
            parts.append("\t")
        parts.append(_render(child, depth, fmt))
        if index != last:
            parts.append(",")
        if fmt:
            parts.append("\n")
    if fmt:
        parts.append("\t" * (depth - 1))
    parts.append("}")
    return "".join(parts)


def render(node: JsonNode) -> str:
    """Render ``node`` with tabs and newlines for reading."""
    return _render(node, 0, True)


def render_unformatted(node: JsonNode) -> str:
    """Render ``node`` without any added whitespace."""
    return _render(node, 0, False)