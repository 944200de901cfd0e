"""Map JSON Pointers to the source lines their values start on.

Python's ``json`` module discards positions once the text is parsed, so this
module scans the raw text a second time with a small tokenizer that only
tracks structure and line numbers.
"""

import json
import re
from dataclasses import dataclass

_STRING = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_SCALAR = re.compile(r'[^\s,:\[\]{}"]+')
_WHITESPACE = " \t\r\n"


@dataclass
class _Frame:
    pointer: str
    is_array: bool
    index: int = 0
    key: str | None = None
    expect_key: bool = True


def escape_pointer_segment(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def make_pointer(path: list[str | int]) -> str:
    """Build a JSON Pointer from a sequence of object keys and array indices."""
    return "".join("/" + escape_pointer_segment(str(part)) for part in path)


def _decode_key(raw: str) -> str:
    try:
        return json.loads(raw, strict=False)
    except ValueError:
        return raw[1:-1]


def _record(positions: dict[str, int], pointer: str, line: int) -> None:
    if pointer in positions:
        # A duplicate key replaces the earlier value, descendants included.
        prefix = pointer + "/"
        for stale in [p for p in positions if p.startswith(prefix)]:
            del positions[stale]
    positions[pointer] = line


def build_position_map(text: str) -> dict[str, int]:
    """Return a mapping from JSON Pointer to the 1-based line where its value begins.

    The root value is addressed by the empty pointer ``""``. Malformed text
    does not raise: scanning stops and whatever was indexed so far is returned.
    """
    positions: dict[str, int] = {}
    stack: list[_Frame] = []
    line = 1
    pos = 0
    length = len(text)

    def value_pointer() -> str | None:
        if not stack:
            return "" if "" not in positions else None
        frame = stack[-1]
        if frame.is_array:
            pointer = f"{frame.pointer}/{frame.index}"
            frame.index += 1
            return pointer
        if frame.key is None:
            return None
        return f"{frame.pointer}/{escape_pointer_segment(frame.key)}"

    while pos < length:
        char = text[pos]

        if char in _WHITESPACE:
            if char == "\n":
                line += 1
            pos += 1
            continue

        if char in "{[":
            pointer = value_pointer()
            if pointer is None:
                break
            _record(positions, pointer, line)
            stack.append(_Frame(pointer=pointer, is_array=char == "["))
            pos += 1
        elif char in "}]":
            if stack:
                stack.pop()
            pos += 1
        elif char == ":":
            if stack:
                stack[-1].expect_key = False
            pos += 1
        elif char == ",":
            if stack and not stack[-1].is_array:
                stack[-1].expect_key = True
                stack[-1].key = None
            pos += 1
        elif char == '"':
            match = _STRING.match(text, pos)
            if match is None:
                break
            raw = match.group(0)
            if stack and not stack[-1].is_array and stack[-1].expect_key:
                stack[-1].key = _decode_key(raw)
            else:
                pointer = value_pointer()
                if pointer is None:
                    break
                _record(positions, pointer, line)
            line += raw.count("\n")
            pos = match.end()
        else:
            match = _SCALAR.match(text, pos)
            if match is None:
                break
            pointer = value_pointer()
            if pointer is None:
                break
            _record(positions, pointer, line)
            pos = match.end()

    return positions
