"""Reader for the human-readable storage format.

A file holds named entries: a line ``name: a, b, c`` opens an entry and the
following lines add more rows of comma separated values to it. Everything is
lower-cased and ``//`` starts a comment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

_PAIRS = {"(": ")", '"': '"', "{": "}", "[": "]"}


def _split_values(text: str) -> list[str]:
    """Split on commas that are not inside brackets or quotes."""
    parts: list[str] = []
    current: list[str] = []
    stack: list[str] = []
    for char in text:
        if stack and char == _PAIRS[stack[-1]]:
            stack.pop()
        elif char in _PAIRS and (not stack or stack[-1] != '"'):
            stack.append(char)
        elif char == "," and not stack:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


@dataclass
class HsfContent:
    """One named entry: its values in reading order and its number of rows."""

    name: str = ""
    data: list[str] = field(default_factory=list)
    vert_size: int = 0


@dataclass
class HsfReader:
    """The entries read from one document."""

    contents: list[HsfContent] = field(default_factory=list)

    def get_content(self, name: str) -> HsfContent:
        """Return the first entry called ``name``, or an empty entry."""
        return next((c for c in self.contents if c.name == name), HsfContent())

    @staticmethod
    def from_text(text: str) -> HsfReader:
        """Parse a document."""
        reader = HsfReader()
        content: HsfContent | None = None
        for line in text.lower().split("\n"):
            line = line.split("//", 1)[0]
            name, separator, rest = line.partition(":")
            if separator:
                if content is not None:
                    reader.contents.append(content)
                content = HsfContent(name=name)
                line = rest
            if content is None:
                continue
            values = _split_values(line)
            if values[0].strip():
                content.vert_size += 1
                content.data.extend(value.strip() for value in values)
        if content is not None:
            reader.contents.append(content)
        return reader

    @staticmethod
    def from_file(path: str | Path) -> HsfReader:
        """Read and parse a document from a file."""
        return HsfReader.from_text(Path(path).read_text(encoding="utf-8"))