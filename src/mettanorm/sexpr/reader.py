"""
Expression reader for MeTTa-style S-expressions.

Grammar
-------
- ``(`` / ``)`` and ``[`` / ``]`` are single-character tokens.
- An atom is a maximal run of characters that are neither whitespace nor
  brackets. Atoms are kept as raw text; there is no numeric or string typing.
- A list opened with ``(`` must close with ``)`` and one opened with ``[``
  must close with ``]``. The bracket style is not kept in the tree: canonical
  rendering always uses ``( )``.

Two modes of use:
- Strict: ``parse_one`` / ``parse_all`` raise ``ParseError``.
- Recovering: ``parse_lines`` (one line at a time) and ``parse_segments``
  (bracket-balanced, multi-line, ``;`` comments aware) never raise and return
  diagnostics for the pieces they had to skip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

from ..models.diagnostics import Diagnostic, DiagnosticKind

OPEN_TO_CLOSE = {"(": ")", "[": "]"}
CLOSE_BRACKETS = frozenset(OPEN_TO_CLOSE.values())
BRACKETS = frozenset(OPEN_TO_CLOSE) | CLOSE_BRACKETS
COMMENT_CHAR = ";"


class ParseErrorKind(Enum):
    UNEXPECTED_EOF = "unexpected_eof"
    UNEXPECTED_CLOSE = "unexpected_close"
    MISMATCHED_BRACKET = "mismatched_bracket"


class ParseError(Exception):
    """Raised by the strict reader when the input is not well formed."""

    def __init__(self, kind: ParseErrorKind, message: str, position: int = 0):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position


@dataclass(frozen=True)
class Atom:
    text: str

    def to_metta(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class SList:
    items: tuple["Expr", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __iter__(self) -> Iterator["Expr"]:
        return iter(self.items)

    def head(self) -> str | None:
        """Text of the first element when it is an atom."""
        if self.items and isinstance(self.items[0], Atom):
            return self.items[0].text
        return None

    def to_metta(self) -> str:
        return "(" + " ".join(item.to_metta() for item in self.items) + ")"

    def __str__(self) -> str:
        return self.to_metta()


Expr = Union[Atom, SList]


def atom_text(expr: Expr | None) -> str | None:
    """Return the atom text of ``expr`` or None when it is not an atom."""
    if isinstance(expr, Atom):
        return expr.text
    return None


def render(expr: Expr) -> str:
    return expr.to_metta()


def tokenize(text: str) -> list[tuple[str, int]]:
    """Split text into ``(token, offset)`` pairs."""
    tokens: list[tuple[str, int]] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in BRACKETS:
            tokens.append((ch, i))
            i += 1
            continue
        start = i
        while i < n and not text[i].isspace() and text[i] not in BRACKETS:
            i += 1
        tokens.append((text[start:i], start))
    return tokens


class _TokenStream:
    def __init__(self, tokens: list[tuple[str, int]], text_length: int):
        self.tokens = tokens
        self.index = 0
        self.text_length = text_length

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def read(self) -> Expr:
        if self.at_end():
            raise ParseError(
                ParseErrorKind.UNEXPECTED_EOF,
                "Unexpected end of input",
                self.text_length,
            )
        token, position = self.tokens[self.index]
        self.index += 1

        if token in CLOSE_BRACKETS:
            raise ParseError(
                ParseErrorKind.UNEXPECTED_CLOSE,
                f"Unexpected '{token}' at position {position}",
                position,
            )
        if token not in OPEN_TO_CLOSE:
            return Atom(token)

        expected_close = OPEN_TO_CLOSE[token]
        items: list[Expr] = []
        while True:
            if self.at_end():
                raise ParseError(
                    ParseErrorKind.UNEXPECTED_EOF,
                    f"Unclosed '{token}' opened at position {position}",
                    self.text_length,
                )
            next_token, next_position = self.tokens[self.index]
            if next_token in CLOSE_BRACKETS:
                self.index += 1
                if next_token != expected_close:
                    raise ParseError(
                        ParseErrorKind.MISMATCHED_BRACKET,
                        f"Expected '{expected_close}' but found '{next_token}' "
                        f"at position {next_position}",
                        next_position,
                    )
                return SList(tuple(items))
            items.append(self.read())


def parse_one(text: str) -> Expr:
    """Parse the first expression of ``text``. Trailing input is ignored."""
    tokens = tokenize(text)
    if not tokens:
        raise ParseError(ParseErrorKind.UNEXPECTED_EOF, "Empty input", 0)
    return _TokenStream(tokens, len(text)).read()


def parse_all(text: str) -> list[Expr]:
    """Parse every top-level expression of ``text``.

    Empty or whitespace-only input yields an empty list.
    """
    stream = _TokenStream(tokenize(text), len(text))
    exprs: list[Expr] = []
    while not stream.at_end():
        exprs.append(stream.read())
    return exprs


def strip_comment(line: str) -> str:
    index = line.find(COMMENT_CHAR)
    if index < 0:
        return line
    return line[:index]


def parse_lines(text: str) -> tuple[list[Expr], list[Diagnostic]]:
    """Parse each line on its own, skipping lines that fail.

    Only lines whose first non-blank character opens a bracket are read.
    """
    exprs: list[Expr] = []
    diagnostics: list[Diagnostic] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped[0] not in OPEN_TO_CLOSE:
            continue
        try:
            exprs.extend(parse_all(stripped))
        except ParseError as exc:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.PARSE_ERROR,
                    message=f"Line {line_no}: {exc.message}",
                    line=line_no,
                )
            )
    return exprs, diagnostics


@dataclass
class Segment:
    """A bracket-balanced slice of a document."""

    text: str
    line: int
    comments: list[str] = field(default_factory=list)


def segment(text: str) -> list[Segment]:
    """Split a document into top-level bracket-balanced segments.

    ``;`` comments are removed from the segment text. Comment lines seen
    between two segments are attached to the following segment. A stray
    closing bracket ends the current segment so the damage stays local.
    """
    segments: list[Segment] = []
    pending_comments: list[str] = []
    buffer: list[str] = []
    start_line = 0
    depth = 0

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        code = strip_comment(raw_line)
        comment = raw_line[len(code) + 1:].strip() if len(code) < len(raw_line) else ""

        if depth == 0 and not code.strip():
            if comment.strip(COMMENT_CHAR).strip():
                pending_comments.append(comment.lstrip(COMMENT_CHAR).strip())
            elif not comment:
                # a blank line detaches earlier comments from the next segment
                pending_comments = []
            continue

        for ch in code:
            if depth == 0 and not buffer:
                if ch.isspace():
                    continue
                start_line = line_no
            buffer.append(ch)
            if ch in OPEN_TO_CLOSE:
                depth += 1
            elif ch in CLOSE_BRACKETS:
                depth -= 1
            if depth <= 0 and ch in CLOSE_BRACKETS:
                segments.append(Segment("".join(buffer).strip(), start_line, pending_comments))
                pending_comments = []
                buffer = []
                depth = 0
        if buffer:
            buffer.append("\n")

    if "".join(buffer).strip():
        segments.append(Segment("".join(buffer).strip(), start_line, pending_comments))
    return segments


def parse_segments(text: str) -> tuple[list[tuple[Expr, Segment]], list[Diagnostic]]:
    """Parse each segment of a document, keeping the ones that read cleanly."""
    parsed: list[tuple[Expr, Segment]] = []
    diagnostics: list[Diagnostic] = []
    for seg in segment(text):
        try:
            exprs = parse_all(seg.text)
        except ParseError as exc:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.PARSE_ERROR,
                    message=f"Line {seg.line}: {exc.message}",
                    line=seg.line,
                )
            )
            continue
        for expr in exprs:
            parsed.append((expr, seg))
    return parsed, diagnostics
