from .matcher import extract, find_all, list_children, matches, self_and_children, single_wrapped
from .reader import (
    Atom,
    Expr,
    ParseError,
    ParseErrorKind,
    Segment,
    SList,
    atom_text,
    parse_all,
    parse_lines,
    parse_one,
    parse_segments,
    render,
    segment,
    tokenize,
)

__all__ = [
    "Atom",
    "Expr",
    "ParseError",
    "ParseErrorKind",
    "Segment",
    "SList",
    "atom_text",
    "extract",
    "find_all",
    "list_children",
    "matches",
    "parse_all",
    "parse_lines",
    "parse_one",
    "parse_segments",
    "render",
    "segment",
    "self_and_children",
    "single_wrapped",
    "tokenize",
]
