"""
Shape matching over expression trees.

A pattern is a sequence of strings. ``"?"`` is a wildcard that accepts any
expression at that position; every other entry must be an atom with exactly
that text. A one-entry pattern also accepts a bare atom.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from .reader import Atom, Expr, SList

WILDCARD = "?"


def matches(expr: Expr, pattern: Sequence[str]) -> bool:
    if isinstance(expr, Atom):
        return len(pattern) == 1 and (pattern[0] == WILDCARD or pattern[0] == expr.text)

    if len(expr) != len(pattern):
        return False
    for item, expected in zip(expr, pattern):
        if expected == WILDCARD:
            continue
        if not isinstance(item, Atom) or item.text != expected:
            return False
    return True


def extract(expr: Expr, pattern: Sequence[str]) -> list[str]:
    """Return the text found at each wildcard position, in order.

    Atoms give their text and lists their canonical rendering. Returns an
    empty list when ``expr`` does not match.
    """
    if not matches(expr, pattern):
        return []
    if isinstance(expr, Atom):
        return [expr.text] if pattern[0] == WILDCARD else []

    captured: list[str] = []
    for item, expected in zip(expr, pattern):
        if expected == WILDCARD:
            captured.append(item.to_metta())
    return captured


def find_all(exprs: Iterable[Expr], pattern: Sequence[str]) -> list[Expr]:
    return [expr for expr in exprs if matches(expr, pattern)]


def list_children(expr: Expr) -> Iterator[SList]:
    """Yield the direct children of ``expr`` that are lists."""
    if isinstance(expr, SList):
        for item in expr:
            if isinstance(item, SList):
                yield item


def self_and_children(expr: Expr) -> Iterator[SList]:
    """Yield ``expr`` itself (when a list) followed by its list children.

    Engine output shows up both bare and wrapped one level deep, so most
    detectors look at exactly these candidates.
    """
    if isinstance(expr, SList):
        yield expr
        yield from list_children(expr)


def single_wrapped(expr: Expr) -> SList | None:
    """Return the only element of a one-element list when it is itself a list."""
    if isinstance(expr, SList) and len(expr) == 1 and isinstance(expr[0], SList):
        return expr[0]
    return None
