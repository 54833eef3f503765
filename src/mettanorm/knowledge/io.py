"""
Reading and writing knowledge documents on disk.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..models.diagnostics import Diagnostic
from .builder import KnowledgeSetBuilder
from .models import KnowledgeDocument, KnowledgeSet, Norm


def read_document(path: str | Path) -> tuple[KnowledgeDocument, list[Diagnostic]]:
    text = Path(path).read_text(encoding="utf-8")
    document, diagnostics = KnowledgeSetBuilder().build_document(text)
    logger.info(
        f"Read {path}: {len(document.norms)} norms, {len(document.knowledge.facts)} facts, "
        f"{len(diagnostics)} diagnostics"
    )
    return document, diagnostics


def write_document(path: str | Path, document: KnowledgeDocument) -> None:
    Path(path).write_text(document.to_metta(), encoding="utf-8")


def read_norms(path: str | Path) -> list[Norm]:
    document, _ = read_document(path)
    return document.norms


def write_norms(path: str | Path, norms: list[Norm], header: list[str] | None = None) -> None:
    write_document(path, KnowledgeDocument(header=list(header or []), norms=list(norms)))


def read_knowledge_set(path: str | Path) -> tuple[KnowledgeSet, list[Diagnostic]]:
    text = Path(path).read_text(encoding="utf-8")
    return KnowledgeSetBuilder().build_with_diagnostics(text)


def write_knowledge_set(path: str | Path, knowledge: KnowledgeSet) -> None:
    Path(path).write_text(knowledge.to_metta() + "\n", encoding="utf-8")
