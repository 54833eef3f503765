from .builder import KnowledgeSetBuilder, extract_description, extract_header
from .io import (
    read_document,
    read_knowledge_set,
    read_norms,
    write_document,
    write_knowledge_set,
    write_norms,
)
from .models import (
    Condition,
    Entity,
    Eventuality,
    KnowledgeDocument,
    KnowledgeSet,
    LogicalExpression,
    LogicalOperator,
    MetaExpression,
    Negation,
    Norm,
    Triple,
    TripleKind,
    derive_expected_name,
)
from .parsers import (
    ExpressionKind,
    expression_kind,
    parse_consequence,
    parse_entity,
    parse_expression,
    parse_logical_expression,
    parse_meta_expression,
    parse_negation,
    parse_norm,
    parse_norm_text,
    parse_triple,
    parse_triple_text,
)
from .validation import (
    VALID_EVENTUALITY_TYPES,
    VALID_MODALITIES,
    VALID_ROLES,
    check_predicate,
    is_valid_eventuality_type,
    is_valid_modality,
    is_valid_role,
    validate_entities,
    validate_eventualities,
    validate_eventuality,
)

__all__ = [
    "Condition",
    "Entity",
    "Eventuality",
    "ExpressionKind",
    "KnowledgeDocument",
    "KnowledgeSet",
    "KnowledgeSetBuilder",
    "LogicalExpression",
    "LogicalOperator",
    "MetaExpression",
    "Negation",
    "Norm",
    "Triple",
    "TripleKind",
    "VALID_EVENTUALITY_TYPES",
    "VALID_MODALITIES",
    "VALID_ROLES",
    "check_predicate",
    "derive_expected_name",
    "expression_kind",
    "extract_description",
    "extract_header",
    "is_valid_eventuality_type",
    "is_valid_modality",
    "is_valid_role",
    "parse_consequence",
    "parse_entity",
    "parse_expression",
    "parse_logical_expression",
    "parse_meta_expression",
    "parse_negation",
    "parse_norm",
    "parse_norm_text",
    "parse_triple",
    "parse_triple_text",
    "read_document",
    "read_knowledge_set",
    "read_norms",
    "validate_entities",
    "validate_eventualities",
    "validate_eventuality",
    "write_document",
    "write_knowledge_set",
    "write_norms",
]
