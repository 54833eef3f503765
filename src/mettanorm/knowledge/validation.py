"""
Vocabulary checks for eventualities and entities.

The vocabularies are closed sets. Validation reports problems as messages; it
never rejects a knowledge set. Unknown predicates are only warned about.
"""

from __future__ import annotations

from loguru import logger

from .models import (
    AGENT_ROLE,
    EXISTENCE_MODALITY,
    ROLE_PREFIX,
    TYPE_PREDICATE,
    Eventuality,
    KnowledgeSet,
)

VALID_EVENTUALITY_TYPES = frozenset(
    {
        "soaMoor", "soaPay", "soaLeave", "soaContainerVessel", "soa_mooringBerth",
        "smartport", "soaIdentify", "soaDevelop", "soaOnboard", "soaActivate",
        "soaInvoke", "soaCreate", "soaUpdate", "soaReview", "soaReward",
        "soaUnreward", "soaCalculate", "soaIssue", "soaSettle", "soaReimburse",
        "soaVerify", "soaDeclare", "soaRegister", "soaTransfer", "soaValidate",
        "Pay", "Moor", "Leave",
    }
)

VALID_ROLES = frozenset(
    ROLE_PREFIX + role
    for role in (
        "agent", "beneficiary", "cause", "goal", "instrument", "partner", "patient",
        "pivot", "purpose", "reason", "result", "setting", "source", "theme", "time",
        "manner", "medium", "means", "location", "initial-location", "final-location",
        "distance", "duration", "initial-time", "final-time", "path", "amount", "attribute",
    )
)

VALID_MODALITIES = frozenset({"rexist", "obligatory", "permitted", "optional"})


def is_valid_eventuality_type(value: str) -> bool:
    return value in VALID_EVENTUALITY_TYPES


def is_valid_role(value: str) -> bool:
    return value in VALID_ROLES


def is_valid_modality(value: str) -> bool:
    return value in VALID_MODALITIES


def check_predicate(predicate: str) -> bool:
    """Return whether ``predicate`` is known. Unknown ones are logged, not rejected."""
    if predicate == TYPE_PREDICATE or is_valid_role(predicate):
        return True
    logger.warning(f"Unknown predicate '{predicate}'")
    return False


def validate_eventuality(eventuality: Eventuality) -> str | None:
    """Lenient single check: only a missing name is an error.

    Other gaps are logged as warnings.
    """
    if not eventuality.name:
        return "Eventuality has no name"
    if not eventuality.type:
        logger.warning(f"Eventuality '{eventuality.name}' has no type")
    elif not is_valid_eventuality_type(eventuality.type):
        logger.warning(f"Eventuality '{eventuality.name}' has unknown type '{eventuality.type}'")
    if not eventuality.agent:
        logger.warning(f"Eventuality '{eventuality.name}' has no agent")
    return None


def validate_eventualities(knowledge: KnowledgeSet) -> list[str]:
    errors: list[str] = []
    for name, eventuality in knowledge.eventualities.items():
        if not eventuality.type:
            errors.append(f"Eventuality '{name}' is missing type")
        elif not is_valid_eventuality_type(eventuality.type):
            errors.append(f"Eventuality '{name}' has invalid type '{eventuality.type}'")

        if not eventuality.agent:
            errors.append(f"Eventuality '{name}' is missing agent ({AGENT_ROLE})")

        for role in eventuality.roles:
            if not is_valid_role(role):
                errors.append(f"Eventuality '{name}' has invalid role '{role}'")

        if not eventuality.modality:
            errors.append(f"Eventuality '{name}' is missing modality ({EXISTENCE_MODALITY})")
        elif not is_valid_modality(eventuality.modality):
            errors.append(f"Eventuality '{name}' has invalid modality '{eventuality.modality}'")
        elif eventuality.modality != EXISTENCE_MODALITY:
            errors.append(
                f"Eventuality '{name}' has modality '{eventuality.modality}', "
                f"expected '{EXISTENCE_MODALITY}'"
            )

        expected = eventuality.expected_name
        if name != expected:
            errors.append(
                f"Eventuality '{name}' does not follow naming convention. Expected: '{expected}'"
            )
    return errors


def validate_entities(knowledge: KnowledgeSet) -> list[str]:
    errors: list[str] = []
    for name, entity in knowledge.entities.items():
        if not entity.type:
            errors.append(f"Entity '{name}' is missing type")
        if name in knowledge.eventualities:
            errors.append(f"Entity '{name}' conflicts with an eventuality of the same name")
    return errors
