"""
Description templates for classification results.

Templates use ``{name}`` placeholders. Placeholders without a value are left
in place.
"""

from __future__ import annotations

from typing import Optional

from ..config import InferenceConfig


def substitute(template: str, variables: dict[str, str]) -> str:
    result = template
    for key, value in variables.items():
        result = result.replace("{" + key + "}", value)
    return result


class DescriptionTemplates:
    DEFAULT_CONTRADICTION = {
        "existence": "Contradiction: {entity} cannot both {action1} and {action2}",
        "payment": "Contradiction: Payment declared in {instrument1} but {instrument2} is required",
        "action": "Contradiction: {entity} cannot both {action} and not {action} at the same time",
    }
    DEFAULT_CONFLICT = {
        "regulation": (
            "Regulatory conflict: {regulation1} prohibits {action} while {regulation2} requires it"
        ),
        "payment": "{entity} faces a conflict: {reason}",
    }
    DEFAULT_VIOLATION = {
        "necessary": "The {rule} must be violated due to {reason}",
        "constraint": "{entity} violates {rule} because of {constraint}",
    }
    DEFAULT_COMPLIANCE = {
        "fulfilled": "{entity} successfully fulfills {obligation} by {action}",
        "met": "Requirement {requirement} is met by {entity}",
    }

    def __init__(self, config: Optional[InferenceConfig] = None):
        config = config or InferenceConfig()
        self.contradiction = {**self.DEFAULT_CONTRADICTION, **config.contradiction_templates}
        self.conflict = {**self.DEFAULT_CONFLICT, **config.conflict_templates}
        self.violation = {**self.DEFAULT_VIOLATION, **config.violation_templates}
        self.compliance = {**self.DEFAULT_COMPLIANCE, **config.compliance_templates}

    def contradiction_description(
        self, entity: str, action: str, kind: str, instrument: str = ""
    ) -> str:
        if kind == "payment_method":
            other = "INRS" if instrument == "USDS" else "USDS"
            return substitute(
                self.contradiction["payment"],
                {"instrument1": instrument, "instrument2": other},
            )
        if kind == "action":
            return substitute(
                self.contradiction["action"],
                {"entity": entity, "action": action or "act"},
            )
        return substitute(
            self.contradiction["existence"],
            {"entity": entity, "action1": "exist", "action2": "not exist"},
        )

    def conflict_description(self, regulation1: str, regulation2: str, requirement: str) -> str:
        reason = f"{regulation1} conflicts with {regulation2} regarding {requirement}"
        template_id = "payment" if "payment" in reason else "regulation"
        return substitute(
            self.conflict[template_id],
            {
                "entity": regulation1,
                "entity1": regulation1,
                "entity2": regulation2,
                "regulation1": regulation1,
                "regulation2": regulation2,
                "action": requirement,
                "reason": reason,
            },
        )

    def violation_description(self, violator: str, rule: str, reason: str) -> str:
        return substitute(
            self.violation["necessary"],
            {
                "entity": violator,
                "violator": violator,
                "rule": rule,
                "reason": reason,
                "constraint": reason,
            },
        )

    def compliance_description(self, entity: str, obligation: str, action: str) -> str:
        return substitute(
            self.compliance["fulfilled"],
            {"entity": entity, "obligation": obligation, "requirement": obligation, "action": action},
        )
