"""
Projection of classification results onto ``Metrics``.
"""

from __future__ import annotations

from typing import Optional

from ..models.analysis import AnalysisResult, Contradiction, ContradictionKind
from ..models.metrics import (
    ComplianceDetail,
    ConflictDetail,
    ContradictionDetail,
    Metrics,
    ViolationDetail,
)
from ..resolution import DescriptionTemplates, EntityResolver


def _contradiction_description(
    contradiction: Contradiction, resolver: EntityResolver, templates: DescriptionTemplates
) -> str:
    positive = contradiction.positive
    if contradiction.kind is ContradictionKind.EXISTENCE:
        entity = resolver.resolve_entity(positive.entity)
    else:
        entity = positive.agent or positive.entity
    return templates.contradiction_description(
        entity=entity,
        action=positive.action,
        kind=contradiction.kind.value,
        instrument=positive.instrument,
    )


def to_metrics(
    result: AnalysisResult,
    resolver: Optional[EntityResolver] = None,
    templates: Optional[DescriptionTemplates] = None,
) -> Metrics:
    resolver = resolver or EntityResolver()
    templates = templates or DescriptionTemplates()

    metrics = Metrics(
        inferred_facts=len(result.propositions),
        inferred_state_of_affairs=[p.describe() for p in result.propositions],
        contradictions=len(result.contradictions),
        conflicts=len(result.conflicts),
        violations=len(result.violations),
        compliances=len(result.compliances),
    )

    pairs: set[tuple[str, str]] = set()
    for contradiction in result.contradictions:
        entity1 = contradiction.positive.describe()
        entity2 = contradiction.negative.describe()
        pairs.add((entity1, entity2))
        metrics.contradiction_details.append(
            ContradictionDetail(
                entity1=entity1,
                entity2=entity2,
                description=_contradiction_description(contradiction, resolver, templates),
            )
        )
    metrics.contradiction_pairs = len(pairs)

    for conflict in result.conflicts:
        metrics.conflict_details.append(
            ConflictDetail(
                entity1=conflict.regulation1,
                entity2=conflict.regulation2,
                description=templates.conflict_description(
                    conflict.regulation1, conflict.regulation2, conflict.requirement
                ),
            )
        )

    for violation in result.violations:
        metrics.violation_details.append(
            ViolationDetail(
                violator=violation.violator,
                violated_rule=violation.violated_rule,
                description=templates.violation_description(
                    violation.violator, violation.violated_rule, violation.reason
                ),
            )
        )

    for compliance in result.compliances:
        metrics.compliance_details.append(
            ComplianceDetail(
                entity=compliance.entity,
                obligation=compliance.obligation,
                description=templates.compliance_description(
                    compliance.entity,
                    compliance.obligation,
                    resolver.resolve_entity(compliance.fulfilled_by),
                ),
            )
        )
    return metrics
