"""
Semantic classifier for reasoning-engine output.

Turns the engine's S-expression stream into five result categories:
propositions, contradictions, regulatory conflicts, necessary violations and
compliance relations.

READING RULES
-------------
- The engine often wraps results in an outer list (``[(a ...), (b ...)]``).
  Every detector looks at each top-level expression and one level into it,
  so bare and wrapped forms give the same result.
- Detectors are independent single passes over the same expressions. A shape
  that does not match contributes nothing.
- Classification never raises. If the whole buffer does not parse, lines are
  read one by one and unreadable lines are reported as diagnostics.

Contradictions come from two separate mechanisms whose results are joined:
1) meta-id groups ``((meta-id E type rexist V) ...)``;
2) bare ``(id_not_not_false E)`` markers, paired by base action key. If every
   marked entity names a payment instrument (INRS / USDS), each one becomes a
   payment_method contradiction instead.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

from loguru import logger

from ..config import InferenceConfig
from ..models.analysis import (
    AnalysisResult,
    ComplianceRelation,
    Contradiction,
    ContradictionKind,
    NecessaryViolation,
    Proposition,
    RegulatoryConflict,
)
from ..models.diagnostics import Diagnostic
from ..resolution import DescriptionTemplates, EntityResolver, Tense
from ..sexpr import (
    Atom,
    Expr,
    ParseError,
    SList,
    atom_text,
    extract,
    list_children,
    matches,
    parse_all,
    parse_lines,
    self_and_children,
    single_wrapped,
)
from .patterns import detect_pattern
from .regulations import (
    NOT_OPTIONAL_ATOM,
    describe_conflict_atom,
    describe_conflict_call,
    describe_rule_call,
    describe_violator_call,
    read_call,
)

SOA_PREFIX = "soa_"
EVENTUALITY_PREFIX = "soa_e"
EXCLUDED_SUBJECTS = frozenset({"soa_eo", "soa_ea"})
EXCLUDED_SUBJECT_MARKERS = ("disjunction", "id_not_not_false")
PAYMENT_INSTRUMENTS = ("INRS", "USDS")
NOT_NOT_FALSE = "id_not_not_false"
META_PATTERN = ("meta-id", "?", "type", "rexist", "?")
TRIPLE_PATTERN = ("triple", "?", "?", "?")
CONFLICT_PATTERN = ("conflict", "?", "?")
QUOTE_PATTERN = ("quote", "?")
COMPLIED_PATTERN = ("is_complied_with_by", "?", "?")
VIOLATION_REASON = "conflicting regulatory requirements"


def base_action_key(entity_id: str) -> str:
    """``soa_enpam`` / ``soa_epam`` -> ``pam``: the key shared by a pair."""
    if not entity_id.startswith(SOA_PREFIX) or len(entity_id) < 7:
        return ""
    key = entity_id[len(SOA_PREFIX):]
    if key.startswith("en") and len(key) > 2:
        return key[2:]
    if key.startswith("e") and len(key) > 1:
        return key[1:]
    return key


def _meta_source(expr: SList) -> tuple[SList, Expr | None] | None:
    """Return (meta-id list, sibling) for a bare meta-id list or a meta-id group."""
    if expr.head() == "meta-id":
        return expr, None
    if len(expr) >= 2 and isinstance(expr[0], SList) and expr[0].head() == "meta-id":
        return expr[0], expr[1]
    return None


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class SemanticClassifier:
    """
    Classify parsed engine output.

    The resolver and templates are passed in explicitly; defaults are used
    when omitted.
    """

    def __init__(
        self,
        resolver: Optional[EntityResolver] = None,
        templates: Optional[DescriptionTemplates] = None,
    ):
        self.resolver = resolver or EntityResolver()
        self.templates = templates or DescriptionTemplates()

    @classmethod
    def from_config(cls, config: InferenceConfig) -> "SemanticClassifier":
        return cls(EntityResolver(config), DescriptionTemplates(config))

    # --- entry points ---

    def classify(self, text: str) -> AnalysisResult:
        exprs, diagnostics = self.read(text)
        result = self.classify_expressions(exprs)
        result.diagnostics = diagnostics
        return result

    def read(self, text: str) -> tuple[list[Expr], list[Diagnostic]]:
        try:
            return parse_all(text), []
        except ParseError as exc:
            logger.warning(f"Engine output did not parse as a whole ({exc.message}); reading line by line")
            exprs, diagnostics = parse_lines(text)
            for diagnostic in diagnostics:
                logger.debug(f"Skipped unparsable input: {diagnostic.message}")
            return exprs, diagnostics

    def classify_expressions(self, exprs: list[Expr]) -> AnalysisResult:
        result = AnalysisResult(
            propositions=self.extract_propositions(exprs),
            contradictions=self.find_contradictions(exprs),
            conflicts=self.find_conflicts(exprs),
            violations=self.find_violations(exprs),
            compliances=self.find_compliances(exprs),
        )
        logger.info(
            f"Classified {len(exprs)} expressions: {len(result.propositions)} propositions, "
            f"{len(result.contradictions)} contradictions, {len(result.conflicts)} conflicts, "
            f"{len(result.violations)} violations, {len(result.compliances)} compliances"
        )
        counts = Counter(
            detect_pattern(candidate).value for expr in exprs for candidate in self_and_children(expr)
        )
        logger.debug(f"Pattern breakdown: {dict(counts)}")
        return result

    # --- propositions ---

    def extract_propositions(self, exprs: list[Expr]) -> list[Proposition]:
        groups: dict[str, list[tuple[str, str]]] = {}
        for expr in exprs:
            for candidate in self_and_children(expr):
                fields = extract(candidate, TRIPLE_PATTERN)
                if len(fields) != 3:
                    continue
                if not all(isinstance(item, Atom) for item in candidate.items[1:3]):
                    continue
                subject, predicate, obj = fields
                if not self._is_proposition_subject(subject):
                    continue
                groups.setdefault(subject, []).append((predicate, obj))

        propositions: list[Proposition] = []
        for subject in sorted(groups):
            proposition = self._build_proposition(subject, groups[subject])
            if proposition is not None:
                propositions.append(proposition)
        return propositions

    @staticmethod
    def _is_proposition_subject(subject: str) -> bool:
        if not subject.startswith(SOA_PREFIX) or subject in EXCLUDED_SUBJECTS:
            return False
        return not any(marker in subject for marker in EXCLUDED_SUBJECT_MARKERS)

    def _build_proposition(
        self, subject: str, facts: list[tuple[str, str]]
    ) -> Proposition | None:
        exists = False
        action_type = ""
        agent = ""
        instrument = ""
        properties: dict[str, str] = {}
        for predicate, obj in facts:
            if predicate == "type":
                if obj == "rexist":
                    exists = True
                elif obj.startswith("soa") and not obj.startswith(SOA_PREFIX) and len(obj) > 3:
                    action_type = obj
            elif predicate == "soaHas_agent":
                agent = self.resolver.resolve_entity(obj)
            elif predicate == "soaHas_instrument":
                instrument = self.resolver.resolve_instrument(obj)
            else:
                properties[predicate] = obj

        if not exists or not action_type:
            return None
        action = action_type[3].lower() + action_type[4:]
        return Proposition(
            entity=subject,
            action=action,
            agent=agent,
            instrument=instrument,
            properties=properties,
        )

    # --- contradictions ---

    def find_contradictions(self, exprs: list[Expr]) -> list[Contradiction]:
        results: list[Contradiction] = []
        marked: list[str] = []

        for expr in exprs:
            if not isinstance(expr, SList):
                continue
            source = _meta_source(expr)
            if source is not None:
                results.extend(self._meta_contradictions(*source))
                continue
            marker = extract(expr, (NOT_NOT_FALSE, "?"))
            if marker and isinstance(expr[1], Atom):
                marked.append(marker[0])
                continue
            for child in list_children(expr):
                source = _meta_source(child)
                if source is not None:
                    results.extend(self._meta_contradictions(*source))
                    continue
                marker = extract(child, (NOT_NOT_FALSE, "?"))
                if marker and isinstance(child[1], Atom):
                    marked.append(marker[0])

        results.extend(self._marker_contradictions(_dedupe(marked)))
        return results

    def _meta_contradictions(self, meta: SList, sibling: Expr | None) -> list[Contradiction]:
        fields = extract(meta, META_PATTERN)
        if len(fields) != 2 or not isinstance(meta[1], Atom):
            return []
        entity, value = fields

        if value == "false":
            detail = sibling.head() if isinstance(sibling, SList) else None
            if detail and "inrs-not-usds" in detail:
                return [
                    Contradiction(
                        positive=Proposition(entity=entity, action="uses INRS"),
                        negative=Proposition(entity="not_" + entity, action="uses USDS", exists=False),
                        kind=ContradictionKind.PAYMENT_METHOD,
                    )
                ]
            return [
                Contradiction(
                    positive=Proposition(entity=entity),
                    negative=Proposition(entity="not_" + entity, exists=False),
                    kind=ContradictionKind.EXISTENCE,
                )
            ]

        if value == "true" and isinstance(sibling, SList) and sibling.head() == NOT_NOT_FALSE:
            return [self._action_contradiction(entity)]
        return []

    def _action_contradiction(self, entity: str) -> Contradiction:
        resolver = self.resolver
        if resolver.is_negated_entity(entity):
            base = resolver.get_base_form(entity)
            positive = Proposition(
                entity=resolver.resolve_entity(base),
                action=resolver.resolve_action(base),
            )
            negative = Proposition(
                entity=resolver.resolve_entity(entity),
                action=resolver.resolve_action(entity),
                exists=False,
            )
        else:
            negated = resolver.get_negated_form(entity)
            positive = Proposition(
                entity=resolver.resolve_entity(entity),
                action=resolver.resolve_action(entity),
            )
            negative = Proposition(
                entity=resolver.resolve_entity(negated),
                action="not " + resolver.resolve_action(entity),
                exists=False,
            )
        return Contradiction(positive=positive, negative=negative, kind=ContradictionKind.ACTION)

    def _marker_contradictions(self, entities: list[str]) -> list[Contradiction]:
        if not entities:
            return []

        if all(any(code in entity for code in PAYMENT_INSTRUMENTS) for entity in entities):
            return [self._payment_contradiction(entity) for entity in entities]

        groups: dict[str, list[str]] = {}
        for entity in entities:
            key = base_action_key(entity)
            if key:
                groups.setdefault(key, []).append(entity)

        results: list[Contradiction] = []
        for members in groups.values():
            if len(members) < 2:
                continue
            positive_id = next((m for m in members if not self.resolver.is_negated_entity(m)), None)
            negative_id = next((m for m in members if self.resolver.is_negated_entity(m)), None)
            if positive_id is None or negative_id is None:
                continue
            results.append(
                Contradiction(
                    positive=Proposition(
                        entity=self.resolver.resolve_entity(positive_id),
                        action=self.resolver.resolve_action(positive_id),
                    ),
                    negative=Proposition(
                        entity=self.resolver.resolve_entity(negative_id),
                        action="not " + self.resolver.resolve_action(negative_id),
                        exists=False,
                    ),
                    kind=ContradictionKind.ACTION,
                )
            )
        return results

    def _payment_contradiction(self, entity: str) -> Contradiction:
        instrument = "INRS" if "INRS" in entity else "USDS"
        name = self.resolver.resolve_entity(entity)
        return Contradiction(
            positive=Proposition(entity=name, action=f"pays in {instrument}", instrument=instrument),
            negative=Proposition(
                entity=name,
                action=f"does not pay in {instrument}",
                instrument=instrument,
                exists=False,
            ),
            kind=ContradictionKind.PAYMENT_METHOD,
        )

    # --- conflicts ---

    def find_conflicts(self, exprs: list[Expr]) -> list[RegulatoryConflict]:
        results: list[RegulatoryConflict] = []
        for expr in exprs:
            wrapped = [child for child in list_children(expr) if matches(child, CONFLICT_PATTERN)]
            if wrapped:
                results.extend(self._parse_conflict(child) for child in wrapped)
            elif matches(expr, CONFLICT_PATTERN):
                results.append(self._parse_conflict(expr))
        return results

    def _parse_conflict(self, expr: SList) -> RegulatoryConflict:
        arg1, arg2 = expr[1], expr[2]
        regulation1, entity1 = self._describe_conflict_arg(arg1)
        regulation2, entity2 = self._describe_conflict_arg(arg2)

        affected = entity1 or entity2
        if not affected and isinstance(arg2, Atom):
            affected = arg2.text

        if atom_text(arg1) == NOT_OPTIONAL_ATOM and self._is_action_atom(arg2):
            action = self.resolver.resolve_action(arg2.text, Tense.BASE)
            requirement = f"permission vs prohibition to {action}"
        else:
            requirement = "regulatory requirements"

        return RegulatoryConflict(
            regulation1=regulation1,
            regulation2=regulation2,
            requirement=requirement,
            affected_entity=self.resolver.resolve_entity(affected) if affected else "",
        )

    def _is_action_atom(self, expr: Expr) -> bool:
        text = atom_text(expr)
        if text is None:
            return False
        return text.startswith(EVENTUALITY_PREFIX) or self.resolver.has_action(text)

    def _describe_conflict_arg(self, arg: Expr) -> tuple[str, str]:
        """Return (description, entity operand) for one conflict argument."""
        if isinstance(arg, Atom):
            return describe_conflict_atom(arg.text, self.resolver), ""
        call = read_call(arg)
        if call is None:
            return arg.to_metta(), ""
        return describe_conflict_call(call, self.resolver), call.entity

    # --- violations ---

    def find_violations(self, exprs: list[Expr]) -> list[NecessaryViolation]:
        results: list[NecessaryViolation] = []
        for expr in exprs:
            inner = single_wrapped(expr)
            violation = self._parse_violation(inner) if inner is not None else None
            if violation is None:
                violation = self._parse_violation(expr)
            if violation is not None:
                results.append(violation)
        return results

    def _parse_violation(self, expr: Expr) -> NecessaryViolation | None:
        if not matches(expr, QUOTE_PATTERN):
            return None
        pair = expr[1]
        if not isinstance(pair, SList) or len(pair) != 2:
            return None
        violator_expr, rule_expr = pair[0], pair[1]
        if not isinstance(violator_expr, SList) or not isinstance(rule_expr, SList):
            return None
        violator_call = read_call(violator_expr)
        rule_call = read_call(rule_expr)
        if violator_call is None or rule_call is None:
            return None
        return NecessaryViolation(
            violated_rule=describe_rule_call(rule_call),
            violator=describe_violator_call(violator_call, self.resolver),
            reason=VIOLATION_REASON,
        )

    # --- compliances ---

    def find_compliances(self, exprs: list[Expr]) -> list[ComplianceRelation]:
        results: list[ComplianceRelation] = []
        for expr in exprs:
            for candidate in self_and_children(expr):
                fields = extract(candidate, COMPLIED_PATTERN)
                if len(fields) == 2 and all(isinstance(item, Atom) for item in candidate.items[1:]):
                    obligation, entity = fields
                    results.append(
                        ComplianceRelation(
                            entity=self.resolver.resolve_entity(entity),
                            obligation=self.resolver.resolve_entity(obligation),
                            fulfilled_by=entity,
                        )
                    )

            pair = single_wrapped(expr)
            pair = pair if pair is not None else expr
            compliance = self._pair_compliance(pair)
            if compliance is not None:
                results.append(compliance)
        return results

    def _pair_compliance(self, expr: Expr) -> ComplianceRelation | None:
        if not isinstance(expr, SList) or len(expr) != 2:
            return None
        first, second = atom_text(expr[0]), atom_text(expr[1])
        if first is None or second is None:
            return None
        if not first.startswith(SOA_PREFIX) or not second.startswith(SOA_PREFIX):
            return None

        if "en" in second and "en" not in first:
            obligation, entity = second, first
        else:
            obligation, entity = first, second
        return ComplianceRelation(
            entity=self.resolver.resolve_entity(entity),
            obligation=self.resolver.resolve_entity(obligation),
            fulfilled_by=entity,
        )
