from mettanorm.knowledge import (
    ExpressionKind,
    LogicalExpression,
    LogicalOperator,
    Negation,
    Norm,
    Triple,
    TripleKind,
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
from mettanorm.knowledge.models import Condition
from mettanorm.sexpr import parse_one


def test_parse_fact_and_meta_triples():
    fact = parse_triple(parse_one("(ct-triple soa_emam type soaMoor)"))
    assert fact == Triple("soa_emam", "type", "soaMoor")
    meta = parse_triple(parse_one("(meta-triple soa_emam type rexist)"))
    assert meta.kind is TripleKind.META


def test_nested_object_is_stored_as_canonical_text():
    triple = parse_triple(parse_one("(ct-triple soa_epam soaHas_amount [15000 USDS])"))
    assert triple.object == "(15000 USDS)"
    assert triple.object_is_nested


def test_wrong_shapes_are_not_triples():
    assert parse_triple(parse_one("(ct-triple a b)")) is None
    assert parse_triple(parse_one("(triple a b c)")) is None
    assert parse_triple(parse_one("(ct-triple (a) b c)")) is None
    assert parse_triple_text("(ct-triple a b") is None


def test_triple_round_trip():
    for triple in [
        Triple("soa_emam", "soaHas_agent", "soa_ALEXANDRA_MAERSK"),
        Triple("soa_x", "type", "rexist", TripleKind.META),
        Triple("soa_epam", "soaHas_amount", "(15000 (USDS cents))", object_is_nested=True),
    ]:
        assert parse_triple_text(triple.to_metta()) == triple


def test_negation_parse_and_round_trip():
    negation = parse_negation(parse_one("(ct-simple-not soa_enmam soa_emam)"))
    assert negation == Negation("soa_enmam", "soa_emam")
    assert parse_negation(parse_one(negation.to_metta())) == negation
    assert parse_negation(parse_one("(ct-simple-not soa_enmam)")) is None


def test_logical_or_and_and():
    disjunction = parse_logical_expression(parse_one("(= (ct-or soa_eo) (soa_emam soa_enmam))"))
    assert disjunction == LogicalExpression(LogicalOperator.OR, "soa_eo", ["soa_emam", "soa_enmam"])
    conjunction = parse_logical_expression(parse_one("(= (ct-and soa_ea) (soa_epam soa_elam))"))
    assert conjunction.operator is LogicalOperator.AND


def test_other_heads_become_named_equal_expressions():
    expr = parse_logical_expression(parse_one("(= (is-paid soa_epam) (soa_USDS soa_INRS))"))
    assert expr.operator is LogicalOperator.EQUAL
    assert expr.name == "is-paid"
    assert expr.operands == ["soa_epam", "soa_USDS", "soa_INRS"]


def test_logical_expression_round_trip():
    for expr in [
        LogicalExpression(LogicalOperator.OR, "soa_eo", ["soa_emam", "soa_enmam"]),
        LogicalExpression(LogicalOperator.AND, "soa_ea", []),
        LogicalExpression(LogicalOperator.NOT, "soa_en", ["soa_emam"]),
        LogicalExpression(LogicalOperator.EQUAL, "is-paid", ["soa_epam", "soa_USDS"]),
        LogicalExpression(LogicalOperator.EQUAL, "flag", []),
    ]:
        assert parse_logical_expression(parse_one(expr.to_metta())) == expr


def test_not_a_logical_expression():
    assert parse_logical_expression(parse_one("(= soa_a soa_b)")) is None
    assert parse_logical_expression(parse_one("(ct-or soa_a soa_b)")) is None


def test_entity_from_type_triple_outside_eventuality_namespace():
    assert parse_entity(Triple("soa_MICT", "type", "smartport")).type == "smartport"
    assert parse_entity(Triple("soa_emam", "type", "soaMoor")) is None
    assert parse_entity(Triple("soa_MICT", "soaHas_location", "manila")) is None


def test_expression_kind_dispatch():
    assert expression_kind(parse_one("(ct-triple a b c)")) is ExpressionKind.TRIPLE
    assert expression_kind(parse_one("(ct-simple-not a b)")) is ExpressionKind.NEGATION
    assert expression_kind(parse_one("(= (ct-or a) (b))")) is ExpressionKind.LOGICAL_OR
    assert expression_kind(parse_one("(= (ct-and a) (b))")) is ExpressionKind.LOGICAL_AND
    assert expression_kind(parse_one("(= (rule a) (b))")) is ExpressionKind.LOGICAL_EQUAL
    assert expression_kind(parse_one("(conflict a b)")) is ExpressionKind.UNKNOWN
    assert isinstance(parse_expression(parse_one("(ct-simple-not a b)")), Negation)
    assert parse_expression(parse_one("soa_x")) is None


def test_meta_expression_fields():
    meta = parse_meta_expression(parse_one("(meta-id soa_epmuam type rexist false)"))
    assert (meta.id, meta.type, meta.property, meta.value) == ("soa_epmuam", "type", "rexist", "false")
    assert parse_meta_expression(parse_one("(meta-id soa_x)")).type == ""


def test_parse_norm_with_let_bindings():
    norm = parse_norm_text(
        "(= (pay-obligatory $v $port) "
        "(let* (($e (ct-triple $e type soaPay)) ($a (ct-triple $e soaHas_agent $v))) True))"
    )
    assert norm.name == "pay-obligatory"
    assert norm.parameters == ["$v", "$port"]
    assert norm.conditions == [
        Condition("$e", "ct-triple $e type soaPay"),
        Condition("$a", "ct-triple $e soaHas_agent $v"),
    ]


def test_norm_render_then_parse_keeps_header_and_conditions():
    norm = Norm("leave-permitted", ["$v"], [Condition("$e", "ct-triple $e type soaLeave")])
    parsed = parse_norm_text(norm.to_metta())
    assert parsed == norm


def test_parse_norm_rejects_logical_and_consequence_rules():
    assert parse_norm(parse_one("(= (ct-or soa_eo) (a b))")) is None
    assert parse_norm(parse_one("(= (ct-triple-for-add a b c) (let* ((True (r))) True))")) is None


def test_parse_consequence_links_triple_to_norm():
    norm_name, triple = parse_consequence(
        parse_one("(= (ct-triple-for-add $e type obligatory) (let* ((True (pay-obligatory $v))) True))")
    )
    assert norm_name == "pay-obligatory"
    assert triple == Triple("$e", "type", "obligatory")
