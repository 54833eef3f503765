from mettanorm.knowledge import (
    Entity,
    Eventuality,
    KnowledgeSet,
    check_predicate,
    is_valid_eventuality_type,
    is_valid_modality,
    is_valid_role,
    validate_entities,
    validate_eventualities,
    validate_eventuality,
)


def _knowledge(*eventualities: Eventuality) -> KnowledgeSet:
    return KnowledgeSet(eventualities={e.name: e for e in eventualities})


def _moor(name: str = "soa_emam", **overrides) -> Eventuality:
    fields = {
        "type": "soaMoor",
        "agent": "soa_ALEXANDRA_MAERSK",
        "modality": "rexist",
    }
    fields.update(overrides)
    return Eventuality(name, **fields)


def test_vocabularies():
    assert is_valid_eventuality_type("soaMoor")
    assert is_valid_eventuality_type("Pay")
    assert not is_valid_eventuality_type("soaFly")
    assert is_valid_role("soaHas_instrument")
    assert is_valid_role("soaHas_initial-location")
    assert not is_valid_role("instrument")
    assert is_valid_modality("obligatory")
    assert not is_valid_modality("forbidden")


def test_well_formed_eventuality_has_no_errors():
    assert validate_eventualities(_knowledge(_moor())) == []


def test_wrong_name_reports_expected_name():
    errors = validate_eventualities(_knowledge(_moor("soa_wrongname")))
    assert len(errors) == 1
    assert "soa_wrongname" in errors[0]
    assert "Expected: 'soa_emam'" in errors[0]


def test_errors_accumulate_for_one_eventuality():
    bad = _moor(
        "soa_ezz",
        type="soaFly",
        agent="",
        modality="",
        roles={"soaHas_colour": "red", "soaHas_instrument": "soa_USDS"},
    )
    errors = validate_eventualities(_knowledge(bad))
    assert any("invalid type 'soaFly'" in e for e in errors)
    assert any("missing agent" in e for e in errors)
    assert any("missing modality" in e for e in errors)
    assert any("invalid role 'soaHas_colour'" in e for e in errors)
    assert not any("soaHas_instrument" in e for e in errors)


def test_naming_is_checked_even_without_agent():
    errors = validate_eventualities(_knowledge(_moor("soa_x", agent="")))
    assert "Eventuality 'soa_x' is missing agent (soaHas_agent)" in errors
    assert "Eventuality 'soa_x' does not follow naming convention. Expected: ''" in errors


def test_non_existence_modality_is_reported():
    errors = validate_eventualities(_knowledge(_moor(modality="obligatory")))
    assert errors == ["Eventuality 'soa_emam' has modality 'obligatory', expected 'rexist'"]


def test_validate_eventuality_is_lenient():
    assert validate_eventuality(Eventuality("soa_emam")) is None
    assert validate_eventuality(Eventuality("")) == "Eventuality has no name"


def test_check_predicate_accepts_known_and_flags_unknown():
    assert check_predicate("type")
    assert check_predicate("soaHas_agent")
    assert not check_predicate("likes")


def test_validate_entities_reports_missing_type_and_name_clash():
    knowledge = _knowledge(_moor())
    knowledge.entities = {
        "soa_MICT": Entity("soa_MICT", "smartport"),
        "soa_LAURA": Entity("soa_LAURA"),
        "soa_emam": Entity("soa_emam", "soaContainerVessel"),
    }
    errors = validate_entities(knowledge)
    assert errors == [
        "Entity 'soa_LAURA' is missing type",
        "Entity 'soa_emam' conflicts with an eventuality of the same name",
    ]
