from mettanorm.knowledge import (
    Condition,
    Entity,
    KnowledgeDocument,
    KnowledgeSet,
    Negation,
    Norm,
    Triple,
    read_document,
    read_knowledge_set,
    read_norms,
    write_document,
    write_knowledge_set,
    write_norms,
)


def _norm() -> Norm:
    return Norm(
        "inrs-prohibited",
        ["$v"],
        [Condition("$e", "ct-triple $e soaHas_instrument soa_INRS")],
        [Triple("$e", "type", "optional")],
        "EU MiCA prohibits INRS payments",
    )


def test_document_written_then_read_back(tmp_path):
    knowledge = KnowledgeSet(
        facts=[
            Triple("soa_epam", "type", "rexist"),
            Triple("soa_epam", "type", "soaPay"),
            Triple("soa_epam", "soaHas_agent", "soa_ALEXANDRA_MAERSK"),
        ],
        negations=[Negation("soa_enpam", "soa_epam")],
        description="payment at MICT",
    )
    document = KnowledgeDocument(header=["Generated norms"], norms=[_norm()], knowledge=knowledge)
    path = tmp_path / "port.metta"
    write_document(path, document)

    loaded, diagnostics = read_document(path)
    assert diagnostics == []
    assert loaded.header == ["Generated norms"]
    assert loaded.norms == [_norm()]
    assert loaded.knowledge.facts == knowledge.facts
    assert loaded.knowledge.negations == knowledge.negations
    assert loaded.knowledge.description == "payment at MICT"
    assert loaded.knowledge.eventualities["soa_epam"].is_valid()


def test_norms_file_round_trip(tmp_path):
    path = tmp_path / "norms.metta"
    write_norms(path, [_norm()], header=["Norms"])
    assert read_norms(path) == [_norm()]


def test_knowledge_set_file_round_trip(tmp_path):
    knowledge = KnowledgeSet(
        entities={"soa_MICT": Entity("soa_MICT", "smartport", {"soaHas_location": "manila"})},
    )
    path = tmp_path / "soa.metta"
    write_knowledge_set(path, knowledge)

    loaded, diagnostics = read_knowledge_set(path)
    assert diagnostics == []
    assert loaded.entities["soa_MICT"] == knowledge.entities["soa_MICT"]
