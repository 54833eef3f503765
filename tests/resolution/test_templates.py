from mettanorm.config import InferenceConfig
from mettanorm.resolution import DescriptionTemplates, substitute


def test_substitute_leaves_unknown_placeholders():
    assert substitute("{a} and {b}", {"a": "x"}) == "x and {b}"


def test_contradiction_descriptions_by_kind():
    templates = DescriptionTemplates()
    assert templates.contradiction_description("ALEXANDRA MÆRSK", "", "existence") == (
        "Contradiction: ALEXANDRA MÆRSK cannot both exist and not exist"
    )
    assert templates.contradiction_description("ALEXANDRA MÆRSK", "moor", "action") == (
        "Contradiction: ALEXANDRA MÆRSK cannot both moor and not moor at the same time"
    )
    assert templates.contradiction_description("ALEXANDRA MÆRSK", "", "action") == (
        "Contradiction: ALEXANDRA MÆRSK cannot both act and not act at the same time"
    )


def test_payment_contradiction_names_the_other_instrument():
    templates = DescriptionTemplates()
    assert templates.contradiction_description("x", "", "payment_method", "USDS") == (
        "Contradiction: Payment declared in USDS but INRS is required"
    )
    assert templates.contradiction_description("x", "", "payment_method", "INRS") == (
        "Contradiction: Payment declared in INRS but USDS is required"
    )


def test_conflict_description_picks_payment_template_from_reason():
    templates = DescriptionTemplates()
    assert templates.conflict_description("EU MiCA", "MICT", "leave") == (
        "Regulatory conflict: EU MiCA prohibits leave while MICT requires it"
    )
    assert templates.conflict_description("EU MiCA", "MICT", "payment in INRS") == (
        "EU MiCA faces a conflict: EU MiCA conflicts with MICT regarding payment in INRS"
    )


def test_violation_and_compliance_descriptions():
    templates = DescriptionTemplates()
    assert templates.violation_description("ALEXANDRA MÆRSK", "departure rule", "unpaid fees") == (
        "The departure rule must be violated due to unpaid fees"
    )
    assert templates.compliance_description("epam15k", "ALEXANDRA MÆRSK", "paying") == (
        "epam15k successfully fulfills ALEXANDRA MÆRSK by paying"
    )


def test_configured_template_overrides_default():
    templates = DescriptionTemplates(
        InferenceConfig(violation_templates={"necessary": "{violator} breaks {rule}"})
    )
    assert templates.violation_description("LAURA MÆRSK", "mooring rule", "") == (
        "LAURA MÆRSK breaks mooring rule"
    )
    assert "{" not in templates.compliance_description("a", "b", "c")
