from mettanorm.semantic import PatternType, detect_pattern, find_patterns_of_type
from mettanorm.sexpr import parse_all, parse_one


def test_detect_each_pattern():
    assert detect_pattern(parse_one("(triple soa_epam type rexist)")) is PatternType.STATE_OF_AFFAIRS_ASSERTION
    assert detect_pattern(parse_one("(id_not_not_false soa_emam)")) is PatternType.CONTRADICTION_DETECTION
    assert detect_pattern(parse_one("(conflict not_opt soa_elam)")) is PatternType.CONFLICT_IDENTIFICATION
    assert detect_pattern(parse_one("(quote ((a) (b)))")) is PatternType.VIOLATION_NECESSITY
    assert detect_pattern(parse_one("(is_complied_with_by a b)")) is PatternType.COMPLIANCE_FULFILLMENT


def test_near_misses_are_unknown():
    assert detect_pattern(parse_one("(triple soa_epam type soaPay)")) is PatternType.UNKNOWN
    assert detect_pattern(parse_one("(conflict not_opt)")) is PatternType.UNKNOWN
    assert detect_pattern(parse_one("soa_emam")) is PatternType.UNKNOWN


def test_find_patterns_of_type():
    exprs = parse_all("(conflict a b) (triple x type rexist) (conflict c d)")
    found = find_patterns_of_type(exprs, PatternType.CONFLICT_IDENTIFICATION)
    assert [expr.to_metta() for expr in found] == ["(conflict a b)", "(conflict c d)"]
