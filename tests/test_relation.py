import pytest

from ctparse import variables
from ctparse.relation import (
    Limit,
    Relation,
    dedupe_relations,
    min_score,
    negate_relations,
    new_categorical,
    parse_relation,
    process_relations,
    relations_to_json,
    set_score,
    sort_relations,
    transform_relations,
    variable_ids,
)
from ctparse.variables import VariableType, ZERO

NUM = VariableType.NUMERICAL
ORD = VariableType.ORDINAL


def test_json():
    rs = [
        Relation(name="a", variable_type=VariableType.NOMINAL),
        Relation(name="b", variable_type=ORD),
    ]
    expected = (
        '[{"name":"a","variableType":"nominal","score":0},'
        '{"name":"b","variableType":"ordinal","score":0}]'
    )
    assert relations_to_json(rs) == expected


def test_normalize():
    value_range = ["0", "1", "2", "3", "4"]
    actual = Relation(
        name="a",
        lower=Limit(False, "0"),
        upper=Limit(True, "2"),
        value=["5"],
        variable_type=ORD,
    )
    actual.normalize(value_range)
    assert actual == Relation(name="a", value=["1", "2"], variable_type=ORD)


def test_negate():
    value_range = ["0", "1", "2", "3", "4"]
    actual = Relation(name="a", value=["3", "4"], variable_type=ORD)
    actual.normalize(value_range)
    actual.negate(value_range)
    assert actual == Relation(name="a", value=["0", "1", "2"], variable_type=ORD)


def test_transform_good_value():
    actual = Relation(id=ZERO, upper=Limit(True, "1,000,000"), variable_type=NUM)
    actual.transform()
    assert actual == Relation(id=ZERO, upper=Limit(True, "1000000"), variable_type=NUM)


def test_transform_bad_value():
    actual = Relation(id=ZERO, upper=Limit(True, "xyz"), variable_type=NUM, score=1)
    actual.transform()
    assert actual == Relation(id=ZERO, upper=Limit(True, "xyz"), variable_type=NUM, score=0)


def test_transform_missing_zero():
    actual = Relation(id=ZERO, lower=Limit(True, "100,00"), variable_type=NUM)
    actual.transform()
    assert actual == Relation(id=ZERO, lower=Limit(True, "100000"), variable_type=NUM)


def test_transform_radix():
    actual = Relation(id=ZERO, lower=Limit(True, "27,1"), variable_type=NUM)
    actual.transform()
    assert actual == Relation(id=ZERO, lower=Limit(True, "27.1"), variable_type=NUM)


def test_transform_scientific_form_value():
    actual = Relation(id=ZERO, upper=Limit(True, "1.0  x10^6"), variable_type=NUM)
    actual.transform()
    assert actual == Relation(id=ZERO, upper=Limit(True, "1.0e6"), variable_type=NUM)


def test_transform_times_sign():
    actual = Relation(id="404", lower=Limit(True, "100 × 109"), variable_type=NUM, score=1)
    actual.transform()
    assert actual.lower.value == "100e9"
    assert actual.score == 1


def test_transform_wbc_keeps_missing_zero():
    actual = Relation(id="404", lower=Limit(True, "100,00"), variable_type=NUM, score=1)
    actual.transform()
    assert actual.lower.value == "10000"


@pytest.fixture
def ranged_catalog():
    previous = variables.get_catalog()
    catalog = variables.VariableCatalog()
    catalog.add("9", NUM, "x", "", ["x"], ["0", "10"], "", "")
    variables.set_catalog(catalog)
    yield catalog
    variables.set_catalog(previous)


def test_transform_out_of_range(ranged_catalog):
    actual = Relation(id="9", name="x", upper=Limit(True, "20"), variable_type=NUM, score=1)
    actual.transform()
    assert actual.score == 0
    assert actual.upper.value == "20"


def test_transform_in_range(ranged_catalog):
    actual = Relation(id="9", name="x", upper=Limit(True, "5"), variable_type=NUM, score=1)
    actual.transform()
    assert actual.score == 1


def test_parse_json_round_trip():
    s = (
        '{"id":"400","name":"a1c","unit":"%","lower":{"incl":false,"value":"5.7"},'
        '"upper":{"incl":false,"value":"10"},"variableType":"numerical","score":0}'
    )
    r = parse_relation(s)
    assert r.id == "400"
    assert r.lower == Limit(False, "5.7")
    assert r.to_json() == s


def test_parse_missing_fields():
    r = parse_relation('{"id":"100","name":"ecog","value":["0","1","2"]}')
    assert r == Relation(id="100", name="ecog", value=["0", "1", "2"])


def test_parse_invalid_json():
    with pytest.raises(ValueError):
        parse_relation("{not json")


def test_split_combination():
    r = Relation(
        id="302", name="sbp/dbp", lower=Limit(False, "140/90"), variable_type=NUM
    )
    parts = r.split()
    assert parts == [
        Relation(id="300", name="sbp", lower=Limit(False, "140"), variable_type=NUM),
        Relation(id="301", name="dbp", lower=Limit(False, "90"), variable_type=NUM),
    ]


def test_split_single_value_shared():
    r = Relation(name="ast/alt", upper=Limit(True, "2.0"), unit="uln", variable_type=NUM)
    parts = r.split()
    assert [p.upper for p in parts] == [Limit(True, "2.0"), Limit(True, "2.0")]
    assert [p.id for p in parts] == ["411", "412"]


def test_split_unknown_names_returns_self():
    r = Relation(name="foo/bar")
    assert r.split() == [r]


def test_process_relations():
    rs = [Relation(id="302", name="sbp/dbp", lower=Limit(False, "140/90"))]
    process_relations(rs)
    set_score(rs, 0)
    assert rs == [
        parse_relation(
            '{"id":"300","name":"sbp","lower":{"incl":false,"value":"140"},"variableType":"numerical"}'
        ),
        parse_relation(
            '{"id":"301","name":"dbp","lower":{"incl":false,"value":"90"},"variableType":"numerical"}'
        ),
    ]


def test_process_removes_invalid_and_sets_default_unit():
    rs = [
        Relation(id="904", name="pf_ratio", upper=Limit(False, "200")),
        Relation(id="200", name="age"),
    ]
    process_relations(rs)
    assert len(rs) == 1
    assert rs[0].unit == "mmhg"
    assert rs[0].variable_type == NUM


def test_process_ordinal_roman_numerals():
    rs = [Relation(id="102", name="nyha", value=["ii", "iii", "iv"])]
    process_relations(rs)
    assert rs[0].value == ["2", "3", "4"]


def test_negate_relations_numerical():
    rs = [Relation(id="202", name="weight", lower=Limit(False, "180"), variable_type=NUM)]
    negate_relations(rs)
    assert rs[0].lower is None
    assert rs[0].upper == Limit(True, "180")


def test_sort_and_less():
    a = Relation(id="203", name="bmi", lower=Limit(True, "30"), variable_type=NUM)
    b = Relation(id="203", name="bmi", upper=Limit(True, "25"), variable_type=NUM)
    c = Relation(id="100", name="ecog", value=["0"])
    rs = [a, b, c]
    sort_relations(rs)
    assert rs == [c, b, a]
    assert b.less(a)
    assert not a.less(c)


def test_dedupe_relations():
    rs = [Relation(id="2", name="b"), Relation(id="1", name="a"), Relation(id="2", name="b")]
    dedupe_relations(rs)
    assert [r.name for r in rs] == ["a", "b"]


def test_scores_and_ids():
    rs = [Relation(id="1", score=0.5), Relation(id="2", score=0.25)]
    assert min_score(rs) == 0.25
    assert min_score([]) == 0
    assert variable_ids(rs) == ["1", "2"]
    set_score(rs, 1)
    assert [r.score for r in rs] == [1, 1]


def test_is_valid():
    assert not Relation(name="a", variable_type=NUM, lower=Limit(True, "1")).is_valid()
    assert not Relation(id="1", name="a", variable_type=NUM).is_valid()
    assert Relation(id="1", name="a", variable_type=NUM, lower=Limit(True, "1")).is_valid()
    assert not Relation(id="1", name="a", variable_type=ORD).is_valid()


def test_human_readable():
    r = Relation(
        display_name="Age",
        lower=Limit(True, "18"),
        upper=Limit(True, "59"),
        unit="year",
        variable_type=NUM,
    )
    assert r.human_readable() == "Age ≥ 18 and Age ≤ 59 year"
    assert Relation(value=["1", "2"], variable_type=ORD).human_readable() == "1 or 2"


def test_new_categorical_and_transform_indifferent_boolean():
    v = variables.Variable("7", VariableType.BOOLEAN, "smoker", "Smoker")
    r = new_categorical(v, ["yes", "no"], 1.0)
    assert r.display_name == "Smoker"
    transform_relations([r])
    assert r.score == 0