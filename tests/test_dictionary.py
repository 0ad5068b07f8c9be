import pytest

from ctparse.dictionary import PhraseDictionary, customize_slash


@pytest.fixture
def dictionary():
    d = PhraseDictionary()
    d.put("weight", "weigh*", "body weigh*")
    d.put("ecog", "ecog", "eastern cooperative oncology group")
    return d


def test_exact_alias(dictionary):
    assert dictionary.get("ecog") == "ecog"
    assert dictionary.get("eastern cooperative oncology group") == "ecog"


def test_prefix_matches_but_has_no_name(dictionary):
    assert dictionary.match("eastern cooperative")
    assert dictionary.get("eastern cooperative") is None


def test_wildcard_alias(dictionary):
    assert dictionary.get("weigh") == "weight"
    assert dictionary.get("weighs") == "weight"
    assert dictionary.get("body weight") == "weight"
    assert dictionary.match("body")
    assert dictionary.get("body") is None


def test_case_insensitive(dictionary):
    assert dictionary.get("ECOG") == "ecog"


def test_no_match(dictionary):
    assert not dictionary.match("height")
    assert dictionary.get("height") is None
    assert not dictionary.match("ecog greater")
    assert not dictionary.match("")


def test_customize_slash_variants():
    alias = "kg/m2"
    variants = customize_slash(alias)
    assert variants[0] == alias
    assert len(variants) == len(set(variants))
    for variant in variants:
        assert variant.replace(" ", "") == alias


def test_customize_slash_without_slash():
    assert customize_slash("bmi") == ["bmi"]


def test_slash_variants_resolve():
    d = PhraseDictionary()
    d.put("kg/m2", *customize_slash("kg/m2"))
    for sep in ("/", " / ", "/ ", " /"):
        assert d.get("kg/m2".replace("/", sep)) == "kg/m2"
    assert d.match("kg")