from ctparse.criteria_text import (
    check_line,
    extract_exclusion_criteria,
    extract_inclusion_criteria,
    normalize,
    split,
    trim_criterion,
)


def test_normalize():
    text = "Inclusion Criteria:\ni1\ni2\nExclusion Criteria:\nDoes not meet inclusion criteria.\ne1\ne2"
    assert normalize(text) == "Inclusion Criteria:\ni1\ni2\nExclusion Criteria:\ne1\ne2"


def test_normalize_without_exclusion_criteria():
    text = "Inclusion Criteria:\ni1\ni2\nExclusion Criteria:\nDoes not meet inclusion criteria.\n"
    assert normalize(text) == "Inclusion Criteria:\ni1\ni2\nExclusion Criteria:\n"


def test_extract_criteria():
    text = "Inclusion:\ni1\ni2\nExclusion:\ne1\ne2"
    assert extract_inclusion_criteria(text) == ["i1\ni2"]
    assert extract_exclusion_criteria(text) == ["e1\ne2"]


def test_extract_criteria_long():
    text = "Inclusion criteria for all:\ni1\ni2\nSubject exclusion criteria:\ne1\ne2"
    assert extract_inclusion_criteria(text) == ["i1\ni2"]
    assert extract_exclusion_criteria(text) == ["e1\ne2"]


def test_extract_criteria_multiple():
    text = "Inclusion:\ni1\ni2\nExclusion:\ne1\ne2\nInclusion:\nj1\nj2\nExclusion:\nf1\nf2"
    assert extract_inclusion_criteria(text) == ["i1\ni2", "j1\nj2"]
    assert extract_exclusion_criteria(text) == ["e1\ne2", "f1\nf2"]


def test_extract_criteria_messy():
    text = "Inclusion Criteria\ni1\ni2 Exclusion Criteria.\nKey Exclusion Criteria\nInclusion criteria. e1\ne2"
    assert extract_inclusion_criteria(text) == ["i1\ni2 Exclusion Criteria."]
    assert extract_exclusion_criteria(text) == ["Inclusion criteria. e1\ne2"]


def test_extract_criteria_without_exclusions():
    text = normalize(
        "Inclusion Criteria:\ni1\ni2\nExclusion Criteria:\nDoes not meet inclusion criteria.\n"
    )
    assert extract_inclusion_criteria(text) == ["i1\ni2"]
    assert extract_exclusion_criteria(text) == []


def test_extract_criteria_with_extra_words():
    text = normalize(
        "i) INCLUSION/EXCLUSION CRITERIA:\nStudy eligibility: General Inclusions:\n"
        "Inclusions: 1. one\nKey Exclusion Criteria:\n Exclusions: 2. two"
    )
    assert extract_inclusion_criteria(text) == ["Inclusions: 1. one"]
    assert extract_exclusion_criteria(text) == ["Exclusions: 2. two"]


def test_extract_criteria_with_missing_newlines():
    text = (
        "Study eligibility: General Inclusion Criteria : Inclusions: 1. one\n"
        "Key Exclusion Criteria: Exclusions: 2. two"
    )
    assert extract_inclusion_criteria(text) == ["Inclusions: 1. one"]
    assert extract_exclusion_criteria(text) == ["Exclusions: 2. two"]


def test_trim_criterion():
    assert trim_criterion("5. Agree to participate  ") == "Agree to participate"
    assert trim_criterion("- Agree to participate  ") == "Agree to participate"
    assert trim_criterion("  -   78 Agree to participate  ") == "Agree to participate"
    assert trim_criterion("prior A1c 5.7 - 6.4") == "prior A1c 5.7 - 6.4"


def test_check_following_line():
    line = "-  No clinically significant cardiovascular disease, including any of the following"
    rule, header, found_tab = check_line(line, "", False)
    assert rule == ""
    assert header == line
    assert found_tab is True


def test_check_bullet_line():
    line = " -  Sentinel node biopsy alone (if sentinel node is negative)"
    header = "-  Axilla must be staged by one of the following"
    rule, new_header, found_tab = check_line(line, header, True)
    assert rule == header + " " + trim_criterion(line)
    assert new_header == header
    assert found_tab is True


def test_check_number_line():
    line = " 3. Sentinel node biopsy alone (if sentinel node is negative)"
    header = "-  Axilla must be staged by one of the following"
    rule, new_header, found_tab = check_line(line, header, True)
    assert rule == header + " " + trim_criterion(line)
    assert new_header == header
    assert found_tab is True


def test_check_normal_line_before():
    line = (
        "-  Multifocal breast cancer is allowed if the intent is to undergo "
        "resection through a single lumpectomy incision"
    )
    rule, header, found_tab = check_line(line, "", False)
    assert rule == line
    assert header == ""
    assert found_tab is False


def test_check_normal_line_after():
    line = "Appropriate stage for protocol entry including no clinical evidence for distant metastases"
    rule, header, found_tab = check_line(line, "-  Axilla must be staged by the following", True)
    assert rule == line
    assert header == ""
    assert found_tab is False


def test_split():
    text = (
        "6. Meet the following criteria:\n\n"
        "              - cr 1\n\n"
        "              - cr 2\n\n"
        "              - cr 3"
    )
    assert split(text) == [
        "6. Meet the following criteria: cr 1",
        "6. Meet the following criteria: cr 2",
        "6. Meet the following criteria: cr 3",
    ]


def test_split_without_headers():
    text = "a\n\nb"
    assert split(text) == ["a", "b"]