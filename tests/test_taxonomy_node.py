import pytest

from ctparse.taxonomy_node import TaxonomyNode, identity, letter_prefix, load_nodes


def make_tree():
    root = TaxonomyNode("root")
    d1 = TaxonomyNode("Diabetes")
    c1 = TaxonomyNode("Type 1")
    c1.add_synonym("type 1", "juvenile", "t1d")
    c1.add_tree_number("C18.452")
    c2 = TaxonomyNode("Type 2")
    c2.add_synonym("type 2", "t2d")
    c2.add_tree_number("C19.246", "E01.1")
    d1.add_child(c1)
    d1.add_child(c2)
    root.add_child(d1)
    return root, d1, c1, c2


def test_identity():
    assert identity("abc") == ("abc", "abc")


def test_letter_prefix():
    assert letter_prefix("C18.452") == "C"
    assert letter_prefix("") == ""
    assert letter_prefix("abc") == "abc"


def test_all_synonyms_and_tree_numbers():
    root, d1, c1, c2 = make_tree()
    assert root.all_synonyms() == c1.synonyms | c2.synonyms
    assert d1.all_tree_numbers() == c1.tree_numbers | c2.tree_numbers
    # only direct children contribute tree numbers
    assert root.all_tree_numbers() == set()


def test_categories():
    root, _, c1, c2 = make_tree()
    expected = {letter_prefix(tn) for tn in c1.tree_numbers | c2.tree_numbers}
    assert root.categories() == expected


def test_size_and_leafs():
    root, _, c1, c2 = make_tree()
    assert root.size(0, 1) == 1
    assert root.size(0, 2) == 2
    assert root.leafs() == len(c1.synonyms) - 1 + len(c2.synonyms) - 1


def test_update_merges_into_leaf():
    root, _, c1, _ = make_tree()
    extra = TaxonomyNode("TYPE 1")
    extra.add_synonym("iddm")
    extra.add_tree_number("C20.1")
    assert root.update(extra)
    assert "iddm" in c1.synonyms
    assert "C20.1" in c1.tree_numbers


def test_update_without_match():
    root, *_ = make_tree()
    assert not root.update(TaxonomyNode("missing"))


def test_normalize_adds_both_forms():
    node = TaxonomyNode("x")
    node.add_synonym("Abc")
    child = TaxonomyNode("y")
    child.add_synonym("Def")
    node.add_child(child)
    node.normalize(lambda s: (s.lower(), s.upper()))
    assert node.synonyms == {"abc", "ABC"}
    assert child.synonyms == {"def", "DEF"}


def test_load_nodes(tmp_path):
    path = tmp_path / "nodes.tsv"
    path.write_text(
        "Asthma\twheezing\tC08.127|C08.381\n"
        "\n"
        "asthma\tbronchial asthma\n"
        "Gout\tpodagra\n",
        encoding="utf-8",
    )
    nodes = load_nodes(path)
    assert [n.name for n in nodes] == ["Asthma", "Gout"]
    assert nodes[0].synonyms == {"Asthma", "wheezing", "bronchial asthma"}
    assert nodes[0].tree_numbers == {"C08.127", "C08.381"}
    assert nodes[1].tree_numbers == set()


def test_load_nodes_joins_files(tmp_path):
    first = tmp_path / "a.tsv"
    second = tmp_path / "b.tsv"
    first.write_text("Gout\tpodagra\n", encoding="utf-8")
    second.write_text("GOUT\tgouty arthritis\n", encoding="utf-8")
    nodes = load_nodes(first, second)
    assert len(nodes) == 1
    assert nodes[0].synonyms == {"Gout", "podagra", "gouty arthritis"}


@pytest.mark.parametrize("line", ["onlyone\n", "a\tb\tc\td\n"])
def test_load_nodes_bad_columns(tmp_path, line):
    path = tmp_path / "bad.tsv"
    path.write_text(line, encoding="utf-8")
    with pytest.raises(ValueError):
        load_nodes(path)