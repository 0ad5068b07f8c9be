# ctparse

`ctparse` turns the free-text eligibility criteria of clinical studies into
structured relations such as "a1c > 5.7 %" or "ecog in {0, 1, 2}", and
matches free-text terms against a vocabulary taxonomy.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install ".[test]"
pytest
```

The package has no dependencies beyond the standard library.

## Splitting eligibility text into criteria

```python
from ctparse import criteria_text

text = criteria_text.normalize(raw_eligibility_text)
for block in criteria_text.extract_inclusion_criteria(text):
    for line in criteria_text.split(block):
        print(criteria_text.trim_criterion(line))
```

`normalize` removes non-informative lines such as "Does not meet inclusion
criteria". `extract_exclusion_criteria` works like
`extract_inclusion_criteria` for the exclusion blocks. `split` breaks a block
at blank lines and attaches bulleted lines to a preceding "the following"
header.

## Parsing items with the grammar

Criteria are parsed from sequences of typed items (`ctparse.items.Item`
with an `ItemType` such as `VARIABLE`, `COMPARISON`, `NUMBER` or `UNIT`).
A `ContextFreeGrammar` builds parse trees from them with the CYK algorithm,
and the trees are turned into relations joined by "or" or by "and":

```python
from ctparse.cfg import ContextFreeGrammar
from ctparse.items import Item, ItemType
from ctparse.rules import CRITERION_RULES
from ctparse.tree import trees_relations

grammar = ContextFreeGrammar(CRITERION_RULES)
items = [
    Item(ItemType.VARIABLE, "a1c"),
    Item(ItemType.COMPARISON, ">"),
    Item(ItemType.NUMBER, "5.7"),
    Item(ItemType.UNIT, "%"),
]
or_relations, and_relations = trees_relations(grammar.build_trees(items))
```

`ctparse.items` also has helpers to clean up item sequences:
`trim_unknown_items`, `trim_known_items`, `trim_range_items`, `trim_items`
and `fix_missing_variable`, which infers a missing variable from a unit such
as "kg" or "kg/m2".

## Relations

Relations are post-processed with the helpers in `ctparse.relation`:

- `process_relations` splits composite variables such as "sbp/dbp", fills in
  variable types and default units, normalizes ordinal values (including
  Roman numerals) and drops invalid relations;
- `negate_relations` inverts them, as needed for exclusion criteria;
- `transform_relations` turns numeric literals such as `1,000,000`, `27,1`
  or `1.0 x10^6` into valid float strings, and sets the score to zero when it
  cannot.

Each `Relation` serialises with `to_json()` and reads back with
`parse_relation()`; `relations_to_json` serialises a list.
`ctparse.criterion.Criterion` holds a criterion text with its relations.

## Catalogs

The variables and units the grammar results are resolved against live in
catalogs. `ctparse.variables.default_catalog()` and
`ctparse.units.default_catalog()` provide a small built-in set. Larger
catalogs are read from CSV files with `load_variables(path)` and
`load_units(path)` and installed with `set_catalog(...)`, which returns the
catalog it replaced; `get_catalog()` returns the one in use.

## Vocabulary taxonomy

```python
from ctparse.mesh_normalize import normalize
from ctparse.taxonomy import Taxonomy
from ctparse.taxonomy_node import TaxonomyNode, load_nodes

taxonomy = Taxonomy(TaxonomyNode("root"))
taxonomy.add_nodes(load_nodes("terms.tsv"))
taxonomy.set_base_index()
taxonomy.normalize(normalize)
for term in taxonomy.match("type ii diabetes", 0.1, set()):
    print(term)
```

`load_nodes` reads tab-separated lines of concept name, synonym and optional
`|`-separated tree numbers. `match` scores synonyms by the similarity of
their character trigrams and returns the best terms within the given delta
of the top score, optionally restricted to a set of categories.
`Taxonomy.info()` prints and returns node counts, and `Taxonomy.store(path,
sep)` writes the taxonomy to a file. `ctparse.mesh_categories` has helpers
for MeSH tree numbers and top-level categories.

## What the package does not do

- It has no tokenizer for raw criterion sentences: it does not turn text
  such as "a1c greater than 5.0%" into items. Items must be supplied by the
  caller.
- It does not read MeSH descriptor XML dumps or UMLS concept files; a
  taxonomy is built from `TaxonomyNode` objects or tab-separated files read
  with `load_nodes`.
- It has no command-line program.