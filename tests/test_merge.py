import pytest

from chicli.fuzzy.core.rule import Rule
from chicli.fuzzy.core.types import InferenceType, MergeError, RuleWeight
from chicli.fuzzy.model.dataset import CATEGORICAL, NUMERICAL, Attribute, Dataset
from chicli.fuzzy.model.knowledge import DataBase
from chicli.fuzzy.model.rulebase import RuleBase, merge

DATASET = Dataset((
    Attribute("x", NUMERICAL, 0.0, 10.0),
    Attribute("class", CATEGORICAL, values=("A", "B")),
))


def _rb(rules, rule_weight=RuleWeight.PCF_IV, n_labels=3, positive_class=0):
    rb = RuleBase(DataBase.from_dataset(DATASET, n_labels), rule_weight=rule_weight,
                  classes=DATASET.class_names(), positive_class=positive_class)
    for antecedent, clas, weight in rules:
        rb.add(Rule(antecedent, clas, weight))
    return rb


def test_merge_keeps_first_occurrence():
    a = _rb([((0,), 0, 0.9)])
    b = _rb([((0,), 1, 0.5), ((2,), 1, 0.7)])

    ab = merge([a, b])
    assert [(r.antecedent, r.clas, r.weight) for r in ab] == [((0,), 0, 0.9), ((2,), 1, 0.7)]

    ba = merge([b, a])
    assert [(r.antecedent, r.clas, r.weight) for r in ba] == [((0,), 1, 0.5), ((2,), 1, 0.7)]


def test_merge_is_associative_for_a_fixed_order():
    a = _rb([((0,), 0, 0.9)])
    b = _rb([((1,), 1, 0.4), ((0,), 1, 0.5)], positive_class=1)
    c = _rb([((2,), 1, 0.7), ((1,), 0, 0.3)])

    flat = merge([a, b, c])
    assert merge([merge([a, b]), c]) == flat
    assert merge([a, merge([b, c])]) == flat
    assert len(flat) == 3
    assert flat.positive_class == a.positive_class


def test_merge_does_not_modify_inputs():
    a = _rb([((0,), 0, 0.9)])
    b = _rb([((2,), 1, 0.7)])
    merge([a, b])
    assert len(a) == 1 and len(b) == 1


def test_merge_rejects_different_metadata():
    a = _rb([((0,), 0, 0.9)])
    with pytest.raises(MergeError):
        merge([a, _rb([], rule_weight=RuleWeight.CF)])
    with pytest.raises(MergeError):
        merge([a, _rb([], n_labels=5)])
    other = _rb([])
    other.inference_type = InferenceType.ADDITIVE_COMBINATION
    with pytest.raises(MergeError):
        merge([a, other])


def test_merge_nothing():
    with pytest.raises(MergeError):
        merge([])


def test_fold_counts_duplicates():
    a = _rb([((0,), 0, 0.9), ((1,), 0, 0.2)])
    b = _rb([((1,), 1, 0.5), ((2,), 1, 0.7)])
    assert a.fold(b) == 1
    assert [r.antecedent for r in a] == [(0,), (1,), (2,)]
