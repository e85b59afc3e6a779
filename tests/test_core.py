import pytest

from chicli.fuzzy.core.mfs import Singleton, Triangular
from chicli.fuzzy.core.norms import TNORMS, t_min, t_prod
from chicli.fuzzy.core.types import (
    CompatibilityType, ConfigurationError, InferenceType, RuleWeight, parse_selector,
)
from chicli.fuzzy.model.variable import categorical_partition, uniform_partition


def test_tnorms():
    assert t_min([0.5, 0.2, 0.9]) == 0.2
    assert t_prod([0.5, 0.5]) == 0.25
    assert t_min([]) == 1.0
    assert t_prod([]) == 1.0
    assert TNORMS[CompatibilityType.MINIMUM] is t_min
    assert TNORMS[CompatibilityType.PRODUCT] is t_prod


def test_triangular_and_singleton():
    tri = Triangular(0.0, 5.0, 10.0)
    assert tri.mu(5.0) == 1.0
    assert tri.mu(2.5) == pytest.approx(0.5)
    assert tri.mu(0.0) == 0.0
    assert tri.mu(12.0) == 0.0
    assert Singleton(1.0).mu(1.0) == 1.0
    assert Singleton(1.0).mu(0.0) == 0.0


def test_uniform_partition_covers_the_range():
    var = uniform_partition("x", 0.0, 10.0, 3)
    assert var.n_labels() == 3
    assert [var.label_name(j) for j in range(3)] == ["L0", "L1", "L2"]
    assert var.mu(0, 0.0) == 1.0
    assert var.mu(1, 5.0) == 1.0
    assert var.mu(2, 10.0) == 1.0
    assert var.mu(0, 1.0) == pytest.approx(0.8)
    assert var.mu(1, 1.0) == pytest.approx(0.2)


def test_uniform_partition_constant_column():
    var = uniform_partition("x", 3.0, 3.0, 3)
    assert var.n_labels() == 3
    assert var.mu(0, 3.0) == 1.0


def test_categorical_partition():
    var = categorical_partition("color", ["blue", "red"])
    assert var.categorical
    assert var.mu(1, 1.0) == 1.0
    assert var.mu(0, 1.0) == 0.0


def test_selector_codes_are_distinct():
    assert len({int(w) for w in RuleWeight}) == len(RuleWeight)
    assert int(RuleWeight.PCF_II) != int(RuleWeight.NO_RW)
    assert int(CompatibilityType.MINIMUM) == 0
    assert int(InferenceType.ADDITIVE_COMBINATION) == 1


@pytest.mark.parametrize("name, expected", [
    ("Certainty_Factor", RuleWeight.CF),
    ("Penalized_Certainty_Factor", RuleWeight.PCF_IV),
    ("Average_Penalized_Certainty_Factor", RuleWeight.PCF_II),
    ("No_Weights", RuleWeight.NO_RW),
    (RuleWeight.CF, RuleWeight.CF),
    (3, RuleWeight.NO_RW),
])
def test_parse_rule_weight(name, expected):
    assert parse_selector(RuleWeight, name) is expected


def test_parse_selector_names():
    assert parse_selector(CompatibilityType, "minimum") is CompatibilityType.MINIMUM
    assert parse_selector(InferenceType, "Additive_Combination") is InferenceType.ADDITIVE_COMBINATION
    with pytest.raises(ConfigurationError):
        parse_selector(InferenceType, "Voting")
    with pytest.raises(ConfigurationError):
        parse_selector(RuleWeight, 9)
