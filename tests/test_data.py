import math
import random

import pytest

from chicli.fuzzy.core.types import ConfigurationError
from chicli.fuzzy.model.data import Data
from chicli.fuzzy.model.dataset import CATEGORICAL, NUMERICAL, Attribute, Dataset


def test_shards_are_contiguous_and_ordered(make_data):
    data = make_data([(i, "A") for i in range(10)])
    shards = data.shards(3)
    assert [len(s) for s in shards] == [4, 3, 3]
    assert [x for s in shards for x in s] == list(data)
    with pytest.raises(ConfigurationError):
        data.shards(0)


def test_label_distribution_and_positive_class(make_data):
    data = make_data([(1, "A"), (2, "B"), (3, "A"), (4, "C")], classes=("A", "B", "C"))
    assert data.count_labels() == [2, 1, 1]
    assert data.extract_labels() == [0, 1, 0, 2]
    # tie between B and C: lowest index
    assert data.positive_class() == 1
    assert data.positive_class_cost(1) == 3.0


def test_absent_positive_class_has_infinite_cost(make_data):
    data = make_data([(1, "A"), (2, "A")])
    assert data.positive_class() == 1
    assert math.isinf(data.positive_class_cost(1))


def test_majority_label_breaks_ties_randomly(make_data):
    data = make_data([(1, "A"), (2, "B")])
    seen = {data.majority_label(random.Random(seed)) for seed in range(50)}
    assert seen == {0, 1}


def test_identical_checks(make_data):
    assert make_data([(1, "A"), (1, "A")]).is_identical()
    assert not make_data([(1, "A"), (2, "A")]).is_identical()
    assert make_data([(1, "A"), (2, "A")]).identical_label()
    assert not make_data([(1, "A"), (2, "B")]).identical_label()


def test_ranges_values_and_names(make_data):
    data = make_data([(3, "A"), (1, "B"), (3, "A")])
    assert data.ranges() == [(1.0, 3.0), (0.0, 1.0)]
    assert data.values(0) == [1.0, 3.0]
    assert data.names() == ["x0"]


def test_sampling(make_data):
    data = make_data([(i, "A") for i in range(10)])
    sampled = [False] * len(data)
    bag = data.bagging(random.Random(1), sampled)
    assert len(bag) == 10
    assert any(sampled)
    part = data.copy().rsplit(random.Random(1), 4)
    assert len(part) == 4
    assert len(data.subset(lambda x: x.get(0) < 5)) == 5


def test_unknown_category_is_a_configuration_error():
    dataset = Dataset((Attribute("x", NUMERICAL, 0.0, 1.0), Attribute("class", CATEGORICAL, values=("A",))))
    with pytest.raises(ConfigurationError):
        dataset.encode_row(["0.5", "Z"])


def test_label_must_be_categorical():
    with pytest.raises(ConfigurationError):
        Dataset((Attribute("x", NUMERICAL, 0.0, 1.0), Attribute("y", NUMERICAL, 0.0, 1.0)))


def test_descriptor_round_trip():
    dataset = Dataset((
        Attribute("class", CATEGORICAL, values=("A", "B")),
        Attribute("x", NUMERICAL, -1.0, 2.5),
    ), label_index=0)
    assert Dataset.from_dict(dataset.to_dict()) == dataset
    assert dataset.input_names() == ["x"]
    row = dataset.encode_row(["B", "2"])
    assert dataset.get_label(row) == 1
    assert dataset.inputs_of(row) == (2.0,)
    assert Data(dataset, [row]).count_labels() == [0, 1]
