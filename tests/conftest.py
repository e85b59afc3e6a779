import pytest

from chicli.fuzzy.model.data import Data
from chicli.fuzzy.model.dataset import CATEGORICAL, NUMERICAL, Attribute, Dataset


def _dataset(n_inputs=1, vmin=0.0, vmax=10.0, classes=("A", "B")):
    attrs = [Attribute(f"x{i}", NUMERICAL, vmin, vmax) for i in range(n_inputs)]
    attrs.append(Attribute("class", CATEGORICAL, values=tuple(classes)))
    return Dataset(tuple(attrs))


@pytest.fixture
def make_data():
    """make_data([(x.., label), ...], classes=...) -> Data over inputs in [0, 10]."""
    def factory(rows, classes=("A", "B"), vmin=0.0, vmax=10.0):
        n_inputs = len(rows[0]) - 1 if rows else 1
        dataset = _dataset(n_inputs, vmin, vmax, classes)
        return Data(dataset, [dataset.encode_row([str(v) for v in row]) for row in rows])
    return factory


@pytest.fixture
def toy_csv(tmp_path):
    path = tmp_path / "toy.csv"
    path.write_text(
        "x,color,class\n"
        "1,red,A\n"
        "2,red,A\n"
        "9,blue,B\n"
        "8,blue,B\n",
        encoding="utf-8",
    )
    return path
