import pytest

from chicli.fuzzy.core.types import ConfigurationError
from chicli.fuzzy.io.dataset_io import describe, load_data, load_dataset, read_csv, save_dataset


def test_describe_infers_kinds_and_ranges(toy_csv):
    dataset, columns = describe(toy_csv)
    assert columns == [0, 1, 2]
    x, color, label = dataset.attributes
    assert x.is_numerical() and (x.vmin, x.vmax) == (1.0, 9.0)
    assert color.is_categorical() and color.values == ("blue", "red")
    assert label is dataset.label
    assert dataset.class_names() == ["A", "B"]


def test_describe_label_by_name_and_ignored_columns(tmp_path):
    path = tmp_path / "d.csv"
    path.write_text("id,cls,x\n1,0,0.5\n2,1,1.5\n3,10,2.5\n", encoding="utf-8")
    dataset, columns = describe(path, label="cls", ignore=["id"])
    assert columns == [1, 2]
    assert dataset.label.name == "cls"
    # numeric class values sort numerically
    assert dataset.class_names() == ["0", "1", "10"]
    assert dataset.input_names() == ["x"]
    with pytest.raises(ConfigurationError):
        describe(path, label="nope")
    with pytest.raises(ConfigurationError):
        describe(path, label="cls", ignore=["cls"])


def test_csv_without_header(tmp_path):
    path = tmp_path / "raw.csv"
    path.write_text("1,A\n9,B\n", encoding="utf-8")
    colnames, rows = read_csv(path)
    assert colnames == ["c0", "c1"]
    assert len(rows) == 2


def test_descriptor_file_and_load_data(tmp_path, toy_csv):
    dataset, _ = describe(toy_csv)
    save_dataset(dataset, tmp_path / "meta" / "toy.json")
    loaded = load_dataset(tmp_path / "meta" / "toy.json")
    assert loaded == dataset

    data = load_data(toy_csv, loaded)
    assert len(data) == 4
    assert data.count_labels() == [2, 2]
    assert dataset.inputs_of(data[0]) == (1.0, 1.0)


def test_load_data_unknown_category(tmp_path, toy_csv):
    dataset, _ = describe(toy_csv)
    path = tmp_path / "other.csv"
    path.write_text("x,color,class\n1,green,A\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_data(path, dataset)
