import pytest

from chicli.fuzzy.core.rule import Rule
from chicli.fuzzy.core.types import CompatibilityType, InferenceType, RecordError, RuleWeight
from chicli.fuzzy.io import record
from chicli.fuzzy.model.data import Data
from chicli.fuzzy.model.dataset import CATEGORICAL, NUMERICAL, Attribute, Dataset
from chicli.fuzzy.model.knowledge import DataBase
from chicli.fuzzy.model.learner import ChiConfig, learn_from_data
from chicli.fuzzy.model.partial import PartialBuilder
from chicli.fuzzy.model.rulebase import RuleBase, merge

DATASET = Dataset((
    Attribute("x", NUMERICAL, 0.0, 10.0),
    Attribute("color", CATEGORICAL, values=("blue", "red")),
    Attribute("class", CATEGORICAL, values=("A", "B")),
))

ROWS = [
    ("1", "red", "A"), ("2", "red", "A"), ("9", "blue", "B"),
    ("8", "blue", "B"), ("5", "red", "A"), ("5", "blue", "B"),
]

CONFIG = ChiConfig(3, CompatibilityType.MINIMUM, RuleWeight.PCF_II, InferenceType.ADDITIVE_COMBINATION)


@pytest.fixture
def data():
    return Data(DATASET, [DATASET.encode_row(r) for r in ROWS])


def test_dumps_loads_round_trip(data):
    rb = learn_from_data(data, CONFIG)
    assert len(rb) > 0
    raw = record.dumps(rb)
    assert raw.startswith(record.MAGIC)
    back = record.loads(raw)
    assert back == rb
    assert back.print_string() == rb.print_string()
    assert back.database.variables[1].categorical
    assert back.inference_type is InferenceType.ADDITIVE_COMBINATION
    assert back.classify((1.0, 1.0)) == rb.classify((1.0, 1.0))


def test_save_and_load_file(tmp_path, data):
    rb = learn_from_data(data, CONFIG)
    path = record.save(rb, tmp_path / "model" / "toy.chrb")
    assert path.exists()
    assert record.load(path) == rb
    assert [p.name for p in path.parent.iterdir()] == ["toy.chrb"]


def test_load_directory_folds_shards_in_name_order(tmp_path, data):
    _, _, outputs = PartialBuilder(CONFIG, n_shards=3).build(data)
    parts = [o.rule_base for o in outputs]
    paths = record.save_shards(parts, tmp_path / "parts")
    assert [p.name for p in paths] == ["part-00000.chrb", "part-00001.chrb", "part-00002.chrb"]
    (tmp_path / "parts" / "_SUCCESS").write_text("")
    (tmp_path / "parts" / ".hidden").write_text("")

    assert record.load(tmp_path / "parts") == merge(parts)


def test_empty_directory(tmp_path):
    with pytest.raises(RecordError):
        record.load(tmp_path)


def test_bad_magic(data):
    raw = record.dumps(learn_from_data(data, CONFIG))
    with pytest.raises(RecordError):
        record.loads(b"XXXX" + raw[4:])


def test_unsupported_version(data):
    raw = bytearray(record.dumps(learn_from_data(data, CONFIG)))
    raw[7] = 99
    with pytest.raises(RecordError):
        record.loads(bytes(raw))


def test_truncated_record(data):
    raw = record.dumps(learn_from_data(data, CONFIG))
    with pytest.raises(RecordError):
        record.loads(raw[:-3])


def test_trailing_bytes(data):
    raw = record.dumps(learn_from_data(data, CONFIG))
    with pytest.raises(RecordError):
        record.loads(raw + b"\x00")


def test_generation_twice_gives_identical_records(data):
    assert record.dumps(learn_from_data(data, CONFIG)) == record.dumps(learn_from_data(data, CONFIG))


def _rule_base_with(*rules):
    rb = RuleBase(DataBase.from_dataset(DATASET, 3), rule_weight=RuleWeight.CF, classes=["A", "B"])
    for antecedent, clas in rules:
        rb.add(Rule(antecedent, clas, 1.0))
    return rb


@pytest.mark.parametrize("antecedent", [(-1, 0), (3, 0), (0, 2), (0, -1)])
def test_label_out_of_range_is_rejected(antecedent):
    raw = record.dumps(_rule_base_with(((0, 0), 0), (antecedent, 1)))
    with pytest.raises(RecordError, match="label"):
        record.loads(raw)


def test_class_out_of_range_is_rejected():
    raw = record.dumps(_rule_base_with(((0, 0), 2)))
    with pytest.raises(RecordError, match="class"):
        record.loads(raw)


def test_labels_at_range_ends_load():
    rb = _rule_base_with(((0, 0), 0), ((2, 1), 1))
    assert record.loads(record.dumps(rb)) == rb


def test_database_partitions_follow_descriptor_ranges(data):
    # the rows only span x in [1, 9]; partitions use the descriptor's [0, 10]
    db = DataBase.from_dataset(data.dataset, 3)
    x, color = db.variables
    assert [(name, mf.params()) for name, mf in x.terms] == [
        ("L0", (-5.0, 0.0, 5.0)), ("L1", (0.0, 5.0, 10.0)), ("L2", (5.0, 10.0, 15.0)),
    ]
    assert color.categorical
    assert [(name, mf.params()) for name, mf in color.terms] == [
        ("blue", (0.0, 0.0, 0.0)), ("red", (1.0, 1.0, 1.0)),
    ]
    assert learn_from_data(data, CONFIG).database == db
