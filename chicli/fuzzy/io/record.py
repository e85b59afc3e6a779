"""
Binary model record (big-endian):

  header:   magic 'CHRB', format version:int
  RuleBase: n_variables:int, n_labels:int, rule_weight:int, inference_type:int,
            compatibility_type:int, names:[str], classes:[str],
            positive_class:int, negative_class_cost:double, positive_class_cost:double,
            DataBase, rules:[Rule]
  DataBase: n_labels:int, n_variables:int,
            per variable: name:str, categorical:int, vmin:double, vmax:double,
                          labels:[(name:str, a:double, b:double, c:double)]
  Rule:     n_variables x label:int, class:int, weight:double, compatibility_type:int
  str:      len:int, utf-8 bytes;  [x]: len:int, x*

The field order is declared once in RULE_BASE_SCHEMA; writing and reading
both walk that table.

A model is one file or a directory of shard files. Loading a directory reads
the files in name order and folds every later shard's rules into the first.
"""

from __future__ import annotations

import io
import logging
import os
import struct
import tempfile
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, List, NamedTuple, Tuple, Union

from ..core.mfs import Singleton, Triangular
from ..core.rule import Rule
from ..core.types import CompatibilityType, InferenceType, RecordError, RuleWeight
from ..model.knowledge import DataBase
from ..model.rulebase import RuleBase
from ..model.variable import InputVariable

log = logging.getLogger(__name__)

MAGIC = b"CHRB"
FORMAT_VERSION = 1
MODEL_SUFFIX = ".chrb"

_INT = struct.Struct(">i")
_DOUBLE = struct.Struct(">d")

PathLike = Union[str, os.PathLike]


# === primitives ==============================================================

class RecordWriter:
    def __init__(self, out: BinaryIO):
        self.out = out

    def write_int(self, v: int) -> None:
        self.out.write(_INT.pack(int(v)))

    def write_double(self, v: float) -> None:
        self.out.write(_DOUBLE.pack(float(v)))

    def write_str(self, s: str) -> None:
        raw = s.encode("utf-8")
        self.write_int(len(raw))
        self.out.write(raw)

    def write_list(self, items, write_item: Callable[["RecordWriter", Any], None]) -> None:
        items = list(items)
        self.write_int(len(items))
        for it in items:
            write_item(self, it)


class RecordReader:
    def __init__(self, inp: BinaryIO):
        self.inp = inp

    def read_bytes(self, n: int) -> bytes:
        raw = self.inp.read(n)
        if len(raw) != n:
            raise RecordError(f"Truncated model record (wanted {n} bytes, got {len(raw)})")
        return raw

    def read_int(self) -> int:
        return _INT.unpack(self.read_bytes(_INT.size))[0]

    def read_double(self) -> float:
        return _DOUBLE.unpack(self.read_bytes(_DOUBLE.size))[0]

    def read_str(self) -> str:
        n = self.read_length()
        try:
            return self.read_bytes(n).decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecordError(f"Invalid UTF-8 string in model record: {e}") from e

    def read_length(self) -> int:
        n = self.read_int()
        if n < 0:
            raise RecordError(f"Negative length {n} in model record")
        return n

    def read_list(self, read_item: Callable[["RecordReader"], Any]) -> list:
        return [read_item(self) for _ in range(self.read_length())]


# === nested records ==========================================================

def _write_label(w: RecordWriter, term) -> None:
    name, mf = term
    w.write_str(name)
    for p in mf.params():
        w.write_double(p)


def write_database(w: RecordWriter, db: DataBase) -> None:
    w.write_int(db.n_labels)
    w.write_int(db.num_variables())
    for var in db.variables:
        w.write_str(var.name)
        w.write_int(1 if var.categorical else 0)
        w.write_double(var.vmin)
        w.write_double(var.vmax)
        w.write_list(var.terms, _write_label)


def read_database(r: RecordReader) -> DataBase:
    db = DataBase(n_labels=r.read_int())
    for _ in range(r.read_length()):
        name = r.read_str()
        categorical = r.read_int() != 0
        var = InputVariable(name=name, vmin=r.read_double(), vmax=r.read_double(), categorical=categorical)
        for _ in range(r.read_length()):
            label = r.read_str()
            a, b, c = r.read_double(), r.read_double(), r.read_double()
            var.add_term(label, Singleton(a) if categorical else Triangular(a, b, c))
        db.add_variable(var)
    return db


def write_rule(w: RecordWriter, rule: Rule) -> None:
    for lbl in rule.antecedent:
        w.write_int(lbl)
    w.write_int(rule.clas)
    w.write_double(rule.weight)
    w.write_int(int(rule.compatibility_type))


def read_rule(r: RecordReader, n_variables: int) -> Rule:
    antecedent = tuple(r.read_int() for _ in range(n_variables))
    clas = r.read_int()
    weight = r.read_double()
    try:
        tnorm = CompatibilityType(r.read_int())
    except ValueError as e:
        raise RecordError(str(e)) from e
    return Rule(antecedent, clas, weight, tnorm)


# === schema ==================================================================

class Field(NamedTuple):
    name: str
    write: Callable[[RecordWriter, Any], None]
    read: Callable[[RecordReader, Dict[str, Any]], Any]


def _int_field(name: str) -> Field:
    return Field(name, lambda w, v: w.write_int(v), lambda r, ctx: r.read_int())


def _double_field(name: str) -> Field:
    return Field(name, lambda w, v: w.write_double(v), lambda r, ctx: r.read_double())


def _str_list_field(name: str) -> Field:
    return Field(name, lambda w, v: w.write_list(v, RecordWriter.write_str), lambda r, ctx: r.read_list(RecordReader.read_str))


RULE_BASE_SCHEMA: Tuple[Field, ...] = (
    _int_field("n_variables"),
    _int_field("n_labels"),
    _int_field("rule_weight"),
    _int_field("inference_type"),
    _int_field("compatibility_type"),
    _str_list_field("names"),
    _str_list_field("classes"),
    _int_field("positive_class"),
    _double_field("negative_class_cost"),
    _double_field("positive_class_cost"),
    Field("database", write_database, lambda r, ctx: read_database(r)),
    Field("rules",
          lambda w, v: w.write_list(v, write_rule),
          lambda r, ctx: r.read_list(lambda rr: read_rule(rr, ctx["n_variables"]))),
)


def _fields_of(rb: RuleBase) -> Dict[str, Any]:
    return {
        "n_variables": rb.n_variables,
        "n_labels": rb.n_labels,
        "rule_weight": int(rb.rule_weight),
        "inference_type": int(rb.inference_type),
        "compatibility_type": int(rb.compatibility_type),
        "names": rb.names,
        "classes": rb.classes,
        "positive_class": rb.positive_class,
        "negative_class_cost": rb.negative_class_cost,
        "positive_class_cost": rb.positive_class_cost,
        "database": rb.database,
        "rules": rb.rules,
    }


def write_rule_base(w: RecordWriter, rb: RuleBase) -> None:
    values = _fields_of(rb)
    for f in RULE_BASE_SCHEMA:
        f.write(w, values[f.name])


def read_rule_base(r: RecordReader) -> RuleBase:
    ctx: Dict[str, Any] = {}
    for f in RULE_BASE_SCHEMA:
        ctx[f.name] = f.read(r, ctx)

    db: DataBase = ctx["database"]
    if db.num_variables() != ctx["n_variables"]:
        raise RecordError(
            f"Model record declares {ctx['n_variables']} variables, DataBase has {db.num_variables()}"
        )
    try:
        rb = RuleBase(
            db,
            inference_type=InferenceType(ctx["inference_type"]),
            compatibility_type=CompatibilityType(ctx["compatibility_type"]),
            rule_weight=RuleWeight(ctx["rule_weight"]),
            names=ctx["names"],
            classes=ctx["classes"],
            positive_class=ctx["positive_class"],
            positive_class_cost=ctx["positive_class_cost"],
            negative_class_cost=ctx["negative_class_cost"],
        )
    except ValueError as e:
        raise RecordError(f"Invalid selector in model record: {e}") from e
    for i, rule in enumerate(ctx["rules"]):
        if not 0 <= rule.clas < len(rb.classes):
            raise RecordError(f"Rule {i}: class {rule.clas} out of range for {len(rb.classes)} classes")
        for v, lbl in enumerate(rule.antecedent):
            if not 0 <= lbl < db.num_labels(v):
                raise RecordError(
                    f"Rule {i}: label {lbl} out of range for variable '{db.variables[v].name}' "
                    f"({db.num_labels(v)} labels)"
                )
        if not rb.add(rule):
            raise RecordError(f"Rule {i}: duplicated antecedent {rule.antecedent}")
    return rb


# === bytes / files ===========================================================

def dumps(rb: RuleBase) -> bytes:
    buf = io.BytesIO()
    w = RecordWriter(buf)
    buf.write(MAGIC)
    w.write_int(FORMAT_VERSION)
    write_rule_base(w, rb)
    return buf.getvalue()


def loads(raw: bytes) -> RuleBase:
    buf = io.BytesIO(raw)
    r = RecordReader(buf)
    if r.read_bytes(len(MAGIC)) != MAGIC:
        raise RecordError("Not a rule base record (bad magic)")
    version = r.read_int()
    if version != FORMAT_VERSION:
        raise RecordError(f"Unsupported model format version {version} (expected {FORMAT_VERSION})")
    rb = read_rule_base(r)
    if buf.read(1):
        raise RecordError("Trailing bytes after model record")
    return rb


def save(rb: RuleBase, path: PathLike) -> Path:
    """Write atomically: a temp file in the target directory is renamed over `path`."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    raw = dumps(rb)
    fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=str(out.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(raw)
        os.replace(tmp, out)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    log.info("ChiCS: Storing the model in: %s", out)
    return out


def save_shards(rule_bases: List[RuleBase], directory: PathLike) -> List[Path]:
    """One file per shard, named so that name order equals shard order."""
    d = Path(directory)
    d.mkdir(parents=True, exist_ok=True)
    return [save(rb, d / f"part-{i:05d}{MODEL_SUFFIX}") for i, rb in enumerate(rule_bases)]


def list_model_files(directory: PathLike) -> List[Path]:
    files = sorted(p for p in Path(directory).iterdir()
                   if p.is_file() and not p.name.startswith((".", "_")))
    if not files:
        raise RecordError(f"No model files in {directory}")
    return files


def load(path: PathLike) -> RuleBase:
    p = Path(path)
    files = list_model_files(p) if p.is_dir() else [p]
    rb = None
    for f in files:
        part = loads(f.read_bytes())
        if rb is None:
            rb = part
        else:
            dropped = rb.fold(part)
            log.debug("load: folded %s (%d duplicates dropped)", f.name, dropped)
    return rb
