from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..core.types import ConfigurationError
from ..model.data import Data
from ..model.dataset import CATEGORICAL, NUMERICAL, Attribute, Dataset

log = logging.getLogger(__name__)

ColSpec = Union[int, str]


def _is_float_cell(s: str) -> bool:
    try:
        float(s)
        return True
    except ValueError:
        return False


def _sort_values(values) -> List[str]:
    vals = list(values)
    if all(_is_float_cell(v) for v in vals):
        return sorted(vals, key=float)
    return sorted(vals)


def read_csv(path: Union[str, Path]) -> Tuple[List[str], List[List[str]]]:
    """(column names, rows); without a header the columns are named c0, c1, ..."""
    with open(path, newline="", encoding="utf-8") as f:
        rows = [[c.strip() for c in row] for row in csv.reader(f) if row]
    if not rows:
        raise ConfigurationError(f"Empty CSV file: {path}")
    first = rows[0]
    if _looks_like_header(first, rows[1:]):
        return first, rows[1:]
    return [f"c{i}" for i in range(len(first))], rows


def _looks_like_header(first: Sequence[str], rest: Sequence[Sequence[str]]) -> bool:
    # kolumna liczbowa w danych, a w pierwszym wierszu tekst -> nagłówek
    if not rest:
        return False
    for j, cell in enumerate(first):
        if not _is_float_cell(cell) and all(j < len(r) and _is_float_cell(r[j]) for r in rest):
            return True
    return False


def _resolve(spec: ColSpec, colnames: List[str]) -> int:
    if isinstance(spec, int):
        idx = spec if spec >= 0 else len(colnames) + spec
        if not 0 <= idx < len(colnames):
            raise ConfigurationError(f"Column index {spec} out of range ({len(colnames)} columns)")
        return idx
    if spec.lstrip("-").isdigit():
        return _resolve(int(spec), colnames)
    try:
        return colnames.index(spec)
    except ValueError:
        raise ConfigurationError(f"Column '{spec}' does not exist in CSV (columns: {colnames})") from None


def describe(
    csv_path: Union[str, Path],
    label: ColSpec = -1,
    categorical: Optional[Sequence[ColSpec]] = None,
    ignore: Optional[Sequence[ColSpec]] = None,
) -> Tuple[Dataset, List[int]]:
    """
    Infer a Dataset descriptor from a CSV file:
      - label column (name or index, default last) is categorical
      - columns listed in `categorical`, or holding any non-numeric cell, are categorical
      - numerical columns get [min, max] of their values as range
    Returns the Dataset and the CSV column index of every attribute.
    """
    colnames, rows = read_csv(csv_path)
    label_idx = _resolve(label, colnames)
    forced = {_resolve(c, colnames) for c in (categorical or [])}
    skipped = {_resolve(c, colnames) for c in (ignore or [])}
    if label_idx in skipped:
        raise ConfigurationError("The label column cannot be ignored")

    columns = [j for j in range(len(colnames)) if j not in skipped]
    attrs = []
    for j in columns:
        cells = [r[j] for r in rows]
        if j == label_idx or j in forced or any(not _is_float_cell(c) for c in cells):
            attrs.append(Attribute(colnames[j], CATEGORICAL, values=tuple(_sort_values(set(cells)))))
        else:
            nums = [float(c) for c in cells]
            attrs.append(Attribute(colnames[j], NUMERICAL, vmin=min(nums), vmax=max(nums)))
    dataset = Dataset(tuple(attrs), columns.index(label_idx))
    log.info("describe: %d attributes, %d classes, %d rows", len(attrs), dataset.n_labels_output, len(rows))
    return dataset, columns


def save_dataset(dataset: Dataset, path: Union[str, Path]) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        json.dump(dataset.to_dict(), f, ensure_ascii=False, indent=2)


def load_dataset(path: Union[str, Path]) -> Dataset:
    with open(path, encoding="utf-8") as f:
        return Dataset.from_dict(json.load(f))


def load_data(csv_path: Union[str, Path], dataset: Dataset) -> Data:
    """
    Rows of `csv_path` encoded with `dataset`. Columns are matched by name when the
    CSV has a header naming every attribute, otherwise by position.
    """
    colnames, rows = read_csv(csv_path)
    names = [a.name for a in dataset.attributes]
    if all(n in colnames for n in names):
        idxs = [colnames.index(n) for n in names]
    elif all(len(r) == len(names) for r in rows):
        idxs = list(range(len(names)))
    else:
        raise ConfigurationError(
            f"Cannot match CSV columns {colnames} to dataset attributes {names}"
        )
    log.info("ChiCS: Loading the data from %s", csv_path)
    data = Data(dataset, [dataset.encode_row([r[j] for j in idxs]) for r in rows])
    log.info("Data Loaded: %d instances", len(data))
    return data
