from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Sequence, Tuple

from ..core.types import ConfigurationError, Float

NUMERICAL = "numerical"
CATEGORICAL = "categorical"


@dataclass(frozen=True)
class Attribute:
    """
    Opis jednej kolumny:
      - kind:   'numerical' (zakres vmin..vmax) | 'categorical' (uporządkowane wartości)
      - values: nazwy kategorii; kod kategorii to jej indeks na tej liście
    """
    name: str
    kind: str = NUMERICAL
    vmin: Float = 0.0
    vmax: Float = 0.0
    values: Tuple[str, ...] = ()

    def is_numerical(self) -> bool:
        return self.kind == NUMERICAL

    def is_categorical(self) -> bool:
        return self.kind == CATEGORICAL

    def encode(self, raw: str) -> Float:
        if self.is_numerical():
            return float(raw)
        try:
            return float(self.values.index(raw))
        except ValueError:
            raise ConfigurationError(
                f"Unknown category '{raw}' for attribute '{self.name}' (known: {list(self.values)})"
            ) from None


@dataclass(frozen=True)
class Instance:
    values: Tuple[Float, ...]

    def get(self, attr: int) -> Float:
        return self.values[attr]


@dataclass(frozen=True)
class Dataset:
    attributes: Tuple[Attribute, ...]
    label_index: int = -1

    def __post_init__(self):
        n = len(self.attributes)
        if n < 2:
            raise ConfigurationError("Dataset needs at least one input attribute and a label")
        idx = self.label_index if self.label_index >= 0 else n + self.label_index
        if not 0 <= idx < n:
            raise ConfigurationError(f"Label index {self.label_index} out of range for {n} attributes")
        if not self.attributes[idx].is_categorical():
            raise ConfigurationError(f"Label attribute '{self.attributes[idx].name}' must be categorical")
        object.__setattr__(self, "label_index", idx)

    # ---------- shape ----------
    def nb_attributes(self) -> int:
        return len(self.attributes)

    @property
    def label(self) -> Attribute:
        return self.attributes[self.label_index]

    @property
    def n_labels_output(self) -> int:
        return len(self.label.values)

    def input_attributes(self) -> List[Attribute]:
        return [a for i, a in enumerate(self.attributes) if i != self.label_index]

    def input_names(self) -> List[str]:
        return [a.name for a in self.input_attributes()]

    def class_names(self) -> List[str]:
        return list(self.label.values)

    # ---------- instances ----------
    def get_label(self, instance: Instance) -> int:
        return int(instance.values[self.label_index])

    def inputs_of(self, instance: Instance) -> Tuple[Float, ...]:
        v = instance.values
        return v[:self.label_index] + v[self.label_index + 1:]

    def encode_row(self, row: Sequence[str]) -> Instance:
        if len(row) != len(self.attributes):
            raise ConfigurationError(f"Row has {len(row)} values, dataset expects {len(self.attributes)}")
        return Instance(tuple(a.encode(str(v).strip()) for a, v in zip(self.attributes, row)))

    # ---------- descriptor ----------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "label_index": self.label_index,
            "attributes": [
                {k: (list(v) if k == "values" else v) for k, v in asdict(a).items()}
                for a in self.attributes
            ],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Dataset":
        attrs = []
        for a in d["attributes"]:
            attrs.append(Attribute(
                name=a["name"],
                kind=a.get("kind", NUMERICAL),
                vmin=float(a.get("vmin", 0.0)),
                vmax=float(a.get("vmax", 0.0)),
                values=tuple(str(v) for v in a.get("values", ())),
            ))
        return cls(tuple(attrs), int(d.get("label_index", -1)))
