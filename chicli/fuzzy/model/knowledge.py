from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .dataset import Dataset
from .variable import InputVariable, uniform_partition, categorical_partition
from ..core.types import ConfigurationError, Float


@dataclass
class DataBase:
    """
    Partycje rozmyte zmiennych wejściowych:
      - atrybut liczbowy      -> n_labels trójkątnych etykiet na jego zakresie
      - atrybut kategoryczny  -> jedna ostra etykieta na kategorię
    """
    variables: List[InputVariable] = field(default_factory=list)
    n_labels: int = 0

    @classmethod
    def from_dataset(cls, dataset: Dataset, n_labels: int) -> "DataBase":
        """Jednorodne partycje dla każdego atrybutu wejściowego, z zakresów vmin/vmax deskryptora."""
        if n_labels < 1:
            raise ConfigurationError(f"Number of fuzzy labels must be >= 1 (got {n_labels})")
        db = cls(n_labels=n_labels)
        for attr in dataset.input_attributes():
            if attr.is_categorical():
                db.add_variable(categorical_partition(attr.name, list(attr.values)))
                continue
            db.add_variable(uniform_partition(attr.name, float(attr.vmin), float(attr.vmax), n_labels))
        return db

    def add_variable(self, var: InputVariable) -> None:
        self.variables.append(var)

    def num_variables(self) -> int:
        return len(self.variables)

    def num_labels(self, variable: Optional[int] = None) -> int:
        if variable is None:
            return self.n_labels
        return self.variables[variable].n_labels()

    def names(self) -> List[str]:
        return [v.name for v in self.variables]

    def label_name(self, variable: int, label: int) -> str:
        return self.variables[variable].label_name(label)

    def membership(self, variable: int, label: int, value: Float) -> Float:
        return self.variables[variable].mu(label, value)
