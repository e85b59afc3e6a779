from __future__ import annotations

import math
import random
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from ..core.types import ConfigurationError, Float
from .dataset import Dataset, Instance


class Data:
    """Uporządkowana kolekcja przykładów związana z jednym Dataset."""

    def __init__(self, dataset: Dataset, instances: Optional[Sequence[Instance]] = None):
        self.dataset = dataset
        self.instances: List[Instance] = list(instances or [])

    def __len__(self) -> int:
        return len(self.instances)

    def __iter__(self) -> Iterator[Instance]:
        return iter(self.instances)

    def __getitem__(self, index: int) -> Instance:
        return self.instances[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Data):
            return NotImplemented
        return self.dataset == other.dataset and self.instances == other.instances

    def is_empty(self) -> bool:
        return not self.instances

    def copy(self) -> "Data":
        return Data(self.dataset, self.instances)

    # ---------- sampling ----------
    def subset(self, condition: Callable[[Instance], bool]) -> "Data":
        return Data(self.dataset, [x for x in self.instances if condition(x)])

    def bagging(self, rng: random.Random, sampled: Optional[List[bool]] = None) -> "Data":
        """Losuje N przykładów ze zwracaniem; jeśli podano `sampled`, zaznacza w nim wylosowane indeksy."""
        n = len(self.instances)
        bag = []
        for _ in range(n):
            i = rng.randrange(n)
            bag.append(self.instances[i])
            if sampled is not None:
                sampled[i] = True
        return Data(self.dataset, bag)

    def rsplit(self, rng: random.Random, subsize: int) -> "Data":
        """Usuwa `subsize` losowych przykładów z tych danych i je zwraca."""
        subset = []
        for _ in range(subsize):
            subset.append(self.instances.pop(rng.randrange(len(self.instances))))
        return Data(self.dataset, subset)

    def shards(self, n: int) -> List["Data"]:
        """Podział na `n` ciągłych shardów, w kolejności wejścia."""
        if n < 1:
            raise ConfigurationError(f"Number of shards must be >= 1 (got {n})")
        size, extra = divmod(len(self.instances), n)
        out, start = [], 0
        for i in range(n):
            end = start + size + (1 if i < extra else 0)
            out.append(Data(self.dataset, self.instances[start:end]))
            start = end
        return out

    # ---------- checks ----------
    def is_identical(self) -> bool:
        if self.is_empty():
            return True
        first = self.instances[0].values
        return all(x.values == first for x in self.instances[1:])

    def identical_label(self) -> bool:
        if self.is_empty():
            return True
        first = self.dataset.get_label(self.instances[0])
        return all(self.dataset.get_label(x) == first for x in self.instances[1:])

    # ---------- attributes ----------
    def values(self, attr: int) -> List[Float]:
        return sorted({x.get(attr) for x in self.instances})

    def ranges(self) -> List[Tuple[Float, Float]]:
        out = []
        for i, a in enumerate(self.dataset.attributes):
            if a.is_numerical():
                col = [x.get(i) for x in self.instances]
                out.append((min(col), max(col)) if col else (a.vmin, a.vmax))
            else:
                out.append((0.0, float(len(a.values) - 1)))
        return out

    def names(self) -> List[str]:
        return self.dataset.input_names()

    # ---------- labels ----------
    def extract_labels(self) -> List[int]:
        return [self.dataset.get_label(x) for x in self.instances]

    def count_labels(self) -> List[int]:
        counts = [0] * self.dataset.n_labels_output
        for x in self.instances:
            counts[self.dataset.get_label(x)] += 1
        return counts

    # to samo pod nazwą używaną przy liczeniu kosztów
    class_distribution = count_labels

    def majority_label(self, rng: random.Random) -> int:
        counts = self.count_labels()
        top = max(counts)
        return rng.choice([i for i, c in enumerate(counts) if c == top])

    def positive_class(self, distribution: Optional[Sequence[int]] = None) -> int:
        """Klasa z najmniejszą liczbą przykładów; przy remisie najniższy indeks."""
        counts = list(distribution) if distribution is not None else self.count_labels()
        pos = 0
        for i in range(1, len(counts)):
            if counts[i] < counts[pos]:
                pos = i
        return pos

    def positive_class_cost(self, positive_class: int, distribution: Optional[Sequence[int]] = None) -> float:
        """(total - positive) / positive; nieskończoność, gdy klasy pozytywnej brak."""
        counts = list(distribution) if distribution is not None else self.count_labels()
        positive = counts[positive_class]
        if positive == 0:
            return math.inf
        return (sum(counts) - positive) / positive
