from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.rule import Antecedent, Rule
from ..core.types import (
    AntecedentSearchError, CompatibilityType, ConfigurationError, Float, InferenceType, MergeError,
    RuleWeight,
)
from .classifier import fuzzy_reasoning
from .data import Data
from .knowledge import DataBase

log = logging.getLogger(__name__)


class RuleBase:
    """
    Uporządkowana lista reguł rozmytych bez powtórzeń antecedentów, plus metadane
    modelu (selektory, nazwy, koszty klas) i DataBase, na której ją uczono.
    """

    def __init__(
        self,
        database: DataBase,
        inference_type: InferenceType = InferenceType.WINNING_RULE,
        compatibility_type: CompatibilityType = CompatibilityType.PRODUCT,
        rule_weight: RuleWeight = RuleWeight.PCF_IV,
        names: Sequence[str] = (),
        classes: Sequence[str] = (),
        positive_class: int = 0,
        positive_class_cost: Float = 1.0,
        negative_class_cost: Float = 1.0,
    ):
        self.database = database
        self.n_variables = database.num_variables()
        self.n_labels = database.num_labels()
        self.inference_type = InferenceType(inference_type)
        self.compatibility_type = CompatibilityType(compatibility_type)
        self.rule_weight = RuleWeight(rule_weight)
        self.names = list(names) or database.names()
        self.classes = list(classes)
        self.positive_class = positive_class
        self.positive_class_cost = positive_class_cost
        self.negative_class_cost = negative_class_cost
        self.rules: List[Rule] = []
        self._index: Dict[Antecedent, int] = {}

    def empty_copy(self) -> "RuleBase":
        """Te same metadane i DataBase, bez reguł."""
        return RuleBase(
            self.database, self.inference_type, self.compatibility_type, self.rule_weight,
            self.names, self.classes, self.positive_class,
            self.positive_class_cost, self.negative_class_cost,
        )

    # ---------- collection ----------
    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def __getitem__(self, i: int) -> Rule:
        return self.rules[i]

    def duplicated(self, rule: Rule) -> bool:
        return rule.antecedent in self._index

    def add(self, rule: Rule) -> bool:
        """Dodaje `rule`, o ile jej antecedentu jeszcze nie ma; True, gdy dodano."""
        if self.duplicated(rule):
            return False
        self._index[rule.antecedent] = len(self.rules)
        self.rules.append(rule)
        return True

    def extend(self, rules: Iterable[Rule]) -> int:
        """Dodaje reguły po kolei, pierwszy antecedent wygrywa; zwraca liczbę pominiętych."""
        dropped = 0
        for r in rules:
            if not self.add(r):
                dropped += 1
        return dropped

    # ---------- generation ----------
    def search_for_best_antecedent(self, example: Sequence[Float], clas: int) -> Rule:
        labels = []
        for i in range(self.n_variables):
            best = 0.0
            etq = -1
            for j in range(self.database.num_labels(i)):
                per = self.database.membership(i, j, example[i])
                if per > best:
                    best = per
                    etq = j
            if best == 0.0:
                raise AntecedentSearchError(example, i)
            labels.append(etq)
        return Rule(tuple(labels), clas, compatibility_type=self.compatibility_type)

    def generation(self, train: Data) -> None:
        """Jedno przejście po `train` w kolejności wejścia (uczenie reguł Chi et al.)."""
        dataset = train.dataset
        rejected = 0
        for inst in train:
            r = self.search_for_best_antecedent(dataset.inputs_of(inst), dataset.get_label(inst))
            if self.duplicated(r):
                rejected += 1
                continue
            r.assign_consequent(train, self.database, self.rule_weight, self.positive_class,
                                self.positive_class_cost, self.negative_class_cost)
            if r.weight > 0:
                self.add(r)
            else:
                rejected += 1
                log.debug("dropping rule %s -> %d with weight %.6g", r.antecedent, r.clas, r.weight)
        log.debug("generation: %d examples, %d rules, %d rejected", len(train), len(self.rules), rejected)

    # ---------- inference ----------
    def encode_example(self, raw: Dict[str, Any]) -> Tuple[Float, ...]:
        """{nazwa: wartość} -> wektor przykładu; wejścia kategoryczne przyjmują nazwy kategorii."""
        out = []
        for name, var in zip(self.names, self.database.variables):
            if name not in raw:
                raise ConfigurationError(f"Missing value for input '{name}'")
            v = raw[name]
            if var.categorical and isinstance(v, str):
                labels = [lbl for lbl, _ in var.terms]
                if v.strip() in labels:
                    out.append(float(labels.index(v.strip())))
                    continue
            try:
                out.append(float(v))
            except (TypeError, ValueError):
                raise ConfigurationError(f"Invalid value '{v}' for input '{name}'") from None
        return tuple(out)

    def frm(self, example: Sequence[Float]) -> Optional[int]:
        return fuzzy_reasoning(self.inference_type, self.rules, self.database, example, len(self.classes))

    def classify(self, example: Sequence[Float]) -> float:
        """Indeks klasy jako float albo nan, gdy żadna reguła nie zadziałała (niesklasyfikowany)."""
        clas = self.frm(example)
        return float(clas) if clas is not None else math.nan

    # ---------- merge ----------
    def metadata(self) -> tuple:
        return (
            self.n_variables, self.n_labels, int(self.rule_weight), int(self.inference_type),
            int(self.compatibility_type), tuple(self.names), tuple(self.classes),
        )

    def check_compatible(self, other: "RuleBase") -> None:
        if self.metadata() != other.metadata():
            raise MergeError(f"Rule bases differ in metadata: {self.metadata()} != {other.metadata()}")
        if self.database != other.database:
            raise MergeError("Rule bases were learnt over different fuzzy partitions (DataBase)")

    def fold(self, other: "RuleBase") -> int:
        """Dokleja reguły `other` za własnymi; zwraca liczbę pominiętych duplikatów."""
        self.check_compatible(other)
        return self.extend(other.rules)

    # ---------- presentation ----------
    def print_string(self) -> str:
        lines = [f"@Number of rules: {len(self.rules)}", ""]
        for i, r in enumerate(self.rules, 1):
            ants = " AND ".join(
                f"{self.names[v]} IS {self.database.label_name(v, lbl)}" for v, lbl in enumerate(r.antecedent)
            )
            lines.append(f"{i}: {ants}: {self.classes[r.clas]} with Rule Weight: {r.weight}")
        return "\n".join(lines) + "\n"

    def __eq__(self, other) -> bool:
        if not isinstance(other, RuleBase):
            return NotImplemented
        return (
            self.metadata() == other.metadata()
            and self.database == other.database
            and self.positive_class == other.positive_class
            and self.positive_class_cost == other.positive_class_cost
            and self.negative_class_cost == other.negative_class_cost
            and self.rules == other.rules
        )

    def __repr__(self) -> str:
        return (f"RuleBase(rules={len(self.rules)}, variables={self.n_variables}, "
                f"frm={self.inference_type.name}, tnorm={self.compatibility_type.name}, "
                f"rw={self.rule_weight.name})")


def merge(rule_bases: Sequence[RuleBase]) -> RuleBase:
    """
    Skleja listy reguł w podanej kolejności (shardów) i pomija powtórzone antecedenty,
    zachowując pierwsze wystąpienie i jego wagę. Parametry kosztów z pierwszej bazy.
    """
    if not rule_bases:
        raise MergeError("Nothing to merge")
    first = rule_bases[0]
    out = first.empty_copy()
    dropped = out.extend(first.rules)
    for rb in rule_bases[1:]:
        dropped += out.fold(rb)
    log.info("merge: %d rule bases, %d rules kept, %d duplicates dropped",
             len(rule_bases), len(out), dropped)
    return out
