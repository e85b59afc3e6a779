from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple
from .norms import TNORMS
from .types import Float, CompatibilityType, RuleWeight

Antecedent = Tuple[int, ...]  # one label index per input variable

@dataclass
class Rule:
    antecedent: Antecedent
    clas: int
    weight: Float = 1.0
    compatibility_type: CompatibilityType = CompatibilityType.PRODUCT

    def memberships(self, example: Sequence[Float], database) -> list[Float]:
        return [database.membership(i, lbl, example[i]) for i, lbl in enumerate(self.antecedent)]

    def compatibility(self, example: Sequence[Float], database) -> Float:
        """T-norm of the per-variable memberships of `example`."""
        return TNORMS[self.compatibility_type](self.memberships(example, database))

    def same_antecedent(self, other: "Rule") -> bool:
        return self.antecedent == other.antecedent

    def assign_consequent(self, train, database, rule_weight: RuleWeight, positive_class: int,
                          positive_class_cost: Float, negative_class_cost: Float) -> None:
        """
        Weight from the class-wise, cost-weighted compatibility sums over `train`:
          CF      = S_class / S_total
          PCF_II  = (S_class - S_other / (M-1)) / S_total
          PCF_IV  = (S_class - S_other) / S_total
          NO_RW   = 1
        """
        if rule_weight == RuleWeight.NO_RW:
            self.weight = 1.0
            return

        dataset = train.dataset
        s_class = 0.0
        s_other = 0.0
        for inst in train:
            label = dataset.get_label(inst)
            comp = self.compatibility(dataset.inputs_of(inst), database)
            if comp == 0.0:
                continue
            comp *= positive_class_cost if label == positive_class else negative_class_cost
            if label == self.clas:
                s_class += comp
            else:
                s_other += comp

        total = s_class + s_other
        if total == 0.0:
            self.weight = 0.0
        elif rule_weight == RuleWeight.CF:
            self.weight = s_class / total
        elif rule_weight == RuleWeight.PCF_IV:
            self.weight = (s_class - s_other) / total
        else:
            n_other = max(dataset.n_labels_output - 1, 1)
            self.weight = (s_class - s_other / n_other) / total
