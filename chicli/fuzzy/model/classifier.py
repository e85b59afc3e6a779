# chicli/fuzzy/model/classifier.py
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..core.rule import Rule
from ..core.types import Float, InferenceType


def winning_rule(rules: Sequence[Rule], database, example: Sequence[Float], n_classes: int) -> Optional[int]:
    """Klasa jednej reguły o ściśle największym compatibility*weight."""
    clas = None
    best = 0.0
    for r in rules:
        alpha = r.compatibility(example, database) * r.weight
        if alpha > best:
            best = alpha
            clas = r.clas
    return clas


def additive_combination(rules: Sequence[Rule], database, example: Sequence[Float], n_classes: int) -> Optional[int]:
    """Klasa o ściśle największej sumie compatibility*weight po jej regułach."""
    return strongest(class_degrees(rules, database, example, n_classes))[0]


def strongest(strengths: Sequence[Float]) -> Tuple[Optional[int], Float]:
    """(indeks, wartość) ściśle największej dodatniej siły; przy remisie najniższy indeks."""
    clas, best = None, 0.0
    for c, s in enumerate(strengths):
        if s > best:
            clas, best = c, s
    return clas, best


def class_degrees(rules: Sequence[Rule], database, example: Sequence[Float], n_classes: int) -> List[Float]:
    degrees = [0.0] * n_classes
    for r in rules:
        degrees[r.clas] += r.compatibility(example, database) * r.weight
    return degrees


FRM: Dict[InferenceType, Callable[..., Optional[int]]] = {
    InferenceType.WINNING_RULE: winning_rule,
    InferenceType.ADDITIVE_COMBINATION: additive_combination,
}


def fuzzy_reasoning(inference_type: InferenceType, rules: Sequence[Rule], database,
                    example: Sequence[Float], n_classes: int) -> Optional[int]:
    """Indeks przewidzianej klasy albo None, gdy żadna reguła nie zadziałała."""
    return FRM[inference_type](rules, database, example, n_classes)


class Classifier:
    """
    Klasyfikator regułowo-rozmyty (tylko wnioskowanie) nad gotową RuleBase.
    - WINNING_RULE: siła klasy = max(alpha) jej reguł
    - ADDITIVE_COMBINATION: siła klasy = suma(alpha) jej reguł
    Publiczne API:
      - explain(example, threshold=0.0)
      - classify(example)
    """

    def __init__(self, rb):
        self.rb = rb
        self.n_classes = len(rb.classes)

    def classify(self, example: Sequence[Float]) -> Optional[int]:
        return fuzzy_reasoning(self.rb.inference_type, self.rb.rules, self.rb.database,
                               example, self.n_classes)

    def explain(self, example: Sequence[Float], threshold: float = 0.0) -> Dict[str, Any]:
        """
        Zwraca aktywacje reguł i siły klas dla `example`.
        Struktura:
          {
            "chosen": <class index | None>,
            "strengths": [siła każdej klasy, ...],
            "rules": [
              {"rule_index": int, "antecedent": [{"var", "label", "value", "mu"}, ...],
               "compatibility": float, "weight": float, "alpha": float, "class": int}, ...
            ]
          }
        """
        rb = self.rb
        db = rb.database
        strengths = [0.0] * self.n_classes
        infos: List[Dict[str, Any]] = []
        for i, r in enumerate(rb.rules):
            mus = r.memberships(example, db)
            comp = r.compatibility(example, db)
            alpha = comp * r.weight
            if rb.inference_type == InferenceType.ADDITIVE_COMBINATION:
                strengths[r.clas] += alpha
            elif alpha > strengths[r.clas]:
                strengths[r.clas] = alpha
            if alpha <= threshold:
                continue
            infos.append({
                "rule_index": i,
                "antecedent": [
                    {"var": db.variables[v].name, "label": db.label_name(v, lbl),
                     "value": float(example[v]), "mu": float(mu)}
                    for v, (lbl, mu) in enumerate(zip(r.antecedent, mus))
                ],
                "compatibility": float(comp),
                "weight": float(r.weight),
                "alpha": float(alpha),
                "class": r.clas,
            })
        return {"chosen": self.classify(example), "strengths": strengths, "rules": infos}

