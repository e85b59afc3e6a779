from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .data import Data
from .knowledge import DataBase
from .rulebase import RuleBase
from ..core.types import CompatibilityType, Float, InferenceType, RuleWeight, parse_selector

log = logging.getLogger(__name__)


# === SETTINGS ================================================================

@dataclass(frozen=True)
class ChiConfig:
    """Ustawienia uczenia wspólne dla wszystkich shardów jednej budowy."""
    n_labels: int = 3
    compatibility_type: CompatibilityType = CompatibilityType.PRODUCT
    rule_weight: RuleWeight = RuleWeight.PCF_IV
    inference_type: InferenceType = InferenceType.WINNING_RULE

    @classmethod
    def from_names(cls, n_labels: int = 3, tnorm="product", rule_weight="Penalized_Certainty_Factor",
                   frm="Winning_Rule") -> "ChiConfig":
        return cls(
            n_labels=int(n_labels),
            compatibility_type=parse_selector(CompatibilityType, tnorm),
            rule_weight=parse_selector(RuleWeight, rule_weight),
            inference_type=parse_selector(InferenceType, frm),
        )


@dataclass(frozen=True)
class ClassCosts:
    positive_class: int
    positive_class_cost: Float
    negative_class_cost: Float = 1.0

    @classmethod
    def from_data(cls, data: Data) -> "ClassCosts":
        """Klasa mniejszościowa jest pozytywna; jej koszt to stosunek negatywnych do pozytywnych."""
        distribution = data.class_distribution()
        positive = data.positive_class(distribution)
        return cls(positive, data.positive_class_cost(positive, distribution), 1.0)


@dataclass
class BuildOutput:
    """Baza reguł jednej budowy oraz, opcjonalnie, jej predykcje na własnych danych uczących."""
    rule_base: RuleBase
    predictions: Optional[List[float]] = None


# === LEARNER (Chi et al., cost-sensitive) ====================================

def learn(
    train: Data,
    database: DataBase,
    config: ChiConfig,
    costs: Optional[ClassCosts] = None,
    with_predictions: bool = False,
) -> BuildOutput:
    """
    Ucz bazę reguł z `train` na partycjach rozmytych z `database`.
    Gdy `costs` == None, koszty liczone są z samego `train`.
    """
    if costs is None:
        costs = ClassCosts.from_data(train)
    dataset = train.dataset
    rb = RuleBase(
        database,
        inference_type=config.inference_type,
        compatibility_type=config.compatibility_type,
        rule_weight=config.rule_weight,
        names=dataset.input_names(),
        classes=dataset.class_names(),
        positive_class=costs.positive_class,
        positive_class_cost=costs.positive_class_cost,
        negative_class_cost=costs.negative_class_cost,
    )
    log.debug("learn: %d examples, positive class %d (cost %.6g)",
              len(train), costs.positive_class, costs.positive_class_cost)
    rb.generation(train)

    predictions = None
    if with_predictions:
        predictions = [rb.classify(dataset.inputs_of(x)) for x in train]
    return BuildOutput(rb, predictions)


def learn_from_data(train: Data, config: ChiConfig) -> RuleBase:
    """Budowa sekwencyjna: partycje z zakresów deskryptora, koszty z `train`."""
    database = DataBase.from_dataset(train.dataset, config.n_labels)
    return learn(train, database, config).rule_base
