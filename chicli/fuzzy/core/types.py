from enum import IntEnum
from typing import Sequence


class FuzzyError(Exception):
    """Domain error for fuzzy framework."""


class ConfigurationError(FuzzyError):
    """Fatal misconfiguration of the model or its data (aborts build/inference)."""


class AntecedentSearchError(ConfigurationError):
    def __init__(self, example: Sequence[float], variable: int):
        self.example = tuple(example)
        self.variable = variable
        values = "\t".join(str(v) for v in self.example)
        super().__init__(
            f"Value outside every fuzzy partition while searching the antecedent "
            f"(variable {variable}); example: {values}"
        )


class MergeError(ConfigurationError):
    """Shard rule bases with different model metadata."""


class RecordError(ConfigurationError):
    """Malformed or truncated model record."""


Float = float
Index = int


# Selector codes are persisted in the model record; do not renumber.
class CompatibilityType(IntEnum):
    MINIMUM = 0
    PRODUCT = 1


class RuleWeight(IntEnum):
    CF = 0
    PCF_IV = 1
    PCF_II = 2
    NO_RW = 3


class InferenceType(IntEnum):
    WINNING_RULE = 0
    ADDITIVE_COMBINATION = 1


_NAMES = {
    CompatibilityType: {
        "minimum": CompatibilityType.MINIMUM,
        "min": CompatibilityType.MINIMUM,
        "product": CompatibilityType.PRODUCT,
        "prod": CompatibilityType.PRODUCT,
    },
    RuleWeight: {
        "certainty_factor": RuleWeight.CF,
        "cf": RuleWeight.CF,
        "penalized_certainty_factor": RuleWeight.PCF_IV,
        "pcf_iv": RuleWeight.PCF_IV,
        "average_penalized_certainty_factor": RuleWeight.PCF_II,
        "pcf_ii": RuleWeight.PCF_II,
        "no_weights": RuleWeight.NO_RW,
        "no_rw": RuleWeight.NO_RW,
    },
    InferenceType: {
        "winning_rule": InferenceType.WINNING_RULE,
        "wr": InferenceType.WINNING_RULE,
        "additive_combination": InferenceType.ADDITIVE_COMBINATION,
        "ac": InferenceType.ADDITIVE_COMBINATION,
    },
}


def parse_selector(enum_cls, value):
    """'Certainty_Factor' / 'minimum' / 1 / RuleWeight.CF -> member of enum_cls."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, int):
        try:
            return enum_cls(value)
        except ValueError:
            raise ConfigurationError(f"Unknown {enum_cls.__name__} code: {value}") from None
    key = str(value).strip().lower().replace("-", "_")
    try:
        return _NAMES[enum_cls][key]
    except KeyError:
        choices = ", ".join(sorted(_NAMES[enum_cls]))
        raise ConfigurationError(f"Unknown {enum_cls.__name__} '{value}' (choices: {choices})") from None
