import argparse

from ..fuzzy.core.types import ConfigurationError

TNORM_CHOICES = ["minimum", "product"]
RULE_WEIGHT_CHOICES = [
    "Certainty_Factor",
    "Average_Penalized_Certainty_Factor",
    "Penalized_Certainty_Factor",
    "No_Weights",
]
FRM_CHOICES = ["Winning_Rule", "Additive_Combination"]
COST_POLICY_CHOICES = ["local", "global"]
ENC_CHOICES = ["decimal", "binary", "label"]

TNORM_DEFAULT = "product"
RULE_WEIGHT_DEFAULT = "Penalized_Certainty_Factor"
FRM_DEFAULT = "Winning_Rule"


def parse_cols_list(s: str):
    """'1,2,SepalWidthCm' -> [1,2,'SepalWidthCm'] (int dla cyfr, str dla nazw)."""
    if not s:
        return []
    if isinstance(s, (list, tuple)):
        return [int(t) if isinstance(t, str) and t.isdigit() else t for t in s]
    out = []
    for tok in s.split(","):
        tok = tok.strip()
        if not tok:
            continue
        out.append(int(tok) if tok.isdigit() else tok)
    return out


def parse_col(s: str):
    """Pojedyncza kolumna: indeks (także ujemny) lub nazwa."""
    s = str(s).strip()
    return int(s) if s.lstrip("-").isdigit() else s


def positive_int(s: str) -> int:
    v = int(s)
    if v < 1:
        raise argparse.ArgumentTypeError(f"Oczekiwano liczby >= 1, otrzymano {v}.")
    return v


def parse_keyvals(kvs):
    """['x=1', 'kolor=red'] lub ['x=1, y=2'] -> {'x': '1', 'kolor': 'red', ...} (wartości jako tekst)."""
    if isinstance(kvs, dict):
        return dict(kvs)
    data = {}
    for elem in kvs or []:
        for pair in str(elem).split(","):
            pair = pair.strip()
            if not pair:
                continue
            if "=" not in pair:
                raise ConfigurationError(f"Niepoprawny element: '{pair}' (oczekiwano 'nazwa=wartość').")
            k, v = (t.strip() for t in pair.split("=", 1))
            if not k:
                raise ConfigurationError(f"Pusty klucz w: '{pair}'.")
            data[k] = v
    return data
