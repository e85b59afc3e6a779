# InputVariable: zakres i uporządkowane etykiety rozmyte

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple
from ..core.mfs import MembershipFunction, Triangular, Singleton
from ..core.types import Float

@dataclass
class InputVariable:
    name: str
    vmin: Float
    vmax: Float
    categorical: bool = False
    terms: List[Tuple[str, MembershipFunction]] = field(default_factory=list)

    def add_term(self, label: str, mf: MembershipFunction) -> None:
        self.terms.append((label, mf))

    def n_labels(self) -> int:
        return len(self.terms)

    def label_name(self, j: int) -> str:
        return self.terms[j][0]

    def mu(self, j: int, x: Float) -> Float:
        return self.terms[j][1].mu(x)


def uniform_partition(name: str, vmin: Float, vmax: Float, n_labels: int) -> InputVariable:
    """
    n_labels trójkątów ze środkami równomiernie na [vmin, vmax].
    Skrajne trójkąty sięgają krok poza zakres, więc vmin i vmax mają μ=1.
    """
    var = InputVariable(name=name, vmin=vmin, vmax=vmax)
    if n_labels == 1:
        half = max(vmax - vmin, 1.0)
        var.add_term("L0", Triangular(vmin - half, (vmin + vmax) / 2.0, vmax + half))
        return var
    # stała kolumna: krok jednostkowy, żeby zachować n_labels etykiet
    step = (vmax - vmin) / (n_labels - 1) if vmax > vmin else 1.0
    for j in range(n_labels):
        center = vmin + step * j
        var.add_term(f"L{j}", Triangular(center - step, center, center + step))
    return var


def categorical_partition(name: str, values: List[str]) -> InputVariable:
    var = InputVariable(name=name, vmin=0.0, vmax=float(max(len(values) - 1, 0)), categorical=True)
    for code, value in enumerate(values):
        var.add_term(value, Singleton(float(code)))
    return var
