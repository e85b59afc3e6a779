from __future__ import annotations
from dataclasses import dataclass
from .types import Float

class MembershipFunction:
    def mu(self, x: Float) -> Float:
        raise NotImplementedError
    def support(self) -> tuple[Float, Float]:
        raise NotImplementedError
    def params(self) -> tuple[Float, Float, Float]:
        raise NotImplementedError

@dataclass(frozen=True)
class Triangular(MembershipFunction):
    a: Float; b: Float; c: Float
    def mu(self, x: Float) -> Float:
        if x <= self.a or x >= self.c: return 0.0
        if x == self.b: return 1.0
        if x < self.b:  return (x - self.a) / (self.b - self.a or 1e-12)
        return (self.c - x) / (self.c - self.b or 1e-12)
    def support(self) -> tuple[Float, Float]:
        return (self.a, self.c)
    def params(self) -> tuple[Float, Float, Float]:
        return (self.a, self.b, self.c)

@dataclass(frozen=True)
class Singleton(MembershipFunction):
    """Crisp label of a categorical attribute (one category code)."""
    value: Float
    def mu(self, x: Float) -> Float:
        return 1.0 if x == self.value else 0.0
    def support(self) -> tuple[Float, Float]:
        return (self.value, self.value)
    def params(self) -> tuple[Float, Float, Float]:
        return (self.value, self.value, self.value)
