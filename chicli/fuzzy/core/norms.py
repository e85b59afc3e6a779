from typing import Iterable
from .types import Float, CompatibilityType

# --- T-normy ---
def t_min(vals: Iterable[Float]) -> Float:
    it = iter(vals)
    try:
        m = float(next(it))
    except StopIteration:
        return 1.0
    for v in it:
        if v < m: m = float(v)
    return m

def t_prod(vals: Iterable[Float]) -> Float:
    p = 1.0
    for v in vals:
        p *= float(v)
    return p

TNORMS = {
    CompatibilityType.MINIMUM: t_min,
    CompatibilityType.PRODUCT: t_prod,
}
