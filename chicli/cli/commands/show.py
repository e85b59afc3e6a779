import sys
from typing import Dict, List

from ..argtypes import parse_keyvals
from ...fuzzy.io import record


# ========= utils: ANSI / pretty =========

_RESET = "\x1b[0m"

def _use_ansi() -> bool:
    return sys.stdout.isatty()

def _ansi_color(mu: float) -> str:
    """
    Kolor wg przynależności (μ):
      ≥ 0.50 → zielony
      ≥ 0.20 → żółty
      < 0.20 → szary
    """
    if not _use_ansi():
        return ""
    if mu >= 0.50:
        return "\x1b[32m"  # green
    if mu >= 0.20:
        return "\x1b[33m"  # yellow
    return "\x1b[90m"      # grey


def _show_inputs(rb, example) -> None:
    print("Inputs:")
    for v, var in enumerate(rb.database.variables):
        kind = "categorical" if var.categorical else f"[{var.vmin},{var.vmax}]"
        if example is None:
            print(f"  {var.name} {kind} -> labels: {', '.join(lbl for lbl, _ in var.terms)}")
            continue
        parts: List[str] = []
        for j, (lbl, _) in enumerate(var.terms):
            mu = rb.database.membership(v, j, example[v])
            color = _ansi_color(mu)
            reset = _RESET if color else ""
            parts.append(f"{color}{lbl}({mu:.2f}){reset}")
        print(f"  {var.name}={example[v]:g} {kind} -> " + ", ".join(parts))


# ========= main =========

def cmd_show(args) -> None:
    """
    Bez --at: lista reguł w formacie '@Number of rules'.
    Z --at x=1 y=2: przynależności w punkcie i α = zgodność * waga dla każdej reguły;
      --fired-only pokazuje tylko reguły z α > --min-alpha.
    """
    rb = record.load(args.model)
    raw: Dict[str, str] = parse_keyvals(getattr(args, "at", None))
    if not raw:
        _show_inputs(rb, None)
        print(f"Engine: tnorm={rb.compatibility_type.name}, rule_weight={rb.rule_weight.name}, "
              f"frm={rb.inference_type.name}")
        print(rb.print_string(), end="")
        return

    example = rb.encode_example(raw)
    fired_only = bool(getattr(args, "fired_only", False))
    min_alpha = float(getattr(args, "min_alpha", 0.0) or 0.0)
    _show_inputs(rb, example)

    print("Rules:")
    shown = 0
    for i, r in enumerate(rb.rules, 1):
        alpha = r.compatibility(example, rb.database) * r.weight
        if fired_only and alpha <= min_alpha:
            continue
        ants = " AND ".join(
            f"{rb.names[v]} IS {rb.database.label_name(v, lbl)}" for v, lbl in enumerate(r.antecedent)
        )
        print(f"  {i}: {ants}: {rb.classes[r.clas]} with Rule Weight: {r.weight}  α={alpha:.4f}")
        shown += 1

    if shown == 0:
        print("  (brak reguł do wyświetlenia z tymi filtrami)")
