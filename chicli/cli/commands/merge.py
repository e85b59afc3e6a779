from ...fuzzy.io import record
from ...fuzzy.model.rulebase import merge


def cmd_merge(args):
    """Scal modele (pliki lub katalogi shardów) w podanej kolejności; pierwszy antecedent wygrywa."""
    models = args.models if isinstance(args.models, (list, tuple)) else [args.models]
    parts = [record.load(m) for m in models]
    for m, rb in zip(models, parts):
        print(f"  {m}: {len(rb)} reguł")
    rb = merge(parts)
    record.save(rb, args.out)
    print(f"[merge] {len(parts)} modeli -> {len(rb)} reguł, zapisano do {args.out}")
    return rb
