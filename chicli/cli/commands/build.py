from pathlib import Path

from ..argtypes import FRM_DEFAULT, RULE_WEIGHT_DEFAULT, TNORM_DEFAULT, parse_col
from ...fuzzy.core.types import ConfigurationError
from ...fuzzy.io import record
from ...fuzzy.io.dataset_io import describe, load_data, load_dataset
from ...fuzzy.model.learner import ChiConfig
from ...fuzzy.model.partial import PartialBuilder


def cmd_build(args):
    """
    Ucz bazę reguł Chi z CSV:
      - deskryptor z --dataset (JSON) albo wyznaczony z --data
      - --shards N: dane dzielone na N ciągłych części, uczonych niezależnie (--jobs równolegle)
      - wynik: scalony model w --out i/lub modele shardów w --split-dir
    """
    out = getattr(args, "out", None)
    split_dir = getattr(args, "split_dir", None)
    if not out and not split_dir:
        raise ConfigurationError("Podaj --out lub --split-dir")

    dataset_path = getattr(args, "dataset", None)
    if dataset_path:
        dataset = load_dataset(dataset_path)
    else:
        dataset, _ = describe(args.data, label=parse_col(getattr(args, "label", -1)))
    data = load_data(args.data, dataset)

    config = ChiConfig.from_names(
        n_labels=getattr(args, "labels", None) or 3,
        tnorm=getattr(args, "tnorm", None) or TNORM_DEFAULT,
        rule_weight=getattr(args, "rule_weight", None) or RULE_WEIGHT_DEFAULT,
        frm=getattr(args, "frm", None) or FRM_DEFAULT,
    )
    builder = PartialBuilder(
        config,
        n_shards=int(getattr(args, "shards", None) or 1),
        n_jobs=int(getattr(args, "jobs", None) or 1),
        cost_policy=getattr(args, "cost_policy", None) or "local",
    )
    print(f"[build] {len(data)} przykładów, etykiety={config.n_labels}, "
          f"tnorm={config.compatibility_type.name}, rw={config.rule_weight.name}, "
          f"frm={config.inference_type.name}, shardy={builder.n_shards}")

    rule_base, stats, outputs = builder.build(data)
    for s in stats.shards:
        print(f"  shard {s.index}: {s.n_examples} przykładów, {s.n_rules} reguł, "
              f"klasa pozytywna={rule_base.classes[s.positive_class]} (koszt {s.positive_class_cost:.6g})")
    print(f"[build] Reguły: {stats.rules_before_merge} -> {stats.rules_after_merge} "
          f"(duplikaty: {stats.duplicates})")
    print(f"[build] Czas budowy: {stats.elapsed()}")

    if split_dir:
        paths = record.save_shards([o.rule_base for o in outputs], split_dir)
        print(f"[build] Modele shardów ({len(paths)}) zapisane do {split_dir}")
    if out:
        record.save(rule_base, out)
        print(f"[build] Model zapisany do {out}")

    time_path = getattr(args, "time", None)
    if time_path:
        Path(time_path).parent.mkdir(parents=True, exist_ok=True)
        Path(time_path).write_text(stats.elapsed() + "\n", encoding="utf-8")
    return rule_base
