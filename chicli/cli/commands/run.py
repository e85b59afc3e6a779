import json
from argparse import Namespace

import yaml

from .apply import cmd_apply
from .build import cmd_build
from .describe import cmd_describe
from .merge import cmd_merge
from .predict import cmd_predict
from .show import cmd_show
from .validate import cmd_validate
from ...fuzzy.core.types import ConfigurationError

# kolejność wykonywania sekcji pipeline'u
STEPS = (
    ("describe", cmd_describe),
    ("build", cmd_build),
    ("merge", cmd_merge),
    ("show", cmd_show),
    ("validate", cmd_validate),
    ("apply", cmd_apply),
    ("predict", cmd_predict),
)

ENGINE_KEYS = ("labels", "tnorm", "rule_weight", "frm", "shards", "jobs", "cost_policy")


def _ns(d: dict) -> Namespace:
    return Namespace(**{k.replace("-", "_"): v for k, v in d.items()})


def _load_cfg(path: str) -> dict:
    with open(path, encoding="utf-8") as f:
        if path.lower().endswith((".yml", ".yaml")):
            cfg = yaml.safe_load(f)
        else:
            cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"Config {path} must be a mapping of pipeline sections")
    return cfg


def cmd_run(args):
    cfg = _load_cfg(args.config)
    unknown = set(cfg) - {name for name, _ in STEPS} - {"engine"}
    if unknown:
        raise ConfigurationError(f"Unknown config sections: {sorted(unknown)}")

    for name, step in STEPS:
        if name not in cfg:
            continue
        print(f"[run] {name}")
        ns = _ns(cfg[name] or {})
        if name == "build":
            # silnik jako fallback (jeśli nie podano w build)
            eng = cfg.get("engine") or {}
            for k in ENGINE_KEYS:
                if getattr(ns, k, None) is None and k in eng:
                    setattr(ns, k, eng[k])
        step(ns)
