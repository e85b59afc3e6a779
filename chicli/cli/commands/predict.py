import json

from ..argtypes import parse_keyvals
from ...fuzzy.io import record
from ...fuzzy.model.classifier import Classifier


def _class_name(rb, clas):
    return "(niesklasyfikowany)" if clas is None else rb.classes[clas]


def cmd_predict(args):
    rb = record.load(args.model)
    example = rb.encode_example(parse_keyvals(getattr(args, "kv", None) or getattr(args, "values", None)))
    clf = Classifier(rb)

    if not (getattr(args, "explain", False) or getattr(args, "json", False)):
        clas = clf.classify(example)
        print(f"class: {_class_name(rb, clas)}")
        return clas

    res = clf.explain(example, threshold=getattr(args, "threshold", 0.0) or 0.0)
    if getattr(args, "json", False):
        res = dict(res, chosen_label=None if res["chosen"] is None else rb.classes[res["chosen"]])
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return res["chosen"]

    print(f"class: {_class_name(rb, res['chosen'])}")
    print("strengths: " + ", ".join(f"{c}={s:.4f}" for c, s in zip(rb.classes, res["strengths"])))
    for r in res["rules"]:
        ants = " AND ".join(f"{a['var']} IS {a['label']} (μ={a['mu']:.3f})" for a in r["antecedent"])
        print(f"  R{r['rule_index'] + 1}: {ants}: {rb.classes[r['class']]}  alpha={r['alpha']:.4f} weight={r['weight']:.4f}")
    return res["chosen"]
