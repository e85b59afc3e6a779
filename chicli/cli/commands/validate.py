from ...fuzzy.core.types import ConfigurationError
from ...fuzzy.io import record


def cmd_validate(args):
    # zakresy etykiet i klas sprawdza już wczytywanie rekordu
    rb = record.load(args.model)
    for i, r in enumerate(rb.rules, 1):
        if r.weight <= 0:
            raise ConfigurationError(f"Reguła {i}: niedodatnia waga {r.weight}")
    print(f"OK: variables={rb.n_variables}, labels={rb.n_labels}, classes={len(rb.classes)}, rules={len(rb)}")
    print(f"tnorm={rb.compatibility_type.name}, rule_weight={rb.rule_weight.name}, frm={rb.inference_type.name}")
    print(f"positive_class={rb.classes[rb.positive_class] if rb.classes else rb.positive_class}, "
          f"positive_cost={rb.positive_class_cost:.6g}, negative_cost={rb.negative_class_cost:.6g}")
    return rb
