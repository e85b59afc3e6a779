from ..argtypes import parse_col, parse_cols_list
from ...fuzzy.io.dataset_io import describe, save_dataset


def cmd_describe(args):
    """Wyznacz deskryptor zbioru (zakresy, kategorie, kolumna etykiety) z CSV i zapisz go jako JSON."""
    dataset, columns = describe(
        args.csv,
        label=parse_col(getattr(args, "label", -1)),
        categorical=parse_cols_list(getattr(args, "categorical", None)),
        ignore=parse_cols_list(getattr(args, "ignore_cols", None)),
    )
    save_dataset(dataset, args.out)

    print(f"[describe] Atrybuty ({len(dataset.attributes)}):")
    for col, attr in zip(columns, dataset.attributes):
        role = " <- etykieta" if attr is dataset.label else ""
        if attr.is_numerical():
            print(f"  [{col}] {attr.name}: numerical [{attr.vmin}, {attr.vmax}]{role}")
        else:
            print(f"  [{col}] {attr.name}: categorical {list(attr.values)}{role}")
    print(f"[describe] Deskryptor zapisany do {args.out}")
    return dataset
