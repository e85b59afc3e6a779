import csv
from typing import List

from ..argtypes import parse_col, parse_cols_list
from ...fuzzy.core.types import ConfigurationError
from ...fuzzy.io import record
from ...fuzzy.io.dataset_io import read_csv
from ...fuzzy.model.classifier import Classifier


def _resolve_names_to_indices(names_or_indices, colnames) -> List[int]:
    idxs = []
    for spec in names_or_indices:
        if isinstance(spec, int):
            idxs.append(spec if spec >= 0 else len(colnames) + spec)
        else:
            try:
                idxs.append(colnames.index(spec))
            except ValueError:
                raise ConfigurationError(f"Kolumna '{spec}' nie istnieje w CSV (kolumny: {colnames}).") from None
    return idxs


def _input_mapping(rb, colnames, ignore_idxs):
    """Nazwy wejść modelu -> indeksy kolumn: po nazwie, gdy nagłówek je zawiera, inaczej po pozycji."""
    if all(n in colnames for n in rb.names):
        return {n: colnames.index(n) for n in rb.names}
    candidates = [i for i in range(len(colnames)) if i not in ignore_idxs]
    if len(candidates) < len(rb.names):
        raise ConfigurationError(f"Za mało kolumn: dostępne={len(candidates)}, potrzebne={len(rb.names)}.")
    return {n: candidates[i] for i, n in enumerate(rb.names)}


def cmd_apply(args):
    """
    Zastosuj model (batch classify) do CSV.
      - wejścia dopasowane po nazwach z nagłówka albo po pozycji (z pominięciem --ignore-cols)
      - --label-col: kolumna z prawdziwą klasą; domyślnie jedyna pozostała kolumna po wejściach
      - niesklasyfikowane przykłady dostają pustą predykcję
    Zwraca słownik z liczbą przykładów, poprawnych i niesklasyfikowanych.
    """
    rb = record.load(args.model)
    clf = Classifier(rb)
    colnames, rows = read_csv(args.csv)

    ignore_idxs = _resolve_names_to_indices(parse_cols_list(getattr(args, "ignore_cols", None)), colnames)
    mapping = _input_mapping(rb, colnames, ignore_idxs)

    label_spec = getattr(args, "label_col", None)
    if label_spec is not None and label_spec != "":
        label_idx = _resolve_names_to_indices([parse_col(label_spec)], colnames)[0]
    else:
        rest = [i for i in range(len(colnames)) if i not in mapping.values() and i not in ignore_idxs]
        label_idx = rest[-1] if len(rest) == 1 else None

    print("[apply] Mapowanie var->kolumna:")
    for vn, idx in mapping.items():
        print(f"  {vn} <- [{idx}] {colnames[idx]}")
    if label_idx is not None:
        print(f"[apply] Kolumna etykiety: [{label_idx}] {colnames[label_idx]}")

    # --- nagłówek wynikowy ---
    encoding = getattr(args, "encoding", None) or "label"
    if encoding == "decimal":
        header_out = ["_pred_decimal"]
    elif encoding == "label":
        header_out = ["_pred_label"]
    else:  # binary one-hot
        header_out = [f"_pred_{lbl}" for lbl in rb.classes]
    header_out += [f"_score_{lbl}" for lbl in rb.classes]

    out_path = getattr(args, "out", None)
    out_f = open(out_path, "w", newline="", encoding="utf-8") if out_path else None
    writer = csv.writer(out_f) if out_f else None
    if writer:
        writer.writerow(header_out)

    total = correct = unclassified = 0
    try:
        for row in rows:
            example = rb.encode_example({vn: row[idx] for vn, idx in mapping.items()})
            res = clf.explain(example, threshold=float("inf"))
            chosen = res["chosen"]
            total += 1
            if chosen is None:
                unclassified += 1
            if label_idx is not None and chosen is not None and row[label_idx] == rb.classes[chosen]:
                correct += 1

            if encoding == "decimal":
                outrow = ["" if chosen is None else chosen]
            elif encoding == "label":
                outrow = ["" if chosen is None else rb.classes[chosen]]
            else:
                outrow = [1 if c == chosen else 0 for c in range(len(rb.classes))]
            outrow += [float(s) for s in res["strengths"]]

            if writer:
                writer.writerow(outrow)
            else:
                print(",".join(str(x) for x in outrow))
    finally:
        if out_f:
            out_f.close()

    if out_path:
        print(f"[apply] Wyniki zapisane do {out_path}")
    summary = {"total": total, "unclassified": unclassified}
    if label_idx is not None:
        summary["correct"] = correct
        summary["accuracy"] = correct / total if total else 0.0
        print(f"[apply] Accuracy: {summary['accuracy']:.4f} ({correct}/{total}), niesklasyfikowane: {unclassified}")
    else:
        print(f"[apply] Przykłady: {total}, niesklasyfikowane: {unclassified}")
    return summary
