import argparse
from ..argtypes import (
    parse_cols_list, parse_col, positive_int,
    TNORM_CHOICES, RULE_WEIGHT_CHOICES, FRM_CHOICES, COST_POLICY_CHOICES, ENC_CHOICES,
    TNORM_DEFAULT, RULE_WEIGHT_DEFAULT, FRM_DEFAULT,
)
# importy komend:
from .apply import cmd_apply
from .build import cmd_build
from .describe import cmd_describe
from .merge import cmd_merge
from .predict import cmd_predict
from .run import cmd_run
from .show import cmd_show
from .validate import cmd_validate

def build_parser():
    fmt = argparse.ArgumentDefaultsHelpFormatter
    ap = argparse.ArgumentParser(
        prog="chi",
        description=("Chi fuzzy rule classifier – uczenie reguł rozmytych (Chi et al.) z wagami "
                     "kosztowymi i budową na shardach (describe → build → merge → validate/show → predict → apply)"),
        formatter_class=fmt,
        epilog=(
            "Przykłady:\n"
            "  chi describe --csv iris.csv --label Species --out iris.json\n"
            "  chi build --data iris.csv --dataset iris.json --out iris.chrb --labels 3 \\\n"
            "            --tnorm product --rule-weight Penalized_Certainty_Factor --frm Winning_Rule --shards 4 --jobs 2\n"
            "  chi build --data iris.csv --dataset iris.json --split-dir parts/ --shards 4\n"
            "  chi merge parts/ --out iris.chrb\n"
            "  chi validate --model iris.chrb\n"
            "  chi show --model iris.chrb --at SepalLengthCm=5.1 SepalWidthCm=3.5 PetalLengthCm=1.4 PetalWidthCm=0.2\n"
            "  chi predict --model iris.chrb SepalLengthCm=5.9 SepalWidthCm=3.0 PetalLengthCm=5.1 PetalWidthCm=1.8 --explain\n"
            "  chi apply --model iris.chrb --csv iris.csv --label-col Species --out preds.csv\n"
            "  chi run --config pipeline.yaml\n"
        )
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="logowanie na poziomie DEBUG")

    sub = ap.add_subparsers(dest="cmd", required=True)

    # describe
    sp_d = sub.add_parser("describe", help="Wyznacz deskryptor zbioru (JSON) z CSV", formatter_class=fmt)
    sp_d.add_argument("--csv", required=True)
    sp_d.add_argument("--out", required=True, help="plik JSON z deskryptorem")
    sp_d.add_argument("--label", type=parse_col, default=-1, help="kolumna etykiety (indeks lub nazwa)")
    sp_d.add_argument("--categorical", type=parse_cols_list, default="",
                      help="kolumny traktowane jako kategoryczne (indeksy lub nazwy)")
    sp_d.add_argument("--ignore-cols", type=parse_cols_list, default="",
                      help="kolumny do pominięcia (indeksy lub nazwy)")
    sp_d.set_defaults(func=cmd_describe)

    # build
    sp_b = sub.add_parser("build", help="Ucz bazę reguł z CSV", formatter_class=fmt)
    g_io = sp_b.add_argument_group("Wejście/Wyjście")
    g_io.add_argument("--data", required=True, help="CSV z danymi uczącymi")
    g_io.add_argument("--dataset", help="deskryptor JSON (jeśli brak -> wyznaczany z --data)")
    g_io.add_argument("--label", type=parse_col, default=-1, help="kolumna etykiety, gdy brak --dataset")
    g_io.add_argument("--out", help="plik scalonego modelu")
    g_io.add_argument("--split-dir", help="katalog na modele poszczególnych shardów")
    g_io.add_argument("--time", help="plik, do którego zapisany zostanie czas budowy")
    g_m = sp_b.add_argument_group("Model")
    g_m.add_argument("--labels", type=positive_int, default=3, help="liczba etykiet rozmytych na zmienną")
    g_m.add_argument("--tnorm", choices=TNORM_CHOICES, default=TNORM_DEFAULT)
    g_m.add_argument("--rule-weight", choices=RULE_WEIGHT_CHOICES, default=RULE_WEIGHT_DEFAULT)
    g_m.add_argument("--frm", choices=FRM_CHOICES, default=FRM_DEFAULT, help="metoda wnioskowania")
    g_p = sp_b.add_argument_group("Budowa na shardach")
    g_p.add_argument("--shards", type=positive_int, default=1)
    g_p.add_argument("--jobs", type=int, default=1, help="liczba procesów (joblib; -1 = wszystkie rdzenie)")
    g_p.add_argument("--cost-policy", choices=COST_POLICY_CHOICES, default="local",
                     help="koszty klas liczone per shard (local) lub z całych danych (global)")
    sp_b.set_defaults(func=cmd_build)

    # merge
    sp_m = sub.add_parser("merge", help="Scal modele shardów w jeden plik", formatter_class=fmt)
    sp_m.add_argument("models", nargs="+", help="pliki modeli lub katalogi shardów, w kolejności scalania")
    sp_m.add_argument("--out", required=True)
    sp_m.set_defaults(func=cmd_merge)

    # validate
    sp_v = sub.add_parser("validate", help="Walidacja spójności modelu", formatter_class=fmt)
    sp_v.add_argument("--model", required=True)
    sp_v.set_defaults(func=cmd_validate)

    # show
    sp_s = sub.add_parser("show", help="Pokaż reguły; opcj. przynależności i α w punkcie", formatter_class=fmt)
    sp_s.add_argument("--model", required=True)
    sp_s.add_argument("--at", nargs="*")
    sp_s.add_argument("--fired-only", action="store_true", help="Pokaż tylko reguły, które się odpaliły dla --at")
    sp_s.add_argument("--min-alpha", type=float, default=0.0, help="Próg α dla --fired-only")
    sp_s.set_defaults(func=cmd_show)

    # predict
    sp_p = sub.add_parser("predict", help="Predykcja dla pojedynczej próbki", formatter_class=fmt)
    sp_p.add_argument("--model", required=True)
    sp_p.add_argument("kv", nargs="+", help="pary nazwa=wartość")
    sp_p.add_argument("--explain", action="store_true", help="pokaż siły klas i aktywne reguły")
    sp_p.add_argument("--json", action="store_true")
    sp_p.add_argument("--threshold", type=float, default=0.0, help="minimalne α reguły w wyjaśnieniu")
    sp_p.set_defaults(func=cmd_predict)

    # apply
    sp_a = sub.add_parser("apply", help="Zastosuj model do CSV (batch classify)", formatter_class=fmt)
    sp_a.add_argument("--model", required=True)
    sp_a.add_argument("--csv", required=True)
    sp_a.add_argument("--out", help="plik wyjściowy CSV (jeśli brak -> stdout)")
    sp_a.add_argument("--label-col", help="kolumna z prawdziwą klasą (indeks lub nazwa)")
    sp_a.add_argument("--ignore-cols", type=parse_cols_list, default="",
                      help="lista kolumn do pominięcia (indeksy lub nazwy)")
    sp_a.add_argument("--encoding", choices=ENC_CHOICES, default="label",
                      help="format klas: 'label' | 'decimal' | 'binary'")
    sp_a.set_defaults(func=cmd_apply)

    # run
    sp_run = sub.add_parser("run", help="Uruchom pipeline z pliku konfiguracyjnego")
    sp_run.add_argument("--config", required=True, help="Ścieżka do pliku config.json / config.yaml")
    sp_run.set_defaults(func=cmd_run)

    return ap
