import logging
import sys

from .commands.parser import build_parser
from ..fuzzy.core.types import FuzzyError


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return args.func(args)
    except FuzzyError as e:
        raise SystemExit(f"[{args.cmd}] {e}") from e

if __name__ == "__main__":
    main()
