"""CLI: python -m arith [--tree] [--tokens] [--strict] [--bits N] <expression>
       python -m arith --self-test"""

import logging
import sys

from .calculator import calculate, self_test
from .evaluator import evaluate
from .parser import parse
from .scanner import tokenize
from .types import ArithError, Diagnostics, Options, dump

USAGE = (
    "Usage: python -m arith [--tree] [--tokens] [--strict] [--bits N] <expression>\n"
    "       python -m arith --self-test"
)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(stream=sys.stdout, format="%(message)s")

    if "--self-test" in args:
        sys.exit(0 if self_test() else 1)

    options = Options()
    show_tree = show_tokens = False
    rest = []
    while args:
        arg = args.pop(0)
        if arg == "--tree":
            show_tree = True
        elif arg == "--tokens":
            show_tokens = True
        elif arg == "--strict":
            options.strict = True
        elif arg == "--bits" and args and args[0].isdigit() and int(args[0]) > 0:
            options.bits = int(args.pop(0))
        else:
            rest.append(arg)

    if len(rest) != 1:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    src = rest[0]

    try:
        if show_tokens:
            for tok in tokenize(src, Diagnostics(echo=False)):
                print(tok)
        if show_tree:
            diagnostics = Diagnostics(strict=options.strict)
            tree = parse(src, options, diagnostics)
            print(dump(tree), end="")
            value = evaluate(tree, options, diagnostics)
        else:
            value = calculate(src, options)["value"]
    except ArithError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    print(value)


if __name__ == "__main__":
    main()
