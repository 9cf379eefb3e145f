"""Punto de entrada de la calculadora de bolas complejas."""

import argparse
import logging
import sys

from ball_engine import BallCalculatorEngine
from ball_errors import BallError


DEFAULT_PRECISION = 128
DEFAULT_OPERATION = "add"
DEFAULT_OPERAND = "1,0"
OPERAND_FLAGS = ("-a", "-b")

logger = logging.getLogger(__name__)


def _precision(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"precisión inválida: {text!r}") from exc
    if value < 2:
        raise argparse.ArgumentTypeError(f"la precisión debe ser al menos 2 bits: {value}")
    return value


def _attach_operands(argv: list[str]) -> list[str]:
    """Convierte `-a -1,0` en `-a=-1,0`.

    argparse toma `-1,0` por una opción desconocida; el valor que sigue a
    -a o -b es siempre un operando.
    """
    joined = []
    tokens = iter(argv)
    for token in tokens:
        if token in OPERAND_FLAGS:
            value = next(tokens, None)
            if value is not None:
                token = f"{token}={value}"
        joined.append(token)
    return joined


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="complex-ball",
        description="Aritmética compleja con bolas: centro más radio de error garantizado.",
    )
    parser.add_argument(
        "--prec", "--precision",
        dest="precision",
        type=_precision,
        default=DEFAULT_PRECISION,
        help="precisión de trabajo en bits (por defecto %(default)s)",
    )
    parser.add_argument(
        "--range",
        dest="as_range",
        action="store_true",
        help="muestra los resultados como [centro +/- radio]",
    )
    parser.add_argument(
        "--op", "--operation",
        dest="operation",
        default=DEFAULT_OPERATION,
        help="add, sub, mul, div, exp, ln, pow, log, sqrt, root, sin, cos, tan, ctan, abs o arg",
    )
    parser.add_argument("-a", default=DEFAULT_OPERAND, help="operando a con formato real,imag (p. ej. -a -1,0)")
    parser.add_argument("-b", default=DEFAULT_OPERAND, help="operando b con formato real,imag")
    parser.add_argument("-v", "--verbose", action="store_true", help="registra detalles de depuración")
    return parser


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(_attach_operands(list(argv)))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    engine = BallCalculatorEngine(precision=args.precision)
    try:
        evaluation = engine.evaluate(args.operation, args.a, args.b)
        lines = engine.report(evaluation, as_range=args.as_range)
    except BallError as exc:
        logger.debug("Fallo en %s", args.operation, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
