"""
Motor de cálculo con bolas complejas de precisión arbitraria.

Contrato de interfaz:
    - evaluate(operation: str, a: str, b: str) -> Evaluation
    - report(evaluation, as_range: bool) -> list[str]
    - digits: dígitos decimales equivalentes a la precisión
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

# antes que los módulos de bolas, que importan mpmath sin protección
try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc

import elementary_functions as ef
from ball_errors import UnsupportedOperationError
from ball_formatter import format_complex, format_fixed
from ball_parser import parse_operand
from complex_ball import ComplexBall
from real_ball import to_index

logger = logging.getLogger(__name__)


class ComplexBallProvider:
    """Proveedor de operaciones sobre bolas complejas."""

    @staticmethod
    def _unary(fn):
        def wrapped(a, _b):
            return fn(a)

        return wrapped

    @staticmethod
    def _root(a: ComplexBall, b: ComplexBall) -> ComplexBall:
        # el grado sale de la parte real de a
        return ef.root(b, to_index(a.real))

    @staticmethod
    def _log(a: ComplexBall, b: ComplexBall) -> ComplexBall:
        # logaritmo de b en base a
        return ef.log_base(b, a)

    def build_namespace(self) -> dict:
        return {
            "add": ComplexBall.add,
            "sub": ComplexBall.sub,
            "mul": ComplexBall.mul,
            "div": ComplexBall.div,
            "exp": self._unary(ef.exp),
            "ln": self._unary(ef.ln),
            "pow": ef.power,
            "log": self._log,
            "sqrt": self._unary(ef.sqrt),
            "root": self._root,
            "sin": self._unary(ef.sin),
            "cos": self._unary(ef.cos),
            "tan": self._unary(ef.tan),
            "ctan": self._unary(ef.cot),
            "abs": self._unary(ef.absolute),
            "arg": self._unary(ef.arg),
        }


@dataclass(frozen=True)
class Evaluation:
    operation: str
    a: ComplexBall
    b: ComplexBall
    result: ComplexBall


class BallCalculatorEngine:
    """Evalúa una operación sobre dos operandos `real,imag` con `precision` bits."""

    def __init__(self, precision: int = 128):
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 2:
            raise ValueError(f"La precisión debe ser un entero mayor o igual que 2: {precision!r}")
        self._precision = precision
        self._provider = ComplexBallProvider()
        self._namespace = self._provider.build_namespace()

    # ── Propiedades ──────────────────────────────────────────────

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def digits(self) -> int:
        """Dígitos decimales equivalentes a la precisión binaria."""
        return int(self._precision * math.log10(2))

    @property
    def operations(self) -> list[str]:
        return list(self._namespace)

    # ── Evaluación principal ─────────────────────────────────────

    def parse_operand(self, text: str) -> ComplexBall:
        return parse_operand(text, self._precision)

    def evaluate(self, operation: str, a_text: str, b_text: str) -> Evaluation:
        fn = self._namespace.get(operation)
        if fn is None:
            raise UnsupportedOperationError(operation)

        a = self.parse_operand(a_text)
        b = self.parse_operand(b_text)
        result = fn(a, b)
        logger.debug(
            "%s con %d bits: radio real %s, radio imaginario %s",
            operation,
            self._precision,
            mp.nstr(result.real.rad, 3),
            mp.nstr(result.imag.rad, 3),
        )
        return Evaluation(operation, a, b, result)

    # ── Informe del resultado ────────────────────────────────────

    def report(self, evaluation: Evaluation, as_range: bool = False) -> list[str]:
        """Líneas de salida de una evaluación.

        Raises:
            ConversionError: algún valor no se puede escribir como decimal finito.
        """
        digits = self.digits
        name = evaluation.operation
        return [
            f"Precisión = {self._precision} bits (~{digits} dígitos decimales)",
            f"a: {format_complex(evaluation.a, digits, as_range)}",
            f"b: {format_complex(evaluation.b, digits, as_range)}",
            f"{name}: {format_complex(evaluation.result, digits, as_range)}",
            f"{name}:{format_fixed(evaluation.result, digits)}",
        ]
