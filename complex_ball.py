"""Bolas complejas: par (real, imag) de bolas reales con la misma precisión.

Las operaciones no modifican sus operandos; siempre devuelven una bola
nueva. Si los operandos tienen precisiones distintas, el resultado usa
la menor.
"""

from __future__ import annotations

from dataclasses import dataclass

from mpmath import mpf

from ball_errors import DomainError
from real_ball import RealBall, mag_add


@dataclass(frozen=True)
class ComplexBall:
    """Rectángulo real x imag que contiene un número complejo exacto."""

    real: RealBall
    imag: RealBall

    def __post_init__(self):
        if self.real.prec != self.imag.prec:
            raise ValueError(
                "Las partes real e imaginaria deben compartir la precisión "
                f"({self.real.prec} != {self.imag.prec})"
            )

    @property
    def prec(self) -> int:
        return self.real.prec

    # ── Construcción ─────────────────────────────────────────────

    @classmethod
    def from_float(cls, real, imag, prec: int) -> ComplexBall:
        return cls(RealBall.from_value(real, prec), RealBall.from_value(imag, prec))

    @classmethod
    def from_real(cls, ball: RealBall) -> ComplexBall:
        return cls(ball, RealBall.zero(ball.prec))

    @classmethod
    def zero(cls, prec: int) -> ComplexBall:
        return cls(RealBall.zero(prec), RealBall.zero(prec))

    @classmethod
    def one(cls, prec: int) -> ComplexBall:
        return cls(RealBall.one(prec), RealBall.zero(prec))

    @classmethod
    def indeterminate(cls, prec: int) -> ComplexBall:
        return cls(RealBall.indeterminate(prec), RealBall.indeterminate(prec))

    def _coerce(self, other) -> ComplexBall:
        if isinstance(other, ComplexBall):
            return other
        if isinstance(other, RealBall):
            return ComplexBall.from_real(other)
        return ComplexBall.from_float(other, 0, self.prec)

    # ── Consultas ────────────────────────────────────────────────

    def is_finite(self) -> bool:
        return self.real.is_finite() and self.imag.is_finite()

    def is_real(self) -> bool:
        """True si la parte imaginaria es exactamente cero."""
        return self.imag.is_zero()

    def is_exact(self) -> bool:
        return self.real.is_exact() and self.imag.is_exact()

    def contains(self, real, imag=0) -> bool:
        return self.real.contains(real) and self.imag.contains(imag)

    def contains_ball(self, other: ComplexBall) -> bool:
        return self.real.contains_ball(other.real) and self.imag.contains_ball(other.imag)

    def contains_zero(self) -> bool:
        return self.real.contains_zero() and self.imag.contains_zero()

    def crosses_branch_cut(self) -> bool:
        """True si la bola toca el semieje real negativo desde ambos lados.

        Ahí saltan arg, ln y las raíces principales.
        """
        return (
            self.imag.contains_zero()
            and not self.imag.is_zero()
            and self.real.lower() < 0
        )

    def radius(self) -> mpf:
        """Cota superior de |z - centro| para todo z de la bola."""
        return mag_add(self.real.rad, self.imag.rad)

    def abs_upper(self) -> mpf:
        return mag_add(self.real.abs_upper(), self.imag.abs_upper())

    def abs_lower(self) -> mpf:
        return max(self.real.abs_lower(), self.imag.abs_lower())

    # ── Aritmética ───────────────────────────────────────────────

    def conj(self) -> ComplexBall:
        return ComplexBall(self.real, -self.imag)

    def __neg__(self) -> ComplexBall:
        return ComplexBall(-self.real, -self.imag)

    def add(self, other) -> ComplexBall:
        other = self._coerce(other)
        return ComplexBall(self.real + other.real, self.imag + other.imag)

    def sub(self, other) -> ComplexBall:
        other = self._coerce(other)
        return ComplexBall(self.real - other.real, self.imag - other.imag)

    def mul(self, other) -> ComplexBall:
        other = self._coerce(other)
        a, b = self.real, self.imag
        c, d = other.real, other.imag
        if self.is_real() and other.is_real():
            product = a * c
            return ComplexBall(product, RealBall.zero(product.prec))
        return ComplexBall(a * c - b * d, a * d + b * c)

    def div(self, other) -> ComplexBall:
        """Cociente self / other.

        Raises:
            DomainError: el divisor encierra el cero (el cociente no está
                acotado).
        """
        other = self._coerce(other)
        prec = min(self.prec, other.prec)
        if not (self.is_finite() and other.is_finite()):
            return ComplexBall.indeterminate(prec)
        if other.contains_zero():
            raise DomainError("División por un valor que encierra el cero")

        a, b = self.real, self.imag
        c, d = other.real, other.imag
        if other.is_real():
            return ComplexBall(a / c, b / c)

        denominator = c.sqr() + d.sqr()
        if denominator.contains_zero():
            raise DomainError("División por un valor que encierra el cero")
        return ComplexBall((a * c + b * d) / denominator, (b * c - a * d) / denominator)

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div
