"""Bolas reales de precisión arbitraria.

Una bola es un punto medio con `prec` bits más un radio no negativo que
acota el error: el valor exacto está en [mid - rad, mid + rad]. Toda
operación que no pueda representar su resultado exacto agranda el radio
(redondeo hacia afuera).

Los radios se guardan con RADIUS_PREC bits y siempre se redondean hacia
arriba. Ojo: los operadores de mpf (+, -, abs) redondean a la precisión
global del contexto, por eso aquí solo se usan fadd/fsub/fmul/fdiv con
`prec` y `rounding` explícitos.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from fractions import Fraction

from mpmath import iv, mp, mpf

from ball_errors import ConversionError, DomainError

RADIUS_PREC = 30
GUARD_BITS = 32

INDEX_MIN = -(2**63)
INDEX_MAX = 2**63 - 1

_ZERO = mpf(0)


# ── Redondeo dirigido ────────────────────────────────────────────

def round_to(value, prec: int, rounding: str = "n") -> mpf:
    """Redondea value a prec bits con el modo indicado."""
    return mp.fmul(value, 1, prec=prec, rounding=rounding)


def exact_abs(value) -> mpf:
    value = mp.convert(value)
    return mp.fneg(value, exact=True) if value < 0 else value


def mag_up(value) -> mpf:
    """Cota superior de |value| con la precisión de radios."""
    return round_to(exact_abs(value), RADIUS_PREC, "c")


def mag_down(value) -> mpf:
    """Cota inferior de |value| con la precisión de radios."""
    return round_to(exact_abs(value), RADIUS_PREC, "f")


def mag_add(a, b) -> mpf:
    return mp.fadd(a, b, prec=RADIUS_PREC, rounding="c")


def mag_mul(a, b) -> mpf:
    return mp.fmul(a, b, prec=RADIUS_PREC, rounding="c")


def mag_div(a, b) -> mpf:
    return mp.fdiv(a, b, prec=RADIUS_PREC, rounding="c")


def low_sub(a, b) -> mpf:
    return mp.fsub(a, b, prec=RADIUS_PREC, rounding="f")


def low_mul(a, b) -> mpf:
    return mp.fmul(a, b, prec=RADIUS_PREC, rounding="f")


# ── Intervalos de mpmath (iv) ────────────────────────────────────
#
# Las funciones trascendentes se evalúan con el contexto iv, que
# redondea cada extremo hacia afuera: el intervalo devuelto contiene
# el valor exacto.

@contextmanager
def interval_prec(prec: int):
    """Como mp.workprec, pero para el contexto iv."""
    saved = iv.prec
    iv.prec = prec
    try:
        yield iv
    finally:
        iv.prec = saved


def interval_bounds(value) -> tuple[mpf, mpf]:
    """Extremos de un intervalo real de iv como mpf."""
    lo, hi = value._mpi_
    return mp.make_mpf(lo), mp.make_mpf(hi)


def interval_upper(value) -> mpf:
    """Cota superior de |x| para x en un intervalo real o complejo de iv."""
    with interval_prec(RADIUS_PREC):
        size = abs(value)
    return mag_up(interval_bounds(size)[1])


def _rounded(op, x, y, prec: int):
    """Devuelve (resultado redondeado, cota del error de redondeo)."""
    lo = op(x, y, prec=prec, rounding="f")
    hi = op(x, y, prec=prec, rounding="c")
    if lo == hi:
        return lo, _ZERO
    mid = op(x, y, prec=prec, rounding="n")
    return mid, mp.fsub(hi, lo, prec=RADIUS_PREC, rounding="c")


def to_fraction(value) -> Fraction:
    """Valor racional exacto de un entero, Fraction o mpf finito."""
    if isinstance(value, (int, Fraction)):
        return Fraction(value)
    value = mp.convert(value)
    if not mp.isfinite(value):
        raise ConversionError(f"valor no finito: {value}")
    sign, man, exp, _ = value._mpf_
    result = Fraction(man) * Fraction(2) ** exp
    return -result if sign else result


# ── Bola real ────────────────────────────────────────────────────

@dataclass(frozen=True)
class RealBall:
    """Intervalo [mid - rad, mid + rad] que contiene un valor real exacto."""

    mid: mpf
    rad: mpf
    prec: int

    def __post_init__(self):
        if self.prec < 2:
            raise ValueError(f"Precisión inválida: {self.prec}")
        if self.rad < 0:
            raise ValueError("El radio no puede ser negativo")

    # ── Construcción ─────────────────────────────────────────────

    @classmethod
    def from_value(cls, value, prec: int, error=_ZERO) -> RealBall:
        """Redondea value a prec bits y suma `error` al radio.

        Acepta int, float o mpf; el resultado es exacto si value cabe en
        prec bits y error es cero.
        """
        value = mp.convert(value)
        if not mp.isfinite(value):
            return cls(value, _ZERO, prec)
        mid, err = _rounded(mp.fmul, value, 1, prec)
        return cls(mid, mag_add(err, mag_up(error)), prec)

    @classmethod
    def from_bounds(cls, lo, hi, prec: int) -> RealBall:
        """Menor bola (con centro redondeado) que contiene [lo, hi]."""
        mid = round_to(mp.ldexp(mp.fadd(lo, hi, prec=prec), -1), prec)
        rad = max(
            mp.fsub(hi, mid, prec=RADIUS_PREC, rounding="c"),
            mp.fsub(mid, lo, prec=RADIUS_PREC, rounding="c"),
        )
        return cls(mid, rad, prec)

    @classmethod
    def from_interval(cls, value, prec: int, error=_ZERO) -> RealBall:
        """Bola que contiene un intervalo real de iv, más `error` de radio."""
        lo, hi = interval_bounds(value)
        ball = cls.from_bounds(lo, hi, prec)
        return ball.add_error(error) if error else ball

    @classmethod
    def zero(cls, prec: int) -> RealBall:
        return cls(_ZERO, _ZERO, prec)

    @classmethod
    def one(cls, prec: int) -> RealBall:
        return cls(mpf(1), _ZERO, prec)

    @classmethod
    def pi(cls, prec: int) -> RealBall:
        with interval_prec(prec + GUARD_BITS):
            value = +iv.pi
        return cls.from_interval(value, prec)

    @classmethod
    def indeterminate(cls, prec: int) -> RealBall:
        """Bola [nan +/- inf]: resultado sin información."""
        return cls(mp.nan, mp.inf, prec)

    # ── Consultas ────────────────────────────────────────────────

    def lower(self) -> mpf:
        return mp.fsub(self.mid, self.rad, prec=self.prec, rounding="f")

    def upper(self) -> mpf:
        return mp.fadd(self.mid, self.rad, prec=self.prec, rounding="c")

    def is_finite(self) -> bool:
        return bool(mp.isfinite(self.mid) and mp.isfinite(self.rad))

    def is_exact(self) -> bool:
        return self.rad == 0

    def is_zero(self) -> bool:
        return self.mid == 0 and self.rad == 0

    def contains(self, value) -> bool:
        """True si el número exacto value está dentro de la bola."""
        if mp.isinf(self.rad):
            return True
        if not self.is_finite():
            return False
        distance = abs(to_fraction(value) - to_fraction(self.mid))
        return distance <= to_fraction(self.rad)

    def contains_zero(self) -> bool:
        return exact_abs(self.mid) <= self.rad

    def contains_ball(self, other: RealBall) -> bool:
        if mp.isinf(self.rad):
            return True
        if not (self.is_finite() and other.is_finite()):
            return False
        distance = abs(to_fraction(other.mid) - to_fraction(self.mid))
        return distance + to_fraction(other.rad) <= to_fraction(self.rad)

    def overlaps(self, other: RealBall) -> bool:
        if not (self.is_finite() and other.is_finite()):
            return True
        distance = abs(to_fraction(other.mid) - to_fraction(self.mid))
        return distance <= to_fraction(self.rad) + to_fraction(other.rad)

    def abs_upper(self) -> mpf:
        """Cota superior de |x| para todo x de la bola."""
        return mag_add(mag_up(self.mid), self.rad)

    def abs_lower(self) -> mpf:
        """Cota inferior de |x| para todo x de la bola (0 si contiene el cero)."""
        low = low_sub(exact_abs(self.mid), self.rad)
        return low if low > 0 else _ZERO

    # ── Aritmética ───────────────────────────────────────────────

    def _coerce(self, other) -> RealBall:
        if isinstance(other, RealBall):
            return other
        return RealBall.from_value(other, self.prec)

    def add_error(self, error) -> RealBall:
        return RealBall(self.mid, mag_add(self.rad, mag_up(error)), self.prec)

    def __neg__(self) -> RealBall:
        return RealBall(mp.fneg(self.mid, exact=True), self.rad, self.prec)

    def __add__(self, other) -> RealBall:
        other = self._coerce(other)
        prec = min(self.prec, other.prec)
        if not (self.is_finite() and other.is_finite()):
            return RealBall.indeterminate(prec)
        mid, err = _rounded(mp.fadd, self.mid, other.mid, prec)
        return RealBall(mid, mag_add(mag_add(self.rad, other.rad), err), prec)

    def __sub__(self, other) -> RealBall:
        return self + (-self._coerce(other))

    def __mul__(self, other) -> RealBall:
        other = self._coerce(other)
        prec = min(self.prec, other.prec)
        if not (self.is_finite() and other.is_finite()):
            return RealBall.indeterminate(prec)
        mid, err = _rounded(mp.fmul, self.mid, other.mid, prec)
        spread = mag_add(
            mag_mul(mag_up(self.mid), other.rad),
            mag_mul(mag_up(other.mid), self.rad),
        )
        rad = mag_add(mag_add(spread, mag_mul(self.rad, other.rad)), err)
        return RealBall(mid, rad, prec)

    def __truediv__(self, other) -> RealBall:
        other = self._coerce(other)
        prec = min(self.prec, other.prec)
        if not (self.is_finite() and other.is_finite()):
            return RealBall.indeterminate(prec)
        if other.contains_zero():
            raise DomainError("División por un valor que encierra el cero")

        mid, err = _rounded(mp.fdiv, self.mid, other.mid, prec)
        if self.is_exact() and other.is_exact():
            return RealBall(mid, err, prec)

        # |x/y - xm/ym| <= (|ym| xr + |xm| yr) / (|ym| (|ym| - yr))
        denominator = low_mul(mag_down(other.mid), other.abs_lower())
        if denominator <= 0:
            raise DomainError("División por un valor que encierra el cero")
        numerator = mag_add(
            mag_mul(mag_up(other.mid), self.rad),
            mag_mul(mag_up(self.mid), other.rad),
        )
        return RealBall(mid, mag_add(mag_div(numerator, denominator), err), prec)

    def sqr(self) -> RealBall:
        """Cuadrado por extremos: más ajustado que self * self."""
        if not self.is_finite():
            return RealBall.indeterminate(self.prec)
        magnitude = exact_abs(self.mid)
        top = mp.fadd(magnitude, self.rad, prec=self.prec, rounding="c")
        hi = mp.fmul(top, top, prec=self.prec, rounding="c")
        if self.contains_zero():
            lo = _ZERO
        else:
            bottom = mp.fsub(magnitude, self.rad, prec=self.prec, rounding="f")
            lo = mp.fmul(bottom, bottom, prec=self.prec, rounding="f")
        return RealBall.from_bounds(lo, hi, self.prec)


# ── Extracción de enteros ────────────────────────────────────────

def to_index(ball: RealBall) -> int:
    """Trunca el punto medio hacia cero y lo devuelve como entero de 64 bits.

    Raises:
        ConversionError: bola no finita, valor fuera de rango o bola que
            abarca más de un entero tras truncar.
    """
    if not ball.is_finite():
        raise ConversionError("No se puede extraer un entero de una bola no finita")

    mid = to_fraction(ball.mid)
    rad = to_fraction(ball.rad)
    index = int(mid)
    if not INDEX_MIN <= index <= INDEX_MAX:
        raise ConversionError(f"Valor fuera del rango de enteros de 64 bits: {index}")
    if int(mid - rad) != index or int(mid + rad) != index:
        raise ConversionError(
            "La bola abarca más de un entero; no se puede elegir el índice"
        )
    return index
