"""Estrategias de Hypothesis y utilidades compartidas por los tests."""

from __future__ import annotations

from fractions import Fraction

from hypothesis import strategies as st
from mpmath import mp

from complex_ball import ComplexBall
from real_ball import RealBall, to_fraction

PREC = 128
REFERENCE_PREC = 600
SCALE = 10


def to_mpf(value: Fraction):
    """mpf exacto para un racional diádico."""
    return mp.fdiv(value.numerator, value.denominator, prec=REFERENCE_PREC)


def dyadics(limit: int = 2**14, scale: int = SCALE):
    return st.integers(min_value=-limit, max_value=limit).map(
        lambda n: Fraction(n, 2**scale)
    )


def radii(limit: int = 2**6, scale: int = SCALE):
    return st.integers(min_value=0, max_value=limit).map(
        lambda n: Fraction(n, 2**scale)
    )


def real_ball(mid, rad=0, prec: int = PREC) -> RealBall:
    return RealBall(to_mpf(Fraction(mid)), to_mpf(Fraction(rad)), prec)


def complex_ball(re, im, rad=0, prec: int = PREC) -> ComplexBall:
    return ComplexBall(real_ball(re, rad, prec), real_ball(im, rad, prec))


@st.composite
def real_balls(draw, limit: int = 2**14):
    return real_ball(draw(dyadics(limit)), draw(radii()))


@st.composite
def complex_balls(draw, limit: int = 2**14):
    return ComplexBall(draw(real_balls(limit)), draw(real_balls(limit)))


def offsets():
    """Posición relativa dentro de una bola, en [-1, 1]."""
    return st.integers(min_value=-8, max_value=8).map(lambda n: Fraction(n, 8))


def point_in(ball: RealBall, t: Fraction) -> Fraction:
    return to_fraction(ball.mid) + t * to_fraction(ball.rad)


def corners(z: ComplexBall):
    """Centro y esquinas del rectángulo, como pares de racionales."""
    return [
        (point_in(z.real, Fraction(tr)), point_in(z.imag, Fraction(ti)))
        for tr, ti in ((0, 0), (-1, -1), (-1, 1), (1, -1), (1, 1))
    ]


def reference(fn, re: Fraction, im: Fraction = Fraction(0)):
    """fn evaluada con REFERENCE_PREC bits en re + i im."""
    with mp.workprec(REFERENCE_PREC):
        return mp.mpc(fn(mp.mpc(to_mpf(re), to_mpf(im))))


def reference_pair(fn, p, q):
    """fn evaluada con REFERENCE_PREC bits en dos puntos (re, im)."""
    with mp.workprec(REFERENCE_PREC):
        return mp.mpc(fn(mp.mpc(to_mpf(p[0]), to_mpf(p[1])), mp.mpc(to_mpf(q[0]), to_mpf(q[1]))))


def encloses(z: ComplexBall, value) -> bool:
    if isinstance(value, mp.mpc):
        return z.real.contains(value.real) and z.imag.contains(value.imag)
    return z.contains(value, 0)
