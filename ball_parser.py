"""Conversión de literales decimales a bolas con redondeo hacia afuera."""

from __future__ import annotations

import re
from fractions import Fraction

from mpmath import mp

from ball_errors import ParseError
from complex_ball import ComplexBall
from real_ball import RADIUS_PREC, RealBall, mag_add

MAX_DECIMAL_EXPONENT = 100_000
MAX_LITERAL_DIGITS = 4000

_DECIMAL_RE = re.compile(
    r"^(?P<sign>[+-]?)(?P<int>\d*)(?:\.(?P<frac>\d*))?(?:[eE](?P<exp>[+-]?\d+))?$"
)
_RANGE_RE = re.compile(r"^(?P<mid>[^\s]+)\s*(?:\+/-|±)\s*(?P<rad>[^\s]+)$")
_SPECIAL_VALUES = {
    "inf": mp.inf,
    "+inf": mp.inf,
    "-inf": mp.ninf,
    "nan": mp.nan,
}


def _decimal_fraction(text: str, component: str) -> Fraction:
    match = _DECIMAL_RE.fullmatch(text)
    if match is None or not (match.group("int") or match.group("frac")):
        raise ParseError(component, text)

    # int() de un texto con miles de cifras falla con ValueError
    exponent_text = match.group("exp") or "0"
    exponent_digits = exponent_text.lstrip("+-").lstrip("0") or "0"
    if (
        len(exponent_digits) > len(str(MAX_DECIMAL_EXPONENT))
        or int(exponent_digits) > MAX_DECIMAL_EXPONENT
    ):
        raise ParseError(component, text, "exponente fuera de rango")
    exponent = int(exponent_digits)
    if exponent_text.startswith("-"):
        exponent = -exponent

    digits = (match.group("int") + (match.group("frac") or "")).lstrip("0")
    if len(digits) > MAX_LITERAL_DIGITS:
        raise ParseError(component, text, "demasiadas cifras")
    exponent -= len(match.group("frac") or "")
    value = Fraction(int(digits or "0"))
    value *= Fraction(10) ** exponent
    return -value if match.group("sign") == "-" else value


def _enclose_fraction(value: Fraction, prec: int) -> RealBall:
    """Bola con centro redondeado al más cercano y radio = ancho del corchete."""
    num, den = value.numerator, value.denominator
    lo = mp.fdiv(num, den, prec=prec, rounding="f")
    hi = mp.fdiv(num, den, prec=prec, rounding="c")
    if lo == hi:
        return RealBall(lo, mp.mpf(0), prec)
    mid = mp.fdiv(num, den, prec=prec, rounding="n")
    return RealBall(mid, mp.fsub(hi, lo, prec=RADIUS_PREC, rounding="c"), prec)


def _parse_number(text: str, prec: int, component: str) -> RealBall:
    special = _SPECIAL_VALUES.get(text.lower())
    if special is not None:
        return RealBall.from_value(special, prec)
    return _enclose_fraction(_decimal_fraction(text, component), prec)


def parse_real(text: str, prec: int, component: str = "real") -> RealBall:
    """Convierte un literal decimal en una bola que encierra su valor exacto.

    También acepta la notación de rango que produce el formateador,
    `[mid +/- rad]`, para poder releer resultados.

    Raises:
        ParseError: literal mal formado.
    """
    if not isinstance(text, str):
        raise ParseError(component, repr(text), "se esperaba texto")

    body = text.strip()
    if body.startswith("[") and body.endswith("]"):
        body = body[1:-1].strip()

    match = _RANGE_RE.fullmatch(body)
    if match is None:
        return _parse_number(body, prec, component)

    center = _parse_number(match.group("mid"), prec, component)
    radius = _decimal_fraction(match.group("rad"), component)
    if radius < 0:
        raise ParseError(component, text, "radio negativo")
    radius_ball = _enclose_fraction(radius, RADIUS_PREC)
    return center.add_error(mag_add(radius_ball.mid, radius_ball.rad))


def parse_complex(real_text: str, imag_text: str, prec: int) -> ComplexBall:
    """Construye una bola compleja a partir de sus dos componentes.

    Raises:
        ParseError: indica la componente (real/imag) y el texto culpable.
    """
    real = parse_real(real_text, prec, component="real")
    imag = parse_real(imag_text, prec, component="imag")
    return ComplexBall(real, imag)


def parse_operand(text: str, prec: int) -> ComplexBall:
    """Lee un operando con el formato `real,imag`."""
    parts = text.split(",")
    if len(parts) != 2:
        raise ParseError("operando", text, "se esperaba el formato real,imag")
    return parse_complex(parts[0], parts[1], prec)
