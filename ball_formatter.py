"""Representación decimal de bolas reales y complejas.

Modo rango: `[centro +/- radio]`, donde el radio impreso ya incluye el
error de escribir el centro en decimal, así que el intervalo mostrado
sigue conteniendo la bola. Modo punto: solo el centro.

Los errores se acotan con intervalos de mpmath (iv) y no con racionales
exactos: un valor como exp(1e10) tiene miles de millones de cifras.
"""

from __future__ import annotations

import math

from mpmath import iv, mp
from mpmath.libmp import numeral

from ball_errors import ConversionError
from complex_ball import ComplexBall
from real_ball import (
    GUARD_BITS,
    RealBall,
    exact_abs,
    interval_bounds,
    interval_prec,
    interval_upper,
    mag_add,
    to_fraction,
)

SCI_NOTATION_EXP_LIMIT = 12
RADIUS_DIGITS = 3
INTEGER_LIMIT = 10**18
MAX_FIXED_EXPONENT = 100_000
RADIUS_SCALE_PREC = 64


def _decimal_exponent(value) -> int:
    """floor(log10(|value|)) aproximado; puede desviarse en una unidad."""
    return int(mp.floor(mp.log10(exact_abs(value))))


def _digits(value: int, size: int) -> str:
    """Cifras decimales de un entero no negativo, sin el límite de str()."""
    return numeral(value, 10, size)


def _format_center(value, digits: int) -> str:
    if value == 0:
        return "0"

    if mp.isint(value) and exact_abs(value) < INTEGER_LIMIT:
        return str(int(value))

    if abs(_decimal_exponent(value)) >= SCI_NOTATION_EXP_LIMIT:
        return mp.nstr(value, n=digits, min_fixed=0, max_fixed=0)
    return mp.nstr(value, n=digits)


def _center_error(text: str, ball: RealBall):
    """Cota superior de |text - centro|, con text el centro decimal impreso."""
    with interval_prec(ball.prec + GUARD_BITS):
        difference = iv.mpf(text) - ball.mid
    return interval_upper(difference)


def _format_radius(value) -> str:
    """Radio redondeado hacia arriba a RADIUS_DIGITS cifras significativas."""
    scale = _decimal_exponent(value) - RADIUS_DIGITS + 1
    with interval_prec(RADIUS_SCALE_PREC):
        quotient = iv.mpf(value) / iv.mpf(10) ** scale
    units = int(mp.ceil(interval_bounds(quotient)[1]))
    text = str(units)
    exponent = scale + len(text) - 1
    mantissa = (text[0] + "." + text[1:]).rstrip("0").rstrip(".")
    return f"{mantissa}e{exponent}"


def _render(ball: RealBall, digits: int) -> str:
    if not ball.is_finite():
        raise ConversionError(
            f"No se puede representar como decimal finito: [{ball.mid} +/- {ball.rad}]"
        )
    center = _format_center(ball.mid, digits)
    error = mag_add(ball.rad, _center_error(center, ball))
    if error == 0:
        return center
    return f"[{center} +/- {_format_radius(error)}]"


def trim_range(text: str) -> str:
    """Quita la anotación de rango `[centro +/- radio]` y deja el centro."""
    text = text.strip()
    if not text:
        return text
    if text[0] == "[" and text[-1] == "]":
        text = text[1:-1].strip()
    if text.startswith("+/-"):
        return "0"
    index = text.find(" +/-")
    if index != -1:
        return text[:index]
    return text


def format_real(ball: RealBall, digits: int, as_range: bool = False) -> str:
    """Texto de una bola real con `digits` cifras significativas.

    Raises:
        ConversionError: la bola no es finita.
    """
    text = _render(ball, max(1, int(digits)))
    return text if as_range else trim_range(text)


def format_complex(value: ComplexBall, digits: int, as_range: bool = False) -> str:
    real = format_real(value.real, digits, as_range)
    imag = format_real(value.imag, digits, as_range)
    return f"({real},{imag}i)"


def format_ball(value, digits: int, as_range: bool = False) -> str:
    if isinstance(value, ComplexBall):
        return format_complex(value, digits, as_range)
    return format_real(value, digits, as_range)


def _fixed(value, digits: int) -> str:
    # |value| <= 2^mag < 10^-(digits+1): se redondea a cero
    magnitude = mp.mag(value)
    if value == 0 or magnitude < -4 * (digits + 1):
        return "0" if digits == 0 else "0." + "0" * digits
    if magnitude * math.log10(2) > MAX_FIXED_EXPONENT:
        raise ConversionError(
            f"Demasiadas cifras enteras para coma fija: ~10^{_decimal_exponent(value)}"
        )

    exact = to_fraction(value)
    scaled = round(abs(exact) * 10**digits)
    whole, fraction = divmod(scaled, 10**digits)
    sign = "-" if exact < 0 and scaled else ""
    integer = _digits(whole, max(1, magnitude) * 4 // 13 + 1)
    if digits == 0:
        return f"{sign}{integer}"
    return f"{sign}{integer}.{_digits(fraction, digits).rjust(digits, '0')}"


def format_fixed(value: ComplexBall, digits: int) -> str:
    """Centros en coma fija con exactamente `digits` decimales.

    Raises:
        ConversionError: la bola no es finita o su parte entera tiene
            más de MAX_FIXED_EXPONENT cifras.
    """
    if not value.is_finite():
        raise ConversionError("No se puede representar una bola no finita en coma fija")
    digits = max(0, int(digits))
    return f"({_fixed(value.real.mid, digits)},{_fixed(value.imag.mid, digits)}i)"
