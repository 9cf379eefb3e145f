"""Funciones elementales sobre bolas complejas.

Cada función evalúa el centro con el contexto de intervalos de mpmath (iv)
y GUARD_BITS bits extra: el intervalo obtenido ya contiene el valor exacto
en el centro. Al radio se suma el error propagado, que es max|f'| sobre el
rectángulo por radius() (desigualdad del valor medio; el rectángulo es
convexo). Si la entrada es real exacta en su parte imaginaria se evalúa la
versión real, y la salida conserva la parte imaginaria exactamente en cero
cuando la función lleva reales en reales.

Ramas principales: ln, arg, sqrt y root tienen el corte en el semieje
real negativo y arg toma valores en (-pi, pi].
"""

from __future__ import annotations

from mpmath import iv, mp

from ball_errors import DomainError
from complex_ball import ComplexBall
from real_ball import (
    GUARD_BITS,
    RADIUS_PREC,
    RealBall,
    exact_abs,
    interval_prec,
    interval_upper,
    low_mul,
    mag_add,
    mag_div,
    mag_mul,
    mag_up,
)

_ZERO = mp.mpf(0)


# ── Utilidades ───────────────────────────────────────────────────

def _working_prec(z: ComplexBall) -> int:
    return z.prec + GUARD_BITS


def _center(z: ComplexBall):
    """Centro de z como intervalo puntual de iv (real si se puede)."""
    if z.is_real():
        return iv.mpf(z.real.mid)
    return iv.mpc(z.real.mid, z.imag.mid)


def _enclose(value, prec: int, propagated) -> ComplexBall:
    if isinstance(value, iv.mpc):
        return ComplexBall(
            RealBall.from_interval(value.real, prec, propagated),
            RealBall.from_interval(value.imag, prec, propagated),
        )
    return ComplexBall.from_real(RealBall.from_interval(value, prec, propagated))


def _upper(fn, *args):
    """Cota superior de |fn(*args)| con intervalos de RADIUS_PREC bits."""
    with interval_prec(RADIUS_PREC):
        value = fn(*args)
    return interval_upper(value)


def _propagated(z: ComplexBall, derivative_bound):
    """max|f'| * radius(); la cota de la derivada solo se calcula si hace falta."""
    radius = z.radius()
    if radius == 0:
        return _ZERO
    return mag_mul(derivative_bound(), radius)


def _min_modulus(z: ComplexBall):
    lower = z.abs_lower()
    if lower == 0:
        raise DomainError("La bola encierra el cero")
    return lower


# ── Exponencial y logaritmos ─────────────────────────────────────

def exp(z: ComplexBall) -> ComplexBall:
    if not z.is_finite():
        return ComplexBall.indeterminate(z.prec)
    with interval_prec(_working_prec(z)):
        value = iv.exp(_center(z))
    # |exp'(w)| = e^Re(w) <= e^(Re(centro) + r)
    propagated = _propagated(
        z, lambda: _upper(iv.exp, mag_add(z.real.mid, z.radius()))
    )
    return _enclose(value, z.prec, propagated)


def arg(z: ComplexBall) -> ComplexBall:
    """Argumento principal en (-pi, pi], como bola con parte imaginaria nula.

    Si la bola contiene el cero o cruza el semieje real negativo el
    resultado es [0 +/- pi], que cubre todo el rango.
    """
    prec = z.prec
    if not z.is_finite():
        return ComplexBall.indeterminate(prec)

    if z.contains_zero() or z.crosses_branch_cut():
        pi = RealBall.pi(prec)
        return ComplexBall.from_real(RealBall(_ZERO, pi.abs_upper(), prec))

    if z.is_real():
        if z.real.mid > 0:
            return ComplexBall.zero(prec)
        return ComplexBall.from_real(RealBall.pi(prec))

    with interval_prec(_working_prec(z)):
        value = iv.atan2(z.imag.mid, z.real.mid)
    # |grad arg(w)| = 1 / |w|
    propagated = _propagated(z, lambda: mag_div(1, _min_modulus(z)))
    return ComplexBall.from_real(RealBall.from_interval(value, prec, propagated))


def ln(z: ComplexBall) -> ComplexBall:
    """Logaritmo principal: ln|z| + i arg(z).

    Raises:
        DomainError: la bola encierra el cero.
    """
    prec = z.prec
    if not z.is_finite():
        return ComplexBall.indeterminate(prec)
    if z.contains_zero():
        raise DomainError("Logaritmo de un valor que encierra el cero")

    with interval_prec(_working_prec(z)):
        if z.is_real():
            value = iv.ln(exact_abs(z.real.mid))
        else:
            value = iv.ln(abs(_center(z)))
    propagated = _propagated(z, lambda: mag_div(1, _min_modulus(z)))
    real = RealBall.from_interval(value, prec, propagated)
    return ComplexBall(real, arg(z).real)


def power(z: ComplexBall, w: ComplexBall) -> ComplexBall:
    """z**w = exp(w ln z) con la rama principal del logaritmo."""
    return exp(w.mul(ln(z)))


def log_base(z: ComplexBall, base: ComplexBall) -> ComplexBall:
    """Logaritmo de z en base `base`: ln z / ln base.

    Raises:
        DomainError: z o base encierran el cero, o base encierra el uno.
    """
    return ln(z).div(ln(base))


# ── Raíces ───────────────────────────────────────────────────────

def _interval_root(value, n: int):
    """Raíz n-ésima de un intervalo real positivo o de un complejo fuera del corte."""
    if n == 2 and isinstance(value, iv.mpf):
        return iv.sqrt(value)
    return iv.exp(iv.ln(value) / n)


def _root_upper(x, n: int):
    """Cota superior de x^(1/n) para x >= 0."""
    if x == 0:
        return _ZERO
    return _upper(_interval_root, iv.mpf(x), n)


def _principal_root(z: ComplexBall, n: int) -> ComplexBall:
    prec = z.prec
    if not z.is_finite():
        return ComplexBall.indeterminate(prec)

    if z.contains_zero() or z.crosses_branch_cut():
        # todas las raíces caben en el disco de radio max|z|^(1/n)
        size = _root_upper(z.abs_upper(), n)
        return ComplexBall(RealBall(_ZERO, size, prec), RealBall(_ZERO, size, prec))

    with interval_prec(_working_prec(z)):
        if z.is_real() and z.real.mid < 0:
            # sobre el corte, lado superior: |x|^(1/n) (cos(pi/n) + i sin(pi/n))
            size = _interval_root(iv.mpf(exact_abs(z.real.mid)), n)
            if n == 2:
                value = iv.mpc(0, size)
            else:
                angle = iv.pi / n
                value = iv.mpc(size * iv.cos(angle), size * iv.sin(angle))
        else:
            value = _interval_root(_center(z), n)

    # |f'(w)| = |w|^(1/n) / (n |w|) <= max|w|^(1/n) / (n min|w|)
    def derivative():
        return mag_div(
            _root_upper(z.abs_upper(), n),
            low_mul(n, _min_modulus(z)),
        )

    return _enclose(value, prec, _propagated(z, derivative))


def sqrt(z: ComplexBall) -> ComplexBall:
    return _principal_root(z, 2)


def root(z: ComplexBall, n: int) -> ComplexBall:
    """Raíz n-ésima principal.

    Raises:
        DomainError: el grado no es un entero positivo.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise DomainError(f"El grado de la raíz debe ser un entero positivo: {n}")
    if n == 1:
        return z
    return _principal_root(z, n)


# ── Trigonométricas ──────────────────────────────────────────────

def _cosh(t):
    e = iv.exp(t)
    return (e + 1 / e) / 2


def _trig(fn, z: ComplexBall) -> ComplexBall:
    if not z.is_finite():
        return ComplexBall.indeterminate(z.prec)
    with interval_prec(_working_prec(z)):
        value = fn(_center(z))

    # |sin'(w)|, |cos'(w)| <= cosh(Im w); en la recta real, <= 1
    def derivative():
        if z.is_real():
            return mp.mpf(1)
        return _upper(_cosh, mag_add(mag_up(z.imag.mid), z.imag.rad))

    return _enclose(value, z.prec, _propagated(z, derivative))


def sin(z: ComplexBall) -> ComplexBall:
    return _trig(iv.sin, z)


def cos(z: ComplexBall) -> ComplexBall:
    return _trig(iv.cos, z)


def tan(z: ComplexBall) -> ComplexBall:
    """sin z / cos z.

    Raises:
        DomainError: la bola del coseno encierra el cero, es decir, z está
            demasiado cerca de un polo (k + 1/2) pi.
    """
    if not z.is_finite():
        return ComplexBall.indeterminate(z.prec)
    cosine = cos(z)
    if cosine.contains_zero():
        raise DomainError("Tangente no acotada: la bola encierra un polo")
    return sin(z).div(cosine)


def cot(z: ComplexBall) -> ComplexBall:
    """1 / tan z; falla donde falla tan y donde tan encierra el cero."""
    return ComplexBall.one(z.prec).div(tan(z))


# ── Módulo ───────────────────────────────────────────────────────

def absolute(z: ComplexBall) -> ComplexBall:
    """|z| como bola con parte imaginaria nula."""
    prec = z.prec
    if not z.is_finite():
        return ComplexBall.indeterminate(prec)
    if z.is_real():
        return ComplexBall.from_real(RealBall(exact_abs(z.real.mid), z.real.rad, prec))

    with interval_prec(_working_prec(z)):
        value = abs(_center(z))
    # |z| es 1-lipschitziana
    return ComplexBall.from_real(RealBall.from_interval(value, prec, z.radius()))
