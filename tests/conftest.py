"""Fixtures compartidas de los tests de bolas."""

from __future__ import annotations

import pytest
from hypothesis import settings

from ball_engine import BallCalculatorEngine
from complex_ball import ComplexBall
from real_ball import RealBall

from strategies import PREC

# las referencias con 600 bits son lentas para el plazo por defecto
settings.register_profile("balls", deadline=None)
settings.load_profile("balls")


@pytest.fixture
def engine() -> BallCalculatorEngine:
    return BallCalculatorEngine(precision=PREC)


@pytest.fixture
def one() -> ComplexBall:
    return ComplexBall.one(PREC)


@pytest.fixture
def zero() -> ComplexBall:
    return ComplexBall.zero(PREC)


@pytest.fixture
def third() -> RealBall:
    """1/3 redondeado: bola inexacta."""
    return RealBall.one(PREC) / RealBall.from_value(3, PREC)
