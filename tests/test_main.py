"""
Tests de la línea de comandos.
"""

import argparse

import pytest

from main import (
    DEFAULT_OPERAND,
    DEFAULT_OPERATION,
    DEFAULT_PRECISION,
    _precision,
    build_parser,
    main,
)


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.precision == DEFAULT_PRECISION
        assert args.operation == DEFAULT_OPERATION
        assert args.a == DEFAULT_OPERAND
        assert args.b == DEFAULT_OPERAND
        assert not args.as_range
        assert not args.verbose

    def test_long_aliases(self):
        args = build_parser().parse_args(["--precision", "64", "--operation", "mul"])
        assert args.precision == 64
        assert args.operation == "mul"

    @pytest.mark.parametrize("value", ["1", "abc", "0"])
    def test_invalid_precision(self, value, capsys):
        with pytest.raises(SystemExit) as info:
            build_parser().parse_args(["--prec", value])
        assert info.value.code == 2

    def test_invalid_precision_keeps_the_cause(self):
        with pytest.raises(argparse.ArgumentTypeError) as info:
            _precision("abc")
        assert isinstance(info.value.__cause__, ValueError)


class TestMain:
    def test_default_run(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Precisión = 128 bits (~38 dígitos decimales)"
        assert out[1:4] == ["a: (1,0i)", "b: (1,0i)", "add: (2,0i)"]
        assert out[4].startswith("add:(2.000")

    def test_scenarios(self, capsys):
        assert main(["--op", "mul"]) == 0
        assert main(["--op", "div", "-a", "1,0", "-b", "0,1"]) == 0
        out = capsys.readouterr().out
        assert "mul: (1,0i)" in out
        assert "div: (0,-1i)" in out

    def test_precision_line(self, capsys):
        assert main(["--prec", "64"]) == 0
        assert capsys.readouterr().out.startswith("Precisión = 64 bits (~19 dígitos decimales)")

    def test_range_flag(self, capsys):
        assert main(["--range", "--op", "div", "-a", "1,0", "-b", "3,0"]) == 0
        assert "+/-" in capsys.readouterr().out

    def test_domain_error(self, capsys):
        assert main(["--op", "ln", "-a", "0,0"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error: ")

    def test_unknown_operation(self, capsys):
        assert main(["--op", "tanh"]) == 1
        assert "Operación no soportada: tanh" in capsys.readouterr().err

    def test_parse_error(self, capsys):
        assert main(["-a", "uno,0"]) == 1
        assert "parte real" in capsys.readouterr().err

    def test_conversion_error(self, capsys):
        assert main(["--op", "exp", "-a", "inf,0"]) == 1
        assert capsys.readouterr().err.startswith("error: ")

    def test_verbose(self, capsys):
        assert main(["--verbose", "--op", "sqrt", "-a", "2,0"]) == 0
        assert "sqrt: (1.414" in capsys.readouterr().out


class TestNegativeOperands:
    def test_negative_real_part(self, capsys):
        assert main(["--op", "sqrt", "-a", "-4,0"]) == 0
        out = capsys.readouterr().out
        assert "a: (-4,0i)" in out
        assert "sqrt: (0,2i)" in out

    def test_negative_b(self, capsys):
        assert main(["--op", "sub", "-a", "1,0", "-b", "-2,-3"]) == 0
        assert "sub: (3,3i)" in capsys.readouterr().out

    def test_equals_form_still_works(self, capsys):
        assert main(["--op", "arg", "-a=-1,0"]) == 0
        assert "arg: (3.14159" in capsys.readouterr().out

    def test_missing_value(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["-a"])
        assert info.value.code == 2


class TestExtremeMagnitudes:
    def test_exp_of_ten_thousand(self, capsys):
        assert main(["--op", "exp", "-a", "10000,0"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[3].startswith("exp: (8.80681822566")
        assert "e+4342" in out[3]
        assert out[4].startswith("exp:(880681822566")

    def test_huge_operand(self, capsys):
        assert main(["--op", "add", "-a", "1e5000,0"]) == 0
        out = capsys.readouterr().out
        assert "a: (1.0e+5000,0i)" in out
        assert "add: (1.0e+5000,0i)" in out

    def test_tiny_operand(self, capsys):
        assert main(["--range", "--op", "add", "-a", "1e-5000,0"]) == 0
        out = capsys.readouterr().out
        assert "a: ([1.0e-5000 +/- " in out
        assert "add: ([1 +/- " in out

    def test_too_many_fixed_digits(self, capsys):
        assert main(["--op", "exp", "-a", "1e6,0"]) == 1
        assert capsys.readouterr().err.startswith("error: ")
