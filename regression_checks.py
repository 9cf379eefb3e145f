from ball_engine import BallCalculatorEngine
from ball_formatter import format_complex, format_real
from fractions import Fraction
from mpmath import mp
import sys


def _evaluate(operation: str, a: str, b: str, *, precision: int = 128):
	engine = BallCalculatorEngine(precision=precision)
	evaluation = engine.evaluate(operation, a, b)
	return engine, evaluation


def _point(operation: str, a: str, b: str, *, precision: int = 128) -> str:
	engine, evaluation = _evaluate(operation, a, b, precision=precision)
	return format_complex(evaluation.result, engine.digits)


def inspect_operation(
	operation: str,
	a: str,
	b: str,
	*,
	precision: int = 128,
) -> None:
	"""Imprime operandos y resultado en modo punto, rango y coma fija."""
	engine, evaluation = _evaluate(operation, a, b, precision=precision)
	result = evaluation.result

	print("Operation inspection")
	print(f"operation:  {operation}")
	print(f"precision:  {precision} bits (~{engine.digits} digits)")
	print(f"a:          {format_complex(evaluation.a, engine.digits, as_range=True)}")
	print(f"b:          {format_complex(evaluation.b, engine.digits, as_range=True)}")
	print(f"point:      {format_complex(result, engine.digits)}")
	print(f"range:      {format_complex(result, engine.digits, as_range=True)}")
	print(f"fixed:      {engine.report(evaluation)[-1]}")
	print(f"exact:      {result.is_exact()}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	add_point = _point("add", "1,0", "1,0")
	expected_actual.append(("(1,0) + (1,0)", "(2,0i)", add_point))
	checks.append(("add of exact integers stays exact", add_point == "(2,0i)"))

	mul_point = _point("mul", "1,0", "1,0")
	expected_actual.append(("(1,0) * (1,0)", "(1,0i)", mul_point))
	checks.append(("mul of exact integers stays exact", mul_point == "(1,0i)"))

	div_point = _point("div", "1,0", "0,1")
	expected_actual.append(("(1,0) / (0,1)", "(0,-1i)", div_point))
	checks.append(("division by i is exact", div_point == "(0,-1i)"))

	_, pow_eval = _evaluate("pow", "0,1", "2,0")
	checks.append((
		"i^2 encloses -1",
		pow_eval.result.contains(-1, 0),
	))
	checks.append((
		"i^2 radius stays below 2^-100",
		pow_eval.result.radius() < mp.ldexp(1, -100),
	))

	root_engine, root_eval = _evaluate("root", "4,0", "16,0")
	root_real = format_real(root_eval.result.real, root_engine.digits)
	expected_actual.append(("4th root of 16", "2", root_real))
	checks.append(("4th root of 16 encloses 2", root_eval.result.contains(2, 0)))
	checks.append(("4th root of 16 keeps a zero imaginary part", root_eval.result.is_real()))
	checks.append(("4th root of 16 prints as 2", Fraction(root_real) == 2))

	third = _point("div", "1,0", "3,0", precision=64)
	checks.append(("1/3 at 64 bits prints 19 digits", third == "(0.3333333333333333333,0i)"))

	_, ln_eval = _evaluate("ln", "-1,0", "1,0")
	checks.append(("ln(-1) lies on the upper side of the cut", ln_eval.result.imag.mid > 0))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect pow 0,1 2,0
	#   python regression_checks.py --inspect sin 1,1 1,0 --prec 256
	if "--inspect" in sys.argv:
		idx = sys.argv.index("--inspect")
		try:
			operation, a, b = sys.argv[idx + 1:idx + 4]
		except ValueError:
			raise SystemExit("Missing operation and operands after --inspect")

		precision = 128
		if "--prec" in sys.argv:
			try:
				precision = int(sys.argv[sys.argv.index("--prec") + 1])
			except (ValueError, IndexError):
				raise SystemExit("Invalid value for --prec")

		inspect_operation(operation, a, b, precision=precision)
	else:
		run_regressions()
