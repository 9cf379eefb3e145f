"""
La batería de regresión tiene que pasar completa.
"""

from regression_checks import inspect_operation, run_regressions


def test_run_regressions(capsys):
    run_regressions()
    out = capsys.readouterr().out
    assert "FAIL" not in out
    assert "All regression checks passed." in out


def test_inspect_operation(capsys):
    inspect_operation("div", "1,0", "3,0", precision=64)
    out = capsys.readouterr().out
    assert out.startswith("Operation inspection")
    assert "point:      (0.3333333333333333333,0i)" in out
    assert "exact:      False" in out
