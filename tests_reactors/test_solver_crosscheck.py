from reactorlab.reactors import cstr, pfr
from reactorlab.solver import integrate_pfr_conversion, solve_cstr_conversion
import pytest


@pytest.mark.parametrize("Cb0", [0.3, 0.45, 0.5])
def test_pfr_closed_form_matches_integration(Cb0):
    k, Ca0 = 0.15, 0.5
    for tau, xa1 in [(5.0, 0.0), (40.0, 0.1), (120.0, 0.2)]:
        numeric = integrate_pfr_conversion(k, Ca0, Cb0, tau, xa1)
        assert pfr(k, Ca0, Cb0, tau, xa1).unwrap() == pytest.approx(numeric, abs=1e-6)


@pytest.mark.parametrize("Cb0", [0.3, 0.5, 0.8])
def test_cstr_closed_form_matches_root_finder(Cb0):
    k, Ca0 = 0.15, 0.5
    for tau, xa1 in [(5.0, 0.0), (40.0, 0.1), (120.0, 0.2)]:
        numeric = solve_cstr_conversion(k, Ca0, Cb0, tau, xa1)
        assert cstr(k, Ca0, Cb0, tau, xa1).unwrap() == pytest.approx(numeric, abs=1e-9)
