import os
import subprocess
import sys

import pandas as pd
import pytest

from reactorlab.cli import run_cli


def test_cli_simulate_writes_sweep(tmp_path):
    out_csv = tmp_path / "sweep.csv"
    cmd = [sys.executable, "-m", "reactorlab.cli", "simulate", "--fa", "120", "--fb", "100", "--T", "30",
           "--pfr", "2,1", "--cstr", "5", "--csv", str(out_csv)]
    out = subprocess.check_output(cmd, cwd=os.getcwd(), text=True)
    assert "PFR -> CSTR" in out
    assert "Xa = " in out
    df = pd.read_csv(out_csv)
    assert list(df.columns) == ["tau", "Xa_T1", "Xa_T2"]
    assert len(df) == 46
    assert df["tau"].iloc[0] == 150.0


def test_cli_keeps_stage_order(capsys):
    run_cli(["simulate", "--fa", "120", "--fb", "100", "--T", "30", "--cstr", "5", "--pfr", "2,1", "--cstr", "1"])
    out = capsys.readouterr().out
    assert "CSTR -> PFR -> CSTR" in out


def test_cli_rejects_naoh_deficit():
    with pytest.raises(SystemExit) as exc:
        run_cli(["simulate", "--fa", "100", "--fb", "120", "--T", "30", "--pfr", "2,1"])
    assert "NaOH" in str(exc.value.code)


def test_cli_requires_a_reactor():
    with pytest.raises(SystemExit):
        run_cli(["simulate", "--fa", "100", "--fb", "120", "--T", "30"])


@pytest.mark.parametrize(
    "extra",
    [
        ["--fa", "0", "--fb", "0", "--cstr", "5"],
        ["--fa", "120", "--fb", "100", "--cstr", "-1"],
        ["--fa", "120", "--fb", "100", "--pfr", "2"],
        ["--fa", "nan", "--fb", "100", "--cstr", "5"],
    ],
)
def test_cli_rejects_non_positive_values(extra, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(["simulate", "--T", "30"] + extra)
    assert exc.value.code == 2
    assert "usage" in capsys.readouterr().err


def test_cli_rejects_bad_scan_range():
    with pytest.raises(SystemExit) as exc:
        run_cli(["simulate", "--fa", "120", "--fb", "100", "--T", "30", "--cstr", "5", "--tau-min", "0"])
    assert "scan" in str(exc.value.code)
