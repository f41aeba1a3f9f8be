# tests/test_cli.py
from __future__ import annotations

import pytest

from bridge_wrangler import cli
from tests.conftest import pbn_file, pbn_game  # type: ignore


def test_rotate_deals_command_writes_output(two_board_file):
    out = two_board_file.with_name("rotated.pbn")

    rc = cli.main(["rotate-deals", "-i", str(two_board_file), "-o", str(out), "-p", "S"])

    assert rc == 0
    assert out.read_text(encoding="utf-8").count('[Dealer "S"]') == 2


def test_rotate_deals_basis_and_standard_vul(two_board_file):
    rc = cli.main(
        ["rotate-deals", "-i", str(two_board_file), "-p", "E", "-b", "north", "--standard-vul"]
    )

    assert rc == 0
    text = two_board_file.with_name("practice - E.pbn").read_text(encoding="utf-8")
    assert "basisKind:North" in text
    assert "useStandardVul: true" in text


def test_rotate_deals_error_reported_on_stderr(two_board_file, capsys):
    rc = cli.main(["rotate-deals", "-i", str(two_board_file), "-p", "NQ"])

    assert rc == 1
    err = capsys.readouterr().err
    assert err.startswith("ERROR: ")
    assert "Invalid direction" in err


def test_output_with_several_patterns_fails(two_board_file, capsys):
    rc = cli.main(
        ["rotate-deals", "-i", str(two_board_file), "-o", "x.pbn", "-p", "N,S"]
    )
    assert rc == 1
    assert "ERROR:" in capsys.readouterr().err


def test_unknown_basis_rejected_by_argparse(two_board_file):
    with pytest.raises(SystemExit):
        cli.main(["rotate-deals", "-i", str(two_board_file), "-b", "partner"])


def test_to_lin_command(tmp_path):
    src = tmp_path / "hands.pbn"
    src.write_text(pbn_file(pbn_game(1)), encoding="utf-8")
    out = tmp_path / "hands-out.lin"

    rc = cli.main(["to-lin", "-i", str(src), "-o", str(out)])

    assert rc == 0
    assert out.read_text(encoding="utf-8").startswith("qx|o1|")


def test_to_lin_missing_input(tmp_path, capsys):
    rc = cli.main(["to-lin", "-i", str(tmp_path / "nope.pbn")])
    assert rc == 1
    assert "ERROR: Failed to read input file" in capsys.readouterr().err
