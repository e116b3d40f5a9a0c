"""Tests for the command line entry point."""
import pytest
from werkzeug.security import check_password_hash

from hotel_api.__main__ import build_parser, main


def test_hash_password_prints_a_verifiable_hash(capsys):
    assert main(["hash-password", "guest123"]) == 0
    hashed = capsys.readouterr().out.strip()
    assert hashed != "guest123"
    assert check_password_hash(hashed, "guest123")


def test_serve_options():
    args = build_parser().parse_args(["serve", "--db", "data.json", "--port", "8080"])
    assert args.db == "data.json"
    assert args.port == 8080
    assert args.reload is False


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
