from __future__ import annotations

import json

import pytest

from trippe import cli


def test_booking_url_command_prints_link(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    monkeypatch.setattr(cli, "configure_logging", lambda level, log_dir=None: None)

    exit_code = cli.main(
        [
            "--api-key",
            "test-key",
            "booking-url",
            "ANRAW",
            "--checkin",
            "2024-03-10",
            "--checkout",
            "2024-03-12",
        ]
    )

    assert exit_code == 0
    url = json.loads(capsys.readouterr().out)
    assert "qSlH=ANRAW" in url
    assert "qCiD=10&qCiMy=022024" in url


def test_invalid_input_exits_with_error(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    monkeypatch.setattr(cli, "configure_logging", lambda level, log_dir=None: None)

    exit_code = cli.main(["--api-key", "test-key", "destinations", "An"])

    assert exit_code == 1
    assert capsys.readouterr().out == ""
