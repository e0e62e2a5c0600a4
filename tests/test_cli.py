from datetime import date

import cli
from lounge.init_db import init_database


def test_chat_loop_answers_until_exit(monkeypatch, capsys):
    answers = iter(["How much does it cost?", "xyzqqq", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    cli.CaptainChat(show_scores=True).start()

    out = capsys.readouterr().out
    assert "$20 USD per person" in out
    assert "[pricing-basic score=270 type=exact]" in out
    assert "I don't have a specific answer" in out
    assert "Thank you for visiting" in out


def test_chat_loop_stops_on_eof(monkeypatch, capsys):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    cli.CaptainChat().start()

    assert "Goodbye" in capsys.readouterr().out


def test_init_database_opens_slots_once():
    assert init_database(days=2, start=date(2031, 3, 1)) == 8
    assert init_database(days=2, start=date(2031, 3, 1)) == 0
