import logging
import random

import pytest

from botrick.color import Color, colorize
from botrick.message import CommandMessage
from botrick.misc_actor import DWORD_ROOTS, DWORDS, MiscActor, TestActor, dword, isit
from botrick.router import Sender

ANSWERS = {colorize(Color.RED, None, "It is"), colorize(Color.RED, None, "Just isn't")}


@pytest.mark.parametrize("seed", range(20))
def test_dword_shape(seed):
    parts = dword(random.Random(seed)).split("\\")
    assert parts[0] in DWORD_ROOTS
    assert 1 <= len(parts) <= 24
    assert all(part in DWORDS for part in parts[1:])


def test_isit_gives_both_answers():
    results = {isit(random.Random(seed)) for seed in range(50)}
    assert results == ANSWERS


def test_isit_is_red():
    assert isit(random.Random(0)).startswith("\x0304")


def _actor(seed=0):
    lines = []
    return MiscActor(Sender(lines.append), random.Random(seed)), lines


def test_process_isit():
    actor, lines = _actor()
    actor.process(CommandMessage(command="%isit", respond_to="#chan", full_text="%isit"))
    assert len(lines) == 1
    target, _, text = lines[0].partition(" :")
    assert target == "PRIVMSG #chan"
    assert text in ANSWERS


def test_process_dword():
    actor, lines = _actor(5)
    actor.process(CommandMessage(command="~dword", respond_to="bob", full_text="~dword"))
    assert len(lines) == 1
    prefix, _, text = lines[0].partition(" :")
    assert prefix == "PRIVMSG bob"
    assert text.split("\\")[0] in DWORD_ROOTS


def test_process_other_command_sends_nothing():
    actor, lines = _actor()
    actor.process(CommandMessage(command="%spork", respond_to="#chan"))
    actor.process(CommandMessage(command="", respond_to="#chan"))
    assert lines == []


def test_test_actor_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="botrick.misc_actor")
    TestActor().process(CommandMessage(command="%test", full_text="%test x"))
    assert "Test is handling" in caplog.text
    assert "%test x" in caplog.text