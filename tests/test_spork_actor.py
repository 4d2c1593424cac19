import pytest

from botrick.message import CommandMessage
from botrick.spork_actor import SporkActor
from botrick.sporker import Spork, create_table, opendb


class FakeSender:
    def __init__(self):
        self.sent = []

    def send_privmsg(self, target, text):
        self.sent.append((target, text))


@pytest.fixture
def spork():
    conn = opendb(":memory:")
    create_table(conn)
    yield Spork(conn)
    conn.close()


def _message(text, sent_by="bob"):
    command = text.split(" ", 1)[0]
    params = text[len(command) + 1:] if " " in text else ""
    return CommandMessage(
        command=command, sent_by=sent_by, respond_to="#chan", params=params, full_text=text
    )


def _replies(spork, text, sent_by="bob"):
    sender = FakeSender()
    actor = SporkActor(sender, spork)
    actor.process(_message(text, sent_by=sent_by))
    return list(sender.sent)


def _direct_spork_replies(spork, text, sent_by="bob"):
    sender = FakeSender()
    actor = SporkActor(sender, spork)
    actor.handle_spork(_message(text, sent_by=sent_by))
    return list(sender.sent)


def test_spork_with_start_word(spork):
    spork.log_message("alice", "hello big world")
    replies = _replies(spork, "%spork big")
    assert replies == [("#chan", "bob: hello big world")]


def test_spork_unknown_word(spork):
    spork.log_message("alice", "hello big world")
    replies = _replies(spork, "%spork nothing")
    assert replies == [("#chan", "Couldn't do it could I")]


def test_spork_random_on_empty_db(spork):
    replies = _replies(spork, "%spork")
    assert replies == [("#chan", "Couldn't do it could I")]


def test_seven_starts_from_seven(spork):
    spork.log_message("alice", "say 7 now")
    replies = _replies(spork, "7")
    assert replies == [("#chan", "bob: say 7 now")]


def test_sporklike_by_nick_case_insensitive(spork):
    spork.log_message("Alice", "hello big world")
    replies = _replies(spork, "%sporklike alice big")
    assert replies == [("#chan", "bob: hello big world")]


def test_sporklike_other_nick_fails(spork):
    spork.log_message("alice", "hello big world")
    replies = _replies(spork, "%sporklike carol big")
    assert replies == [("#chan", "Couldn't do it could I")]


def test_sporklike_without_nick(spork):
    replies = _replies(spork, "%sporklike")
    assert replies == [("#chan", "Talking about nobody is it")]


def test_sporklike_random_on_empty_db(spork):
    replies = _replies(spork, "%sporklike alice")
    assert replies == [("#chan", "Couldn't do it could I")]


def test_other_commands_ignored(spork):
    spork.log_message("alice", "hello big world")
    replies = _replies(spork, "%sporky big")
    assert replies == []


def test_handle_spork_directly(spork):
    spork.log_message("alice", "one two")
    replies = _direct_spork_replies(spork, "%anything one", sent_by="dave")
    assert replies == [("#chan", "dave: one two")]