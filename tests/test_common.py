import pytest

from pollhub.common import (
    Command,
    ItemKind,
    ItemStatus,
    Poll,
)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("CREATE_SURVEY|Best food|pizza,sushi", Command.CREATE_SURVEY),
        ("RESPOND_SURVEY|best-food|1,2|alice", Command.RESPOND_SURVEY),
        ("RESULT_SURVEY|best-food", Command.RESULT_SURVEY),
        ("CLOSE_SURVEY|best-food", Command.CLOSE_SURVEY),
        ("CREATE_VOTE|Leader|a,b", Command.CREATE_VOTE),
        ("RESPOND_VOTE|leader|1|bob", Command.RESPOND_VOTE),
        ("RESULT_VOTE|leader", Command.RESULT_VOTE),
        ("CLOSE_VOTE|leader", Command.CLOSE_VOTE),
        ("LIST_SURVEY", Command.LIST_SURVEY),
        ("LIST_VOTE", Command.LIST_VOTE),
    ],
)
def test_from_message_matches_prefix(message, expected):
    assert Command.from_message(message) is expected


def test_from_message_unknown_raises():
    with pytest.raises(ValueError):
        Command.from_message("HELLO|world")


def test_from_message_is_case_sensitive():
    with pytest.raises(ValueError):
        Command.from_message("list_survey")


@pytest.mark.parametrize(
    "wire, expected",
    [
        ("CREATE_SURVEY", Command.CREATE_SURVEY),
        ("LIST_VOTE", Command.LIST_VOTE),
    ],
)
def test_command_wire_strings(wire, expected):
    command = Command.from_message(wire)
    assert command is expected
    assert command.value == wire


def test_command_kind_and_action():
    respond_vote = Command.from_message("RESPOND_VOTE|leader|1|bob")
    close_survey = Command.from_message("CLOSE_SURVEY|best-food")
    create_vote = Command.from_message("CREATE_VOTE|Leader|a,b")
    list_survey = Command.from_message("LIST_SURVEY")
    assert respond_vote.kind is ItemKind.VOTE
    assert close_survey.kind is ItemKind.SURVEY
    assert create_vote.action == "create"
    assert list_survey.action == "list"


@pytest.mark.parametrize(
    "stored, expected, label",
    [
        (0, ItemStatus.ACTIVE, "Active"),
        (1, ItemStatus.CLOSED, "Closed"),
    ],
)
def test_status_from_stored_value(stored, expected, label):
    status = ItemStatus(stored)
    assert status is expected
    assert status.label == label


@pytest.mark.parametrize(
    "kind, text_label, display_name",
    [
        (ItemKind.SURVEY, "Question", "Survey"),
        (ItemKind.VOTE, "Title", "Vote"),
    ],
)
def test_kind_labels_on_poll(kind, text_label, display_name):
    poll = Poll(id="p", kind=kind, text="T", options=["a", "b"])
    assert poll.kind.text_label == text_label
    assert poll.kind.display_name == display_name


def test_poll_defaults_votes_to_zero():
    poll = Poll(id="p", kind=ItemKind.SURVEY, text="Q", options=["a", "b", "c"])
    assert poll.votes == [0, 0, 0]
    assert poll.total_votes() == 0
    assert poll.status is ItemStatus.ACTIVE


def test_poll_total_votes_sums_tallies():
    poll = Poll(id="p", kind=ItemKind.VOTE, text="T", options=["a", "b"], votes=[3, 4])
    assert poll.total_votes() == 7


def test_poll_has_voter():
    poll = Poll(
        id="p", kind=ItemKind.VOTE, text="T", options=["a"], voters=["alice", "bob"]
    )
    assert poll.has_voter("alice")
    assert poll.has_voter("bob")
    assert not poll.has_voter("carol")


def test_poll_mismatched_votes_rejected():
    with pytest.raises(ValueError):
        Poll(id="p", kind=ItemKind.VOTE, text="T", options=["a", "b"], votes=[1])