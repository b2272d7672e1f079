"""Limits, enumerations and the poll record shared by server and client."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

MAX_QUESTION_LEN = 256
MAX_OPTION_LEN = 64
MAX_OPTIONS = 5
BUFFER_SIZE = 1024
ID_LENGTH = 64
MAX_USERNAME_LEN = 32
MAX_VOTERS = 100


class ItemStatus(enum.IntEnum):
    """Whether a survey or vote still accepts responses."""

    ACTIVE = 0
    CLOSED = 1

    @property
    def label(self) -> str:
        return "Active" if self is ItemStatus.ACTIVE else "Closed"


class ItemKind(enum.Enum):
    """The two kinds of poll the system manages."""

    SURVEY = "survey"
    VOTE = "vote"

    @property
    def display_name(self) -> str:
        """Capitalised name used in server replies."""
        return self.value.capitalize()

    @property
    def text_label(self) -> str:
        """Label of the poll's main text in listings and results."""
        return "Question" if self is ItemKind.SURVEY else "Title"


class Command(enum.Enum):
    """Protocol commands, in the order the server matches them."""

    CREATE_SURVEY = "CREATE_SURVEY"
    RESPOND_SURVEY = "RESPOND_SURVEY"
    RESULT_SURVEY = "RESULT_SURVEY"
    CLOSE_SURVEY = "CLOSE_SURVEY"
    CREATE_VOTE = "CREATE_VOTE"
    RESPOND_VOTE = "RESPOND_VOTE"
    RESULT_VOTE = "RESULT_VOTE"
    CLOSE_VOTE = "CLOSE_VOTE"
    LIST_SURVEY = "LIST_SURVEY"
    LIST_VOTE = "LIST_VOTE"

    @property
    def kind(self) -> ItemKind:
        return ItemKind[self.name.rsplit("_", 1)[1]]

    @property
    def action(self) -> str:
        """The verb of the command in lower case, e.g. ``"create"``."""
        return self.name.split("_", 1)[0].lower()

    @classmethod
    def from_message(cls, message: str) -> Command:
        """Return the command a raw message starts with.

        Raises ValueError when the message starts with no known command.
        """
        for command in cls:
            if message.startswith(command.value):
                return command
        raise ValueError("Unknown command")


@dataclass
class Poll:
    """A survey or a vote with its options, tallies and participants."""

    id: str
    kind: ItemKind
    text: str
    options: list[str] = field(default_factory=list)
    votes: list[int] = field(default_factory=list)
    status: ItemStatus = ItemStatus.ACTIVE
    voters: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.votes:
            self.votes = [0] * len(self.options)
        if len(self.votes) != len(self.options):
            raise ValueError("votes and options must have the same length")

    def total_votes(self) -> int:
        return sum(self.votes)

    def has_voter(self, username: str) -> bool:
        return username in self.voters