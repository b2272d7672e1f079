"""In-memory set of surveys and votes, kept in step with their files."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from pollhub.common import (
    ID_LENGTH,
    MAX_OPTION_LEN,
    MAX_OPTIONS,
    MAX_QUESTION_LEN,
    MAX_USERNAME_LEN,
    MAX_VOTERS,
    ItemKind,
    ItemStatus,
    Poll,
)
from pollhub.slug import slugify
from pollhub.storage import PollStorage

_ALREADY_RESPONDED = {
    ItemKind.SURVEY: "You have already participated in this survey.",
    ItemKind.VOTE: "You have already voted on this item.",
}


class PollError(Exception):
    """A request the registry refuses; the message is meant for the client."""


def _percent(count: int, total: int) -> int:
    """Share of total in whole percent, truncated toward zero."""
    if total <= 0:
        return 0
    value = count * 100
    quotient = abs(value) // total
    return quotient if value >= 0 else -quotient


class PollRegistry:
    """Thread-safe collection of polls, newest first, backed by storage."""

    def __init__(self, storage: PollStorage) -> None:
        self.storage = storage
        self._polls: dict[ItemKind, dict[str, Poll]] = {kind: {} for kind in ItemKind}
        self._lock = threading.RLock()

    def _add(self, poll: Poll) -> None:
        polls = self._polls[poll.kind]
        polls.pop(poll.id, None)
        polls[poll.id] = poll

    def load(self) -> None:
        """Read every stored poll into memory."""
        with self._lock:
            for kind in ItemKind:
                for poll in self.storage.load_all(kind):
                    self._add(poll)

    def get(self, kind: ItemKind, poll_id: str) -> Poll:
        with self._lock:
            try:
                return self._polls[kind][poll_id]
            except KeyError:
                raise PollError(f"{kind.display_name} not found") from None

    def create(self, kind: ItemKind, text: str, options_csv: str) -> Poll:
        """Create, store and return a new poll with a unique id."""
        options = [opt[: MAX_OPTION_LEN - 1] for opt in options_csv.split(",") if opt]
        options = options[:MAX_OPTIONS]
        base_id = slugify(text, ID_LENGTH) or kind.value
        with self._lock:
            poll_id = base_id
            suffix = 2
            while self.storage.exists(kind, poll_id):
                poll_id = f"{base_id}-{suffix}"[: ID_LENGTH - 1]
                suffix += 1
            poll = Poll(
                id=poll_id,
                kind=kind,
                text=text[: MAX_QUESTION_LEN - 1],
                options=options,
            )
            self.storage.save(poll)
            self._add(poll)
            return poll

    def respond(
        self, kind: ItemKind, poll_id: str, choices: Iterable[int], username: str
    ) -> Poll:
        """Record one participant's choices (1-based); unknown choices are ignored."""
        name = username[: MAX_USERNAME_LEN - 1]
        with self._lock:
            poll = self.get(kind, poll_id)
            if poll.status is ItemStatus.CLOSED:
                raise PollError(f"This {kind.value} is closed.")
            if poll.has_voter(name):
                raise PollError(_ALREADY_RESPONDED[kind])
            if len(poll.voters) >= MAX_VOTERS:
                raise PollError(
                    f"This {kind.value} has reached its maximum number of participants."
                )
            for choice in choices:
                index = choice - 1
                if 0 <= index < len(poll.options):
                    poll.votes[index] += 1
            poll.voters.append(name)
            self.storage.save(poll)
            return poll

    def close(self, kind: ItemKind, poll_id: str) -> Poll:
        with self._lock:
            poll = self.get(kind, poll_id)
            poll.status = ItemStatus.CLOSED
            self.storage.save(poll)
            return poll

    def list_text(self, kind: ItemKind) -> str:
        """One line per poll of a kind, newest first."""
        with self._lock:
            lines = [
                f"[{poll.status.label}] ID: {poll.id}, {kind.text_label}: {poll.text}\n"
                for poll in reversed(self._polls[kind].values())
            ]
        return "".join(lines) or f"No {kind.value}s available."

    def result_text(self, kind: ItemKind, poll_id: str) -> str:
        """The poll's heading followed by each option's tally and share."""
        with self._lock:
            poll = self.get(kind, poll_id)
            total = poll.total_votes()
            lines = [
                f"{kind.text_label}: {poll.text} [{poll.status.label}] "
                f"({len(poll.voters)} participants)\n"
            ]
            lines.extend(
                f"  {number}. {option} - {count} votes ({_percent(count, total)}%)\n"
                for number, (option, count) in enumerate(
                    zip(poll.options, poll.votes), start=1
                )
            )
        return "".join(lines)