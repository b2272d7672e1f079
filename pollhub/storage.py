"""Reading and writing polls as text files, one file per poll."""

from __future__ import annotations

import os
import re
from pathlib import Path

from pollhub.common import (
    MAX_OPTION_LEN,
    MAX_OPTIONS,
    MAX_QUESTION_LEN,
    MAX_USERNAME_LEN,
    MAX_VOTERS,
    ItemKind,
    ItemStatus,
    Poll,
)

VOTERS_MARKER = "---VOTERS---"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    """Integer at the start of text, or 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def serialize_poll(poll: Poll) -> str:
    """Render a poll in the on-disk text format."""
    lines = [poll.text, str(int(poll.status))]
    lines.extend(f"{option}:{count}" for option, count in zip(poll.options, poll.votes))
    lines.append(VOTERS_MARKER)
    lines.extend(poll.voters)
    return "\n".join(lines) + "\n"


def parse_poll(poll_id: str, kind: ItemKind, text: str) -> Poll:
    """Build a poll from the on-disk text format.

    A missing status line means active; options past the limit and
    voters past the limit are ignored, and blank lines are skipped.
    """
    lines = text.split("\n")
    heading = lines[0][: MAX_QUESTION_LEN - 1]
    status_line = lines[1] if len(lines) > 1 else ""
    status = ItemStatus.CLOSED if _leading_int(status_line) else ItemStatus.ACTIVE

    options: list[str] = []
    votes: list[int] = []
    voters: list[str] = []
    in_options = True
    for line in lines[2:]:
        if not line:
            continue
        if line == VOTERS_MARKER:
            in_options = False
            continue
        if in_options:
            if len(options) < MAX_OPTIONS:
                name, sep, count = line.rpartition(":")
                if not sep:
                    name, count = line, ""
                options.append(name[: MAX_OPTION_LEN - 1])
                votes.append(_leading_int(count))
        elif len(voters) < MAX_VOTERS:
            voters.append(line[: MAX_USERNAME_LEN - 1])

    return Poll(
        id=poll_id,
        kind=kind,
        text=heading,
        options=options,
        votes=votes,
        status=status,
        voters=voters,
    )


class PollStorage:
    """A directory holding one sub-directory of poll files per kind."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def ensure_dirs(self) -> None:
        for kind in ItemKind:
            (self.root / kind.value).mkdir(parents=True, exist_ok=True)

    def path_for(self, kind: ItemKind, poll_id: str) -> Path:
        return self.root / kind.value / f"{poll_id}.txt"

    def exists(self, kind: ItemKind, poll_id: str) -> bool:
        return self.path_for(kind, poll_id).exists()

    def save(self, poll: Poll) -> None:
        path = self.path_for(poll.kind, poll.id)
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(serialize_poll(poll))

    def load_all(self, kind: ItemKind) -> list[Poll]:
        """Read every stored poll of a kind, in file-name order."""
        directory = self.root / kind.value
        if not directory.is_dir():
            return []
        polls = []
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if not entry.is_file() or ".txt" not in entry.name:
                continue
            try:
                with entry.open(encoding="utf-8", errors="replace", newline="\n") as fh:
                    text = fh.read()
            except OSError:
                continue
            polls.append(parse_poll(entry.name[:-4], kind, text))
        return polls