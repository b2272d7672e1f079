"""Interactive terminal client for the survey and vote server."""

from __future__ import annotations

import argparse
import re
import socket
from collections.abc import Callable, Sequence
from functools import partial
from typing import Protocol

from pollhub.common import (
    BUFFER_SIZE,
    ID_LENGTH,
    MAX_OPTIONS,
    MAX_QUESTION_LEN,
    MAX_USERNAME_LEN,
    Command,
    ItemKind,
)

SERVER_HOST = "127.0.0.1"
SERVER_PORT = 9000
DEFAULT_USERNAME = "anonymous"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_KIND_WORD = {ItemKind.SURVEY: "설문", ItemKind.VOTE: "투표"}
_CREATE_PROMPT = {ItemKind.SURVEY: "설문 질문 입력: ", ItemKind.VOTE: "투표 제목 입력: "}

MENU = (
    "\n=== Menu ===\n"
    "1. 설문 생성\n"
    "2. 설문 참여\n"
    "3. 설문 결과 조회\n"
    "4. 투표 생성\n"
    "5. 투표 참여\n"
    "6. 투표 결과 조회\n"
    "7. 설문 목록 조회\n"
    "8. 투표 목록 조회\n"
    "9. 설문 종료\n"
    "10. 투표 종료\n"
    "0. 종료\n"
    "Select> "
)


class Connection(Protocol):
    def sendall(self, data: bytes) -> None: ...

    def recv(self, bufsize: int) -> bytes: ...

    def close(self) -> None: ...


def parse_menu_choice(text: str) -> int:
    """Read the integer a menu answer starts with; anything else counts as 0."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _command(action: str, kind: ItemKind) -> str:
    return Command[f"{action.upper()}_{kind.name}"].value


def _print(text: str) -> None:
    print(text, end="", flush=True)


class Client:
    """Menu-driven session talking to the server over one connection.

    ``read_line`` returns the next input line without its terminator and
    raises EOFError when input ends; ``write`` shows text to the user.
    """

    def __init__(
        self,
        connection: Connection,
        username: str,
        read_line: Callable[[], str] = input,
        write: Callable[[str], None] = _print,
    ) -> None:
        self.connection = connection
        self.username = username[: MAX_USERNAME_LEN - 1]
        self._read_line = read_line
        self._write = write

    def _ask(self, prompt: str, size: int = BUFFER_SIZE) -> str:
        self._write(prompt)
        line = self._read_line().split("\n", 1)[0]
        return line[: size - 1]

    def request(self, message: str) -> str | None:
        """Send one message and return the reply, or None when none arrives."""
        self.connection.sendall(message.encode("utf-8"))
        data = self.connection.recv(BUFFER_SIZE - 1)
        if not data:
            return None
        return data.decode("utf-8", errors="replace")

    def _request_and_show(self, message: str) -> None:
        reply = self.request(message)
        if reply is not None:
            self._write(f"Server> {reply}\n")

    def create_item(self, kind: ItemKind) -> None:
        """Ask for a heading and 2 to MAX_OPTIONS options, then create the poll."""
        text = self._ask(_CREATE_PROMPT[kind], MAX_QUESTION_LEN)
        count = 0
        while not 2 <= count <= MAX_OPTIONS:
            count = parse_menu_choice(self._ask(f"보기 옵션 개수 입력 (2~{MAX_OPTIONS}): "))
        options = [self._ask(f"옵션 {number} 입력: ") for number in range(1, count + 1)]
        self._request_and_show(f"{_command('create', kind)}|{text}|{','.join(options)}")

    def _show_options(self, kind: ItemKind, poll_id: str) -> bool:
        reply = self.request(f"{_command('result', kind)}|{poll_id}")
        if reply is None:
            self._write("Failed to receive data from server.\n")
            return False
        if reply.startswith("[ERROR]"):
            self._write(f"Server> {reply}\n")
            return False
        self._write(f"--- {_KIND_WORD[kind]} 옵션 ---\n{reply}\n")
        return True

    def respond_survey(self) -> None:
        """Show a survey's options and send the chosen numbers."""
        poll_id = self._ask("설문 ID 입력: ", ID_LENGTH)
        if not self._show_options(ItemKind.SURVEY, poll_id):
            return
        selection = self._ask("선택 항목 번호 입력 (예: 1,2): ")
        self._request_and_show(
            f"{Command.RESPOND_SURVEY.value}|{poll_id}|{selection}|{self.username}"
        )

    def respond_vote(self) -> None:
        """Show a vote's options and send one chosen number."""
        poll_id = self._ask("투표 ID 입력: ", ID_LENGTH)
        if not self._show_options(ItemKind.VOTE, poll_id):
            return
        selection = self._ask("선택할 보기의 번호를 하나만 입력하세요: ")
        if not selection:
            self._write("Error: 번호를 입력해주세요.\n")
            return
        if any(ch not in "0123456789" for ch in selection):
            self._write("Error: 숫자만 입력해주세요.\n")
            return
        self._request_and_show(
            f"{Command.RESPOND_VOTE.value}|{poll_id}|{selection}|{self.username}"
        )

    def show_result(self, kind: ItemKind) -> None:
        poll_id = self._ask(f"{_KIND_WORD[kind]} ID 입력: ", ID_LENGTH)
        self._request_and_show(f"{_command('result', kind)}|{poll_id}")

    def list_items(self, kind: ItemKind) -> None:
        reply = self.request(_command("list", kind))
        if reply is not None:
            self._write(f"--- {_KIND_WORD[kind]} 목록 ---\n{reply}")

    def close_item(self, kind: ItemKind) -> None:
        poll_id = self._ask(f"종료할 {_KIND_WORD[kind]}의 ID를 입력하세요: ", ID_LENGTH)
        self._request_and_show(f"{_command('close', kind)}|{poll_id}")

    def run(self) -> None:
        """Show the menu and carry out choices until the user quits."""
        actions: dict[int, Callable[[], None]] = {
            1: partial(self.create_item, ItemKind.SURVEY),
            2: self.respond_survey,
            3: partial(self.show_result, ItemKind.SURVEY),
            4: partial(self.create_item, ItemKind.VOTE),
            5: self.respond_vote,
            6: partial(self.show_result, ItemKind.VOTE),
            7: partial(self.list_items, ItemKind.SURVEY),
            8: partial(self.list_items, ItemKind.VOTE),
            9: partial(self.close_item, ItemKind.SURVEY),
            10: partial(self.close_item, ItemKind.VOTE),
        }
        try:
            while True:
                choice = parse_menu_choice(self._ask(MENU))
                if choice == 0:
                    break
                action = actions.get(choice)
                if action is None:
                    self._write("Invalid choice, try again.\n")
                else:
                    action()
        except EOFError:
            pass
        self.connection.close()
        self._write(">> Disconnected\n")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Survey and vote client.")
    parser.add_argument("--host", default=SERVER_HOST)
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    args = parser.parse_args(argv)
    try:
        connection = socket.create_connection((args.host, args.port))
    except OSError as exc:
        print(f"connect() failed: {exc}")
        return 1
    print(f">> Connected to server {args.host}:{args.port}")
    _print("Enter your username: ")
    try:
        username = input()[: MAX_USERNAME_LEN - 1]
    except EOFError:
        username = ""
    username = username or DEFAULT_USERNAME
    print(f"Welcome, {username}!")
    Client(connection, username).run()
    return 0