# pollhub

pollhub runs surveys and votes over plain TCP. It has two parts:

- a threaded server that keeps every poll in memory and writes each one to a text file, and
- an interactive terminal client with a numbered menu.

A **survey** asks a question, and a participant may pick several options at once, such as `1,3`. A **vote** has a title, and a participant picks one option.

The following rules apply to every poll:

- The client asks for between 2 and 5 options. The server keeps at most the first 5.
- A poll accepts at most 100 participants.
- Each username can answer a given poll only once.
- A poll stays open until someone closes it. After that it refuses new answers.

pollhub has no dependencies outside the standard library.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Running the server

```
pollhub-server
```

| Option       | Default   | Meaning                                |
|--------------|-----------|----------------------------------------|
| `--host`     | `0.0.0.0` | Address to listen on                   |
| `--port`     | `9000`    | TCP port                               |
| `--data-dir` | `data`    | Directory where polls are stored       |

The server stores each poll as `<data-dir>/survey/<id>.txt` or `<data-dir>/vote/<id>.txt`. It creates these directories if they are missing. At start-up it loads every poll stored there, and it rewrites a poll's file every time the poll changes.

The server derives a poll's ID from its question or title:

- ASCII letters and digits are lower-cased.
- Each run of whitespace becomes a single hyphen.
- All other characters are dropped.

For example, "Favourite Colour?" becomes `favourite-colour`. If the text leaves nothing behind, the ID is `survey` or `vote`. If a file with that ID already exists, the server tries `-2`, then `-3`, and so on.

## Running the client

Start the client while the server is running:

```
pollhub-client [--host 127.0.0.1] [--port 9000]
```

The client first asks for a username. An empty answer means `anonymous`. It then shows this menu, with its labels in Korean:

| Choice | Action                |
|--------|-----------------------|
| 1      | Create a survey       |
| 2      | Answer a survey       |
| 3      | Show survey results   |
| 4      | Create a vote         |
| 5      | Answer a vote         |
| 6      | Show vote results     |
| 7      | List surveys          |
| 8      | List votes            |
| 9      | Close a survey        |
| 10     | Close a vote          |
| 0      | Quit                  |

When you answer a poll, the client first shows the poll's current results, then asks for your choice. For a vote, the answer must consist of digits only.

Results show:

- the number of participants, and
- for each option, its count and its share of all votes cast, in whole percent.

## Protocol

Each request is a single message of fields separated by `|`:

```
CREATE_SURVEY|<question>|<opt1,opt2,...>
RESPOND_SURVEY|<id>|<n1,n2,...>|<username>
RESULT_SURVEY|<id>
LIST_SURVEY
CLOSE_SURVEY|<id>
CREATE_VOTE|<title>|<opt1,opt2,...>
RESPOND_VOTE|<id>|<n>|<username>
RESULT_VOTE|<id>
LIST_VOTE
CLOSE_VOTE|<id>
```

Replies to create, respond and close requests start with `[OK]` or `[ERROR]`. List and result requests reply with plain text, or with `[ERROR]` when the poll does not exist. An unrecognised request gets `[ERROR] Unknown command`.

The server counts option numbers from 1. It ignores numbers that match no option, but the participant is still recorded. Each reply is cut to fit in 1023 bytes.

## Using it as a library

| Module             | What it provides |
|--------------------|------------------|
| `pollhub.server`   | `handle_message(registry, message)` returns the reply text for one request. `PollServer` is a `socketserver.ThreadingTCPServer`. `serve(host, port, data_dir)` runs the server. |
| `pollhub.registry` | `PollRegistry`, with `create`, `respond`, `close`, `get`, `list_text` and `result_text`. Refused requests raise `PollError`. |
| `pollhub.storage`  | `PollStorage` holds the on-disk files. `serialize_poll` and `parse_poll` convert polls to and from the text format. |
| `pollhub.slug`     | `slugify(text, max_len)` builds the IDs described above. |
| `pollhub.common`   | The `Poll` dataclass, the `ItemKind`, `ItemStatus` and `Command` enums, and the size limits. |

## What it does not do

- Users are identified only by the name they type. There is no authentication, so anyone can close any poll.
- Polls cannot be deleted or edited through the protocol. To remove a poll, delete its file while the server is stopped.
- Each message is read with a single receive call. There is no framing beyond that.