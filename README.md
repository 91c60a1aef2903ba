# llmirc

An IRC bot that joins a set of channels and answers what people say there
with text from a local LLM server. The server must offer an Ollama-style
`/api/generate` endpoint at `http://localhost:11434` that serves the
`llama3.2` model.

## What it does

- Connects to the IRC server and registers. The nick, user name and real
  name are all set to the configured nick.
- Joins every channel listed in `config/channels.cfg`.
- Joins the admin channel named in `config/admin.cfg` and sets its key
  with `MODE <channel> +k <password>`.
- Sends the text of each message in a watched channel to the LLM server.
  It asks for at most 30 tokens and posts the reply back to that channel
  on one line.
- Answers server `PING`s with `PONG`.
- Appends the received traffic, the `PONG`s and the replies to
  `logs/chat.log`.
- Saves each raw response from the LLM server to
  `responses/response.json`.
- Sends `QUIT` when it stops.
- Retries when the connection is refused or lost. It makes up to 5
  attempts. It waits 5 seconds after the first failure and 20 seconds
  longer after each one after that. Ctrl-C during a wait gives up.

## Files it expects

Run the bot from a directory that holds all of these files:

```
config/admin.cfg
config/channels.cfg
logs/chat.log
responses/response.json
```

If any of them is missing, the command prints an error and exits with
status 1.

`config/channels.cfg` lists one channel per line. Only the first 32 lines
are read, and the file must list at least one channel:

```
#general
#random
```

`config/admin.cfg` names the admin channel and its key:

```
name: #admin
password: password
```

## Running

```
pip install .
llmirc
```

Options:

| Option            | Default      | Meaning                   |
|-------------------|--------------|---------------------------|
| `--server ADDR`   | `10.1.0.46`  | IRC server address        |
| `--port PORT`     | `6667`       | IRC server port           |
| `--nick NICK`     | `bkaza0056`  | nick to register with     |

The command prints `Bye` when it ends.

## Admin commands

Write these in the admin channel:

| Command            | Effect                                              |
|--------------------|-----------------------------------------------------|
| `ignore <nick>`    | stop answering that user (up to 10 users)           |
| `donotchat <chan>` | stop answering in that channel (up to 32 channels)  |
| `topic 0`          | add no topic hint to prompts                        |
| `topic 1`          | add `Topic:Unix` to prompts                         |
| `topic 2`          | add `Topic:Cooking` to prompts                      |
| `poweroff`         | send `QUIT` and shut the bot down                   |

The bot confirms each command in the admin channel. It also replies when
a list is full or a topic choice is invalid.

## Using it as a library

| Module           | Contents                                                                                                    |
|------------------|-------------------------------------------------------------------------------------------------------------|
| `llmirc.config`  | `read_channels`, `read_admin_config`, `parse_channels`, `parse_admin_config`, `AdminConfig`, `ConfigError`  |
| `llmirc.llm`     | `LLMClient.generate(prompt, topic)`, `build_payload`, `parse_stream`, `Topics`                              |
| `llmirc.admin`   | `BotState` (ignored users and muted channels), `AdminHandler.handle(line)`, which returns an `AdminAction`  |
| `llmirc.router`  | `Router.route(data)`, which returns a list of `Route` values tagged with a `RouteKind`                      |
| `llmirc.bot`     | `Bot` (`run`, `stop`) and `ChatLog` (`write`, `close`, usable as a context manager)                         |
| `llmirc.connection` | `authenticate(stream, nick, pause)` and `Connector.run()`                                               |
| `llmirc.text`    | `extract_message` and `flatten_newlines`                                                                    |

`Bot.run()` raises `ConnectionError` when the server goes away.
`Connector.run()` returns `True` when a session ended normally and `False`
when it gave up.

## What it does not do

llmirc does not install, start or manage the LLM server or its model. The
server must already be running. llmirc does not create the config, log or
response files either. It does not use TLS and does not identify with
NickServ.

## Development

```
pip install -e .[test]
pytest
```