# botrick

botrick is an IRC bot. It remembers what people say in its channels and
strings their words back together into new sentences, plays a five-letter
word-guessing game with the whole channel, announces the titles of links,
and answers a few silly questions.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The bot's root directory

The bot works from a root directory (`--dir`, default `.`) that holds:

- `botrick.toml` – bot settings. If it is missing it is written with defaults.
  - `command_prefix` – the single character that starts a command, such as `!`.
    The default written is a NUL character, so set this before running.
  - `inspect_urls` – `true` to fetch the first link in a message and announce its page title
  - `inspect_rejects` – a list of strings; messages containing any of them
    (after colour codes are stripped) are never inspected for links
- `irc.toml` – the IRC connection (see below)
- `data/werdz.sqlite` – the word database the bot learns into and speaks from
- `data/werds.txt` – the word list for the guessing game, one word per line.
  The package ships no word list; supply your own of five-letter words.

Example `botrick.toml`:

```toml
command_prefix = "!"
inspect_urls = true
inspect_rejects = ["nolink"]
```

Example `irc.toml` (`nickname` and `server` are required; unknown keys are ignored):

```toml
nickname = "botrick"
server = "irc.example.com"
port = 6697            # defaults to 6697 with TLS, 6667 without
use_tls = true
channels = ["#botrick"]
alt_nicks = ["botrick_", "botrick__"]
username = "botrick"   # defaults to the nickname
realname = "botrick"   # defaults to the nickname
password = "password"  # sent as PASS, optional
```

## Running the bot

Set up a root directory (writes default `botrick.toml` if absent, creates
`data/` and the word table in `data/werdz.sqlite`):

```
botrick --dir /path/to/botrick-root init
```

Then run it:

```
botrick --dir /path/to/botrick-root run
```

`run` is also what happens when no subcommand is given. `botrick --version`
prints the version. The log level is taken from the `BOTRICK_LOG`
environment variable (default `INFO`).

The client registers with the server, answers `PING`, joins the configured
channels once the MOTD ends, tries the `alt_nicks` in turn when the nickname
is taken, and answers CTCP `VERSION` requests. Other CTCP messages (apart from
`ACTION`) are ignored.

## Talking to the bot

With `!` as the command prefix:

| Message | What happens |
| --- | --- |
| `!spork` | A sentence built from a random remembered word |
| `!spork word` | A sentence built around `word` |
| `!sporklike nick` | A sentence in the style of `nick` |
| `!sporklike nick word` | A sentence in the style of `nick`, built around `word` |
| `7` | A sentence built around `7` |
| `!werdle` / `!wordle` | The current state of the word game |
| `!werdle guess` | Guess the five-letter word; six tries per game |
| `!isit` or `~isit` | It is, or it just isn't |
| `!dword` | A registry path of great importance |
| `.bots` | The bot reports in |

Every other line in the channel is learned from, apart from lines of a single
word and lines that start with `!speak` or `!talklike`.

## Command-line sporking

The same sentence generation is available from a shell, reading
`data/werdz.sqlite` under the current directory:

```
spork
spork word
sporklike nick
sporklike nick word
```

## Filling the database from old logs

Existing irssi logs (lines with a 19-character timestamp, then `< nick>` for
messages or ` * nick` for actions) can be loaded in bulk:

```
sporker-ingest --file channel.log
```

Options:

- `--db PATH` – database to write (default `werdz.sqlite` in the current directory;
  the bot reads `data/werdz.sqlite`, so move it there or point `--db` at it)
- `--chunk-size N` – lines per transaction (default 10000)

The word table is created if needed, and search indexes are built at the end.
Index creation fails if the indexes already exist in that database.

## Using it as a library

- `botrick.sporker` – `Spork`, `Foon`, `build_words`, `build_words_like`,
  `log_words`, `opendb`, `getdb`, `create_table`, `create_indexes`
- `botrick.werdle` – `Game`, `GuessResult`, `GuessCharState`, `WerdleError`, `load_words`
- `botrick.color` – `Color`, `colors`, `colorize`, `strip_formatting`
- `botrick.message` – `IrcMessage`, `CommandMessage`
- `botrick.router` – `IrcRouter`, `Actor`, `Sender`
- `botrick.ingest` – `parse_log_line`, `ingest_lines`

## What it does not do

- It does not reconnect after the server closes the connection; the bot exits.
- It has no SASL or services authentication beyond a server `PASS`.
- It ships no word list for the guessing game.
- Commands run one at a time in the order they arrive; only link-title
  fetching runs in the background.