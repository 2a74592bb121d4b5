# agentic

A terminal assistant. It keeps a task list in SQLite, prints study
session plans and blog post summaries, runs commands for you, and
answers natural-language questions about what to type next. It uses a
local Ollama server by default and can use OpenAI instead when you give
it a key. When no model can answer, it gives a suggestion based on
keywords in your question.

## Installation

```
pip install .
```

This installs the `agentic` command.

## Usage

Running `agentic` with no subcommand prints the help text.
`agentic --version` prints the version.

### Tasks

Tasks are stored in a SQLite database, by default
`~/.agentic/history.db`.

```
agentic task add --title "Build dashboard" --priority high
agentic task add --title "Write report" --description "Quarterly numbers" --priority low
agentic task list
agentic task complete <task-id>
agentic task delete <task-id>
```

`--priority` defaults to `medium`. A priority may be written as
`low`/`l`, `medium`/`med`/`m` or `high`/`h`, in any case; anything else
is an error. `task list` shows every stored task with its status icon,
priority and the first eight characters of its id; it accepts
`--recent`, `--status` and `--priority` but does not filter by them.
`complete` and `delete` take the full task id.

```
agentic task priority <task-id> medium
agentic task show <task-id>
```

`task priority` checks the priority and reports it, but does not change
the stored task. `task show` only reports which id it was given.

### Study preparation

```
agentic prep start --exam CET --schedule daily --duration 60
agentic prep list --exam cet --active
agentic prep add --topic "Thermodynamics" --exam JEE --priority 5
agentic prep review --exam CET --count 3
agentic prep stats --exam CET --period week
agentic prep stop
```

`prep start` prints a study plan for `CET`, for `JEE`, or a general
plan for any other exam. `prep list` and `prep review` work on a fixed
set of sample sessions and topics; `prep stats` and `prep stop` print
sample figures. None of the prep commands store anything.

### Blog posts

```
agentic blog new --title "Async tips" --tags rust --tags async
agentic blog list --tag rust --drafts
agentic blog view --post-id blog_001
agentic blog edit --post-id blog_001
agentic blog publish --post-id blog_001
agentic blog delete --post-id blog_001
```

The blog commands print messages and list a fixed set of sample posts;
they do not store posts.

### Asking the assistant

```
agentic agent "add a high priority task to build the dashboard"
```

With the default settings the question goes to the `phi4:latest` model
on `http://localhost:11434`. If that server does not answer, a
keyword-based suggestion is printed instead.

### Running a command

```
agentic run "ls -la"
```

The command line is split on whitespace and run directly, without a
shell. Its output is printed on success; on failure its error output is
reported and the exit status is 1.

### Debug output

Add `--debug` before the subcommand to see detailed logging:

```
agentic --debug agent "show me recent tasks"
```

## Configuration

If `~/.agentic/config.toml` does not exist, it is written with defaults
the first time the command runs. It holds the database path, an
optional `openai_api_key`, theme colours, command aliases and the
assistant settings:

```toml
[agent]
model = "gpt-3.5-turbo"
temperature = 0.7
max_tokens = 1000
timeout_seconds = 30
preferred_provider = "ollama"
```

Set `preferred_provider` to `"openai"` and provide a key, either as
`openai_api_key` in the file or through the `OPENAI_API_KEY` environment
variable, to use OpenAI with the configured `model`. Without a key the
local Ollama server is used.

## Library use

Besides the command, the package offers:

- `agentic.planner.Planner`: asks an `Agent` for a step-by-step plan
  towards a goal (`create_execution_plan`), parses numbered
  `Command:`/`Description:`/`Dependencies:` answers
  (`parse_plan_response`), and removes repeated commands, orders by
  dependency and estimates the running time (`optimize_plan`).
- `agentic.keybindings.KeyBindingManager`: parses key strings such as
  `ctrl-shift-k` (`KeyBinding.from_string`), maps commands to keys both
  ways, loads keysets from `<name>.yaml` files in its keyset directories
  and writes them back with `export_keyset`.
- `agentic.themes.ThemeManager`: loads colour themes from `.yaml`/`.yml`
  files in its theme directories and their subdirectories, and lets you
  look up, search, group by tag and choose the current theme.
- `agentic.ollama.OllamaClient`: a small client for an Ollama server's
  generate and model-listing endpoints.

The default keyset and theme directories are `keysets`/`themes` in the
current directory; add others with `add_keyset_directory` and
`add_theme_directory`.

## What it does not do

There is no interactive full-screen mode: `-i`/`--interactive` is
accepted but does nothing. There is no command that turns a request
into shell commands and runs them; the planner is available only as a
library. Themes and key bindings are not used by the command itself.

## Development

```
pip install -e ".[test]"
pytest
```