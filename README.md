# minish

A small interactive shell. It reads command lines and runs them. It handles:

- quoting with `'single'` and `"double"` quotes
- expansion of `$NAME`, `$?` and a leading `~`
- pipelines: `cmd1 | cmd2 | cmd3`
- redirections: `<`, `>`, `>>` and heredocs with `<<`
- builtins: `echo` (with `-n`), `cd`, `pwd`, `env`, `export`, `unset` and `exit`

## Installation

```
pip install .
```

## Usage

Start the shell with:

```
minish
```

It takes no arguments. If you pass any, it prints an error and exits with
status 1. The prompt is `minishell$ `. Type commands as you would in any shell:

```
minishell$ export GREETING=hello
minishell$ echo "$GREETING world" | tr a-z A-Z
HELLO WORLD
minishell$ cat << EOF > notes.txt
heredoc> first line
heredoc> home is $HOME
heredoc> EOF
minishell$ exit
```

Heredocs:

- If the delimiter is quoted (`<< 'EOF'`), the lines are kept exactly as typed.
- Otherwise `$NAME` and `$?` are expanded in each line.
- A command line that contains `<<` has its words passed on without variable
  expansion.

Exit status and `$?`:

- `$?` holds the exit status of the last command.
- A command that cannot be found sets it to 127.
- A syntax error sets it to 2.
- In a pipeline, the status recorded is that of the first command.

Where builtins run:

- A builtin with no redirections and no pipe runs in the shell itself, so
  `cd`, `export` and `unset` change the session.
- Inside a pipeline or with redirections, a builtin works on a copy of the
  session, and its changes are discarded.

`exit` with no argument leaves with the last status. With a numeric argument
it leaves with that number modulo 256. Press Ctrl-D at the prompt to leave the
shell.

## Using it from Python

You can also use the parts of the shell directly:

```python
from minish.state import init_shell
from minish.lexer import tokenize
from minish.expand import expand_tokens
from minish.parser import parse, format_commands

state = init_shell(["HOME=/home/user", "PATH=/usr/bin:/bin"])
tokens = expand_tokens(tokenize("ls ~ | wc -l > out.txt"), state)
print(format_commands(parse(tokens, state)))
```

Note that `parse` creates or truncates the files named after `>` and `>>`, as
the shell does.

The main entry points:

- `minish.syntax.check_syntax(tokens)` raises `ShellSyntaxError` for a line it
  cannot accept.
- `minish.shell.process_line(line, state)` runs one whole command line against
  a `ShellState`.
- `minish.shell.run_loop(state, read_line)` runs the read loop. `read_line`
  is any callable that takes a prompt and returns a line, or `None` at end of
  input.

## Limitations

The shell does not provide:

- command lists with `;`, `&&` or `||`
- background jobs or job control
- filename globbing
- subshells or command substitution
- shell scripts or control-flow keywords

## Running the tests

```
pip install .[test]
pytest
```