"""A small interactive shell with pipes, redirections, heredocs and builtins."""

__version__ = "0.1.0"

__all__ = [
    "builtins",
    "executor",
    "expand",
    "exports",
    "heredoc",
    "lexer",
    "parser",
    "registry",
    "shell",
    "state",
    "syntax",
]