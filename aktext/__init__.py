"""String utilities, a generic lexer, a lenient UTF-8 view and a brace-style formatter."""

__version__ = "0.1.0"

__all__ = [
    "builder",
    "formatter",
    "lexer",
    "spec",
    "strutils",
    "text",
    "utf8",
    "view",
]