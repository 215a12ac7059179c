from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pharext.args.spec import OptionSpec


class OptParseError(Exception):
    """
    Base class for errors in how an option table is declared or used.

    Problems with the parsed command line itself are never raised; they
    are yielded as messages from CliArgs.parse() and CliArgs.validate().
    """

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class OptionError(OptParseError):
    """
    Raised if an OptionSpec is created with invalid or
    inconsistent fields.
    """

    def __init__(self, msg: str, option: OptionSpec) -> None:
        super().__init__(msg)
        self.option = option

    def __str__(self) -> str:
        return f"option {self.option}: {self.msg}"


class OptionConflictError(OptionError):
    """
    Raised by CliArgs.compile() with the "error" conflict handler when
    a declaration reuses the short or long name of an earlier one.
    """

    def __init__(self, option: OptionSpec, tokens: list[str]) -> None:
        super().__init__(
            "conflicting option string(s): {}".format(", ".join(tokens)), option
        )
        self.tokens = tokens


class BadOptionError(OptParseError, KeyError):
    """
    Raised if a value is stored under, or removed from, a key that
    names no declared option.
    """

    def __init__(self, key: str, action: str = "store") -> None:
        super().__init__(f"cannot {action} undeclared option {key!r}")
        self.key = key
        self.action = action
