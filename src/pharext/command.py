from __future__ import annotations

import logging
import os
import sys

from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import ClassVar
from typing import Sequence

from pharext import metadata
from pharext.args.cliargs import CliArgs


logger = logging.getLogger(__name__)


class Command(ABC):
    """
    Base class for commands driven by a CliArgs option table.

    Subclasses declare their options in the 'options' class attribute,
    using the positional [short, long, help, mode, default] shape, and
    implement run().
    """

    options: ClassVar[list[Sequence[Any]]] = []
    prog: str | None = None

    def __init__(self) -> None:
        self._args = CliArgs(self.options)

    @property
    def args(self) -> CliArgs:
        return self._args

    def info(self, fmt: str, *args: Any) -> None:
        """
        Print info.
        """
        sys.stdout.write(fmt % args if args else fmt)

    def error(self, fmt: str, *args: Any) -> None:
        """
        Print error.
        """
        sys.stderr.write("ERROR: " + (fmt % args if args else fmt))

    def get_prog_name(self) -> str:
        if self.prog is None:
            return os.path.basename(sys.argv[0])
        return self.prog

    def parse_args(self, argv: Sequence[str]) -> list[str]:
        """
        Parse 'argv' and return all parse and validation errors.

        Validation is skipped when parsing stopped early on a HALT
        option, so "--help" works without the required options.
        """
        errors = list(self._args.parse(argv))
        if self._args.halted is not None:
            logger.debug("Skipping validation after %s", self._args.halted)
        else:
            errors.extend(self._args.validate())
        return errors

    def print_help(self, prog: str | None = None) -> None:
        self.info("%s\n", metadata.header())
        self._args.help(prog or self.get_prog_name())

    @abstractmethod
    def run(self, argv: Sequence[str]) -> int:
        """
        Execute the command.
        """
        raise NotImplementedError
