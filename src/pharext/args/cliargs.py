from __future__ import annotations

import logging
import sys

from typing import IO
from typing import Any
from typing import Iterable
from typing import Iterator
from typing import Literal
from typing import Sequence

from pharext.args.errors import OptionConflictError
from pharext.args.formatters import HelpFormatter
from pharext.args.mode import Mode
from pharext.args.spec import OptionSpec
from pharext.args.values import ArgValues
from pharext.args.values import canonical


logger = logging.getLogger(__name__)


class CliArgs:
    """
    Command line arguments.

    Instance attributes:
      orig : [OptionSpec]
        the declarations as given to compile(), in declaration order;
        used by validate() and help()
      spec : { string : OptionSpec }
        the compiled lookup table mapping every invocation token, eg.
        "-f" or "--force", to its declaration
      values : ArgValues
        the parsed values, filled in by parse()
      halted : OptionSpec | None
        the HALT option that stopped the most recent parse(), if any
      conflict_handler : "resolve" | "error"
        what compile() does when two declarations share a token;
        "resolve" lets the later declaration take over the token

    Calling compile() while a parse() generator is still being consumed
    is not supported.  A CliArgs is not thread-safe.
    """

    OPTIONAL = Mode.OPTIONAL
    REQUIRED = Mode.REQUIRED
    SINGLE = Mode.SINGLE
    MULTI = Mode.MULTI
    NOARG = Mode.NOARG
    REQARG = Mode.REQARG
    OPTARG = Mode.OPTARG
    HALT = Mode.HALT

    orig: list[OptionSpec]
    spec: dict[str, OptionSpec]

    def __init__(
        self,
        spec: Iterable[OptionSpec | Sequence[Any]] | None = None,
        conflict_handler: Literal["error", "resolve"] = "resolve",
        formatter: HelpFormatter | None = None,
    ) -> None:
        self.set_conflict_handler(conflict_handler)
        self.formatter = formatter or HelpFormatter()
        self.spec = {}
        self.values = ArgValues(self.spec)
        self.halted: OptionSpec | None = None
        self.compile(spec)

    def set_conflict_handler(self, handler: Literal["error", "resolve"]) -> None:
        if handler not in ("error", "resolve"):
            raise ValueError(f"invalid conflict_resolution value {handler!r}")
        self.conflict_handler = handler

    # -- Compiling -----------------------------------------------------

    def compile(self, spec: Iterable[OptionSpec | Sequence[Any]] | None = None) -> CliArgs:
        """
        Compile the original spec, replacing any previously compiled
        one.  Parsed values are kept.
        """
        orig = [OptionSpec.from_declaration(decl) for decl in spec or ()]
        table: dict[str, OptionSpec] = {}
        for option in orig:
            self._check_conflict(table, option)
            table[option.short_opt] = option
            table[option.long_opt] = option

        self.orig = orig
        # ArgValues shares this dict, so update it in place.
        self.spec.clear()
        self.spec.update(table)
        logger.debug(
            "Compiled %d option declarations into %d tokens", len(orig), len(table)
        )
        return self

    def _check_conflict(self, table: dict[str, OptionSpec], option: OptionSpec) -> None:
        conflict_opts = [
            opt for opt in (option.short_opt, option.long_opt) if opt in table
        ]
        if not conflict_opts:
            return
        if self.conflict_handler == "error":
            raise OptionConflictError(option, conflict_opts)
        for opt in conflict_opts:
            logger.debug("Option %s overrides %s for %s", option, table[opt], opt)

    # -- Parsing -------------------------------------------------------

    def parse(self, argv: Sequence[str], argc: int | None = None) -> Iterator[str]:
        """
        Parse command line arguments according to the compiled spec.

        The generator yields any parsing errors; values are stored as a
        side effect while it is consumed.  Parsing stops when all of the
        first 'argc' (default: all) arguments are processed or the first
        option flagged HALT was encountered.
        """
        self.halted = None
        if argc is None:
            argc = len(argv)
        i = 0
        while i < argc:
            o = argv[i]
            option = self.spec.get(o)

            if option is None:
                yield self._diagnostic("Unknown option %s", o)
                i += 1
                continue

            if not option.mode.accepts_arg:
                self.values.set(o, True)
            elif i + 1 < argc and argv[i + 1] not in self.spec:
                i += 1
                self.values.set(o, argv[i])
            elif option.mode.needs_arg:
                yield self._diagnostic("Option --%s needs an argument", option.long)
            else:
                # OPTARG
                self.values.set(o, option.default_arg)

            if option.mode.halts:
                logger.debug("Option %s halts argument processing", o)
                self.halted = option
                return
            i += 1

    def validate(self) -> Iterator[str]:
        """
        Validate that all required options were given.

        The generator yields any validation errors, in declaration order.
        """
        for option in self.orig:
            if option.mode.is_required and not self.has(option.short):
                yield self._diagnostic("Option --%s is required", option.long)

    def _diagnostic(self, fmt: str, *args: Any) -> str:
        msg = fmt % args
        logger.debug(msg)
        return msg

    # -- Help ----------------------------------------------------------

    def format_help(self, prog: str) -> str:
        return self.formatter.format_help(prog, self.orig)

    def help(self, prog: str, file: IO[str] | None = None) -> None:
        """help(prog : string, file : file = stdout)

        Print the usage synopsis and the option table for program
        'prog' to 'file' (default stdout).
        """
        if file is None:
            file = sys.stdout
        file.write(self.format_help(prog))

    # -- Value access --------------------------------------------------

    def canonical(self, key: str) -> str:
        return canonical(key)

    def has(self, key: str) -> bool:
        return self.values.has(key)

    def get(self, key: str, fallback: Any = None) -> Any:
        return self.values.get(key, fallback)

    def set(self, key: str, value: Any) -> None:
        self.values.set(key, value)

    def remove(self, key: str) -> None:
        self.values.remove(key)
