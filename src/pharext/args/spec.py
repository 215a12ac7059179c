from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Callable
from typing import ClassVar
from typing import Sequence

from pharext.args.errors import OptionError
from pharext.args.mode import KNOWN_BITS
from pharext.args.mode import Mode


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


# Not supplying a default is different from a default of None,
# so we need an explicit "not supplied" value.
NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class OptionSpec:
    """
    One declared option.

    Instance attributes:
      short : str
        single character, invoked as "-x"
      long : str
        long name, invoked as "--name"
      help : str
        description shown in the help table
      mode : Mode
        requiredness, cardinality, argument arity and HALT flags
      default : any
        value used when an OPTARG option is given without argument,
        and when reading an option that was never set; NO_DEFAULT
        if none was configured
    """

    short: str
    long: str
    help: str = ""
    mode: Mode = Mode.OPTIONAL
    default: Any = field(default=NO_DEFAULT, hash=False)

    CHECK_METHODS: ClassVar[list[Callable[[OptionSpec], None]]]

    def __post_init__(self) -> None:
        if not isinstance(self.mode, Mode):
            object.__setattr__(self, "mode", Mode(self.mode))
        for checker in self.CHECK_METHODS:
            checker(self)

    @classmethod
    def from_declaration(cls, decl: OptionSpec | Sequence[Any]) -> OptionSpec:
        """
        Build an OptionSpec from the positional declaration shape
        [short, long, help, mode] or [short, long, help, mode, default].
        """
        if isinstance(decl, cls):
            return decl
        if isinstance(decl, str) or not 4 <= len(decl) <= 5:
            raise TypeError(
                f"option declaration must have 4 or 5 fields: {decl!r}"
            )
        return cls(*decl)

    def _check_short(self) -> None:
        if not isinstance(self.short, str) or len(self.short) != 1:
            raise OptionError(
                f"invalid short option {self.short!r}: must be a single character",
                self,
            )
        if self.short == "-":
            raise OptionError("invalid short option '-'", self)

    def _check_long(self) -> None:
        if not isinstance(self.long, str) or len(self.long) < 2:
            raise OptionError(
                f"invalid long option {self.long!r}: "
                "must be at least two characters long",
                self,
            )
        if self.long.startswith("-"):
            raise OptionError(
                f"invalid long option {self.long!r}: must not start with a dash",
                self,
            )

    def _check_mode(self) -> None:
        unknown = int(self.mode) & ~int(KNOWN_BITS)
        if unknown:
            raise OptionError(f"unknown mode bits: 0x{unknown:x}", self)
        if self.mode.needs_arg and self.mode.optional_arg:
            raise OptionError("REQARG and OPTARG are mutually exclusive", self)

    CHECK_METHODS = [_check_short, _check_long, _check_mode]

    def __str__(self) -> str:
        return f"-{self.short}/--{self.long}"

    @property
    def short_opt(self) -> str:
        return f"-{self.short}"

    @property
    def long_opt(self) -> str:
        return f"--{self.long}"

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def default_arg(self) -> Any:
        """The configured default, or None when there is none."""
        if self.default is NO_DEFAULT:
            return None
        return self.default
