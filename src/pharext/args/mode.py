from __future__ import annotations

import enum


class Mode(enum.IntFlag):
    """
    Flag-set describing how an option behaves on the command line.

    The flags combine four independent axes:
      requiredness : OPTIONAL | REQUIRED
      cardinality : SINGLE | MULTI
      argument arity : NOARG | REQARG | OPTARG
      control : HALT

    The zero-valued members only exist to make declarations read well,
    e.g. ``Mode.OPTIONAL | Mode.SINGLE | Mode.NOARG``.
    """

    # Optional option
    OPTIONAL = 0x000
    # Required option
    REQUIRED = 0x001
    # Only one value, even when used multiple times
    SINGLE = 0x000
    # Aggregate a list, when used multiple times
    MULTI = 0x010
    # Option takes no argument
    NOARG = 0x000
    # Option requires an argument
    REQARG = 0x100
    # Option takes an optional argument
    OPTARG = 0x200
    # Option halts processing
    HALT = 0x10000000

    @property
    def is_required(self) -> bool:
        return bool(self & Mode.REQUIRED)

    @property
    def is_multi(self) -> bool:
        return bool(self & Mode.MULTI)

    @property
    def accepts_arg(self) -> bool:
        return bool(self & ARITY_MASK)

    @property
    def needs_arg(self) -> bool:
        return bool(self & Mode.REQARG)

    @property
    def optional_arg(self) -> bool:
        return bool(self & Mode.OPTARG)

    @property
    def halts(self) -> bool:
        return bool(self & Mode.HALT)


ARITY_MASK: int = 0xF00

KNOWN_BITS: int = Mode.REQUIRED | Mode.MULTI | Mode.REQARG | Mode.OPTARG | Mode.HALT
