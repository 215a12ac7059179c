from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Iterable

from pharext.args.mode import Mode


if TYPE_CHECKING:
    from pharext.args.spec import OptionSpec


class HelpFormatter:
    """
    Format the usage synopsis and the option table of a CliArgs.

    Instance attributes:
      synopsis_indent : int
        number of columns before the "$ prog" synopsis line
      indent : int
        number of columns before each "-x|--name" option line
      name_width : int
        column, counted from the end of "--", at which option help
        text starts; long names at least this wide get no padding
      arg_markers : (str, str, str)
        the markers written after the option names for REQARG, OPTARG
        and NOARG options; all three must be the same width to keep
        the help text aligned
    """

    def __init__(
        self,
        synopsis_indent: int = 2,
        indent: int = 4,
        name_width: int = 16,
    ) -> None:
        self.synopsis_indent: int = synopsis_indent
        self.indent: int = indent
        self.name_width: int = name_width
        self.arg_markers: tuple[str, str, str] = ("<arg>  ", "[<arg>]", "       ")

    def format_usage(self, prog: str, specs: Iterable[OptionSpec]) -> str:
        flags = []
        required = []
        optional = []
        for spec in specs:
            if spec.mode & Mode.REQARG:
                if spec.mode & Mode.REQUIRED:
                    required.append(spec)
                else:
                    optional.append(spec)
            else:
                flags.append(spec)

        result = ["\nUsage:\n\n", " " * self.synopsis_indent, f"$ {prog}"]
        if flags:
            result.append(" [-%s]" % "|-".join(spec.short for spec in flags))
        for spec in required:
            result.append(f" -{spec.short} <arg>")
        if optional:
            result.append(" [-%s <arg>]" % "|-".join(spec.short for spec in optional))
        result.append("\n\n")
        return "".join(result)

    def format_arg_marker(self, spec: OptionSpec) -> str:
        reqarg, optarg, noarg = self.arg_markers
        if spec.mode.needs_arg:
            return reqarg
        if spec.mode.optional_arg:
            return optarg
        return noarg

    def format_option(self, spec: OptionSpec) -> str:
        # -o|--output <arg>           Output file (REQUIRED) [out.txt]
        result = [
            "%*s-%s|--%s %s"
            % (self.indent, "", spec.short, spec.long, self.format_arg_marker(spec)),
            " " * (self.name_width - len(spec.long)),
            spec.help,
            " ",
            "(REQUIRED)" if spec.mode.is_required else "",
        ]
        if spec.default_arg is not None:
            result.append(f" [{self.format_default(spec.default_arg)}]")
        result.append("\n")
        return "".join(result)

    def format_default(self, value: object) -> str:
        # booleans print as "1" and "" in the option table
        if isinstance(value, bool):
            return "1" if value else ""
        return str(value)

    def format_option_help(self, specs: Iterable[OptionSpec]) -> str:
        return "".join(self.format_option(spec) for spec in specs)

    def format_help(self, prog: str, specs: Iterable[OptionSpec]) -> str:
        specs = list(specs)
        return "".join(
            [self.format_usage(prog, specs), self.format_option_help(specs), "\n"]
        )
