import pytest

from pharext.args.cliargs import CliArgs
from pharext.args.errors import OptionConflictError
from pharext.args.mode import Mode
from pharext.args.spec import OptionSpec


SPEC = [
    ["h", "help", "Display help", CliArgs.NOARG | CliArgs.HALT],
    ["f", "force", "Force it", CliArgs.NOARG],
    ["o", "out", "Output file", CliArgs.REQARG],
    ["i", "inc", "Include dir", CliArgs.MULTI | CliArgs.REQARG],
    ["z", "zip", "Compression", CliArgs.OPTARG, "auto"],
    ["n", "name", "Name", CliArgs.OPTARG],
]


@pytest.fixture
def args():
    return CliArgs(SPEC)


def test_compile_maps_both_tokens(args):
    assert set(args.spec) == {
        "-h", "--help", "-f", "--force", "-o", "--out",
        "-i", "--inc", "-z", "--zip", "-n", "--name",
    }
    assert args.spec["-o"] is args.spec["--out"]
    assert args.spec["-o"].long == "out"


def test_compile_is_idempotent():
    first = CliArgs(SPEC)
    second = CliArgs(SPEC).compile(SPEC)
    assert first.spec.keys() == second.spec.keys()
    for token, spec in first.spec.items():
        assert second.spec[token] == spec


def test_compile_replaces_previous_table(args):
    args.compile([["x", "xtra", "", Mode.NOARG]])
    assert set(args.spec) == {"-x", "--xtra"}
    assert [spec.long for spec in args.orig] == ["xtra"]


def test_compile_accepts_empty_spec():
    args = CliArgs()
    assert args.spec == {}
    assert args.orig == []
    assert list(args.parse([])) == []
    assert list(args.validate()) == []


def test_compile_keeps_declaration_order(args):
    assert [spec.short for spec in args.orig] == ["h", "f", "o", "i", "z", "n"]


def test_duplicate_names_resolve_to_last_declaration():
    args = CliArgs([
        ["o", "out", "first", Mode.REQARG],
        ["o", "output", "second", Mode.NOARG],
    ])
    assert args.spec["-o"].help == "second"
    assert args.spec["--out"].help == "first"


def test_duplicate_names_raise_with_error_handler():
    with pytest.raises(OptionConflictError) as e:
        CliArgs(
            [["o", "out", "", Mode.REQARG], ["x", "out", "", Mode.NOARG]],
            conflict_handler="error",
        )
    assert str(e.value) == "option -x/--out: conflicting option string(s): --out"


def test_invalid_conflict_handler():
    with pytest.raises(ValueError):
        CliArgs(SPEC, conflict_handler="ignore")


def test_unknown_tokens_are_reported_and_not_stored(args):
    assert list(args.parse(["foo", "-q", "--bar"])) == [
        "Unknown option foo",
        "Unknown option -q",
        "Unknown option --bar",
    ]
    assert len(args.values) == 0


def test_noarg_sets_true(args):
    assert list(args.parse(["-f"])) == []
    assert args.get("-f") is True
    assert args.get("--force") is True


def test_reqarg_last_write_wins(args):
    assert list(args.parse(["-o", "a.txt", "--out", "b.txt"])) == []
    assert args.get("o") == "b.txt"
    assert args.get("out") == "b.txt"


def test_multi_accumulates(args):
    assert list(args.parse(["-i", "x", "-i", "y"])) == []
    assert args.get("inc") == ["x", "y"]
    assert args.get("-i") == ["x", "y"]


def test_reqarg_without_argument(args):
    assert list(args.parse(["-o"])) == ["Option --out needs an argument"]
    assert not args.has("o")
    assert not args.has("out")


def test_reqarg_followed_by_option_is_missing_argument(args):
    assert list(args.parse(["--out", "-f"])) == ["Option --out needs an argument"]
    assert args.get("force") is True
    assert not args.has("out")


def test_unknown_token_is_consumed_as_argument(args):
    assert list(args.parse(["-o", "-q"])) == []
    assert args.get("out") == "-q"


def test_optarg_uses_default_without_argument(args):
    assert list(args.parse(["-z", "-f"])) == []
    assert args.has("zip")
    assert args.get("zip") == "auto"


def test_optarg_takes_following_argument(args):
    assert list(args.parse(["--zip", "bz2"])) == []
    assert args.get("z") == "bz2"


def test_optarg_without_default_counts_as_unset(args):
    assert list(args.parse(["-n"])) == []
    assert not args.has("name")
    assert not args.has("n")
    assert args.get("name") is None


def test_required_optarg_without_argument_fails_validation():
    args = CliArgs([["n", "name", "", Mode.REQUIRED | Mode.OPTARG]])
    assert list(args.parse(["-n"])) == []
    assert list(args.validate()) == ["Option --name is required"]


def test_optarg_with_none_default_counts_as_unset():
    args = CliArgs([["n", "name", "", Mode.OPTARG, None]])
    assert list(args.parse(["--name"])) == []
    assert not args.has("name")


def test_multi_optarg_appends_none():
    args = CliArgs([["d", "define", "", Mode.MULTI | Mode.OPTARG]])
    assert list(args.parse(["-d", "-d", "x"])) == []
    assert args.has("define")
    assert args.get("define") == [None, "x"]


def test_unset_optarg_reads_default(args):
    assert args.get("zip") == "auto"
    assert not args.has("zip")


def test_argc_limits_processed_tokens(args):
    assert list(args.parse(["-f", "-o", "a.txt"], 2)) == [
        "Option --out needs an argument"
    ]
    assert args.get("force") is True
    assert not args.has("out")


def test_halt_stops_processing(args):
    errors = list(args.parse(["-f", "--help", "-o", "bogus", "-i"]))
    assert errors == []
    assert args.get("help") is True
    assert args.halted is args.spec["--help"]
    assert not args.has("out")
    assert not args.has("inc")


def test_halt_stops_even_after_an_error():
    args = CliArgs([
        ["v", "version", "", Mode.REQARG | Mode.HALT],
        ["f", "force", "", Mode.NOARG],
    ])
    assert list(args.parse(["-v", "-f", "nope"])) == [
        "Option --version needs an argument"
    ]
    assert not args.has("force")
    assert args.halted is args.spec["-v"]


def test_halted_is_reset_by_the_next_parse(args):
    list(args.parse(["-h"]))
    assert args.halted is not None
    list(args.parse(["-f"]))
    assert args.halted is None


def test_parse_is_lazy(args):
    errors = args.parse(["-f", "what", "-o", "x"])
    assert not args.has("f")
    assert next(errors) == "Unknown option what"
    assert args.has("f")
    assert not args.has("o")
    assert list(errors) == []
    assert args.get("o") == "x"


def test_validate_reports_missing_required_options():
    args = CliArgs([
        ["o", "out", "", Mode.REQUIRED | Mode.REQARG],
        ["f", "force", "", Mode.NOARG],
        ["t", "tag", "", Mode.REQUIRED | Mode.MULTI | Mode.REQARG],
    ])
    assert list(args.parse([])) == []
    assert list(args.validate()) == [
        "Option --out is required",
        "Option --tag is required",
    ]


def test_validate_accepts_present_options():
    args = CliArgs([["o", "out", "", Mode.REQUIRED | Mode.REQARG]])
    assert list(args.parse(["--out", "x"])) == []
    assert list(args.validate()) == []


def test_required_option_with_default_is_still_required():
    args = CliArgs([["z", "zip", "", Mode.REQUIRED | Mode.OPTARG, "gz"]])
    assert list(args.validate()) == ["Option --zip is required"]


def test_accessors_canonicalize(args):
    args.set("force", True)
    assert args.has("-f")
    assert args.canonical("f") == "-f"
    assert args.canonical("force") == "--force"
    args.remove("f")
    assert not args.has("force")


def test_recompile_keeps_parsed_values(args):
    list(args.parse(["-f"]))
    args.compile(SPEC)
    assert args.get("force") is True


def test_specs_may_be_option_spec_instances():
    args = CliArgs([OptionSpec("q", "quiet")])
    assert list(args.parse(["--quiet"])) == []
    assert args.get("q") is True


def test_empty_key_is_a_programming_error(args):
    with pytest.raises(ValueError):
        args.get("")
