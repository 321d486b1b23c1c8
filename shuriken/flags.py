"""Command-line flag parsing: options, build configuration and debug modes."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, field

from shuriken.metrics import Metrics
from shuriken.util import error, fatal, processor_count
from shuriken.version import VERSION

_INT_MAX = 2**31 - 1

_STRTOL = re.compile(r"\s*([+-]?\d+)")
_STRTOD = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

# Short options and whether each takes an argument.
_SHORT_OPTIONS = {
    "d": True,
    "f": True,
    "j": True,
    "k": True,
    "l": True,
    "n": False,
    "t": True,
    "v": False,
    "w": True,
    "C": True,
    "h": False,
}

# Long options, all without arguments, mapped to the option they stand for.
_LONG_OPTIONS = {
    "help": "h",
    "version": "version",
    "verbose": "v",
}


class UsageError(Exception):
    """Ends flag parsing early, carrying the text to print and the exit code."""

    def __init__(
        self,
        message: str,
        exit_code: int = 1,
        *,
        is_error: bool = False,
        to_stdout: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.is_error = is_error
        self.to_stdout = to_stdout

    def report(self) -> None:
        """Print the message where it belongs."""
        if self.is_error:
            error(self.message)
            return
        stream = sys.stdout if self.to_stdout else sys.stderr
        stream.write(self.message)
        stream.flush()


@dataclass
class DebugFlags:
    """Debugging modes enabled with ``-d``."""

    metrics: Metrics | None = None
    explain: bool = False
    keep_depfile: bool = False
    keep_rsp: bool = False
    experimental_statcache: bool = True


@dataclass
class Options:
    """Options that are not part of the build configuration."""

    input_file: str = "build.ninja"
    working_dir: str | None = None
    tool: str | None = None
    dupe_edges_should_err: bool = True
    phony_cycle_should_err: bool = False
    depfile_distinct_target_lines_should_err: bool = False
    debug: DebugFlags = field(default_factory=DebugFlags)


@dataclass
class BuildConfig:
    """Build settings chosen on the command line."""

    parallelism: int = 1
    failures_allowed: int = 1
    max_load_average: float = -0.0
    dry_run: bool = False
    verbose: bool = False


def guess_parallelism(processors: int | None = None) -> int:
    """Default number of parallel jobs for ``processors`` processors."""
    if processors is None:
        processors = processor_count()
    if processors in (0, 1):
        return 2
    if processors == 2:
        return 3
    return processors + 2


def _strtol(text: str) -> tuple[int, str]:
    match = _STRTOL.match(text)
    if not match:
        return 0, text
    return int(match.group(1)), text[match.end():]


def parse_jobs(value: str) -> int:
    """Parse a ``-j`` value; 0 means as many as possible."""
    number, rest = _strtol(value)
    if rest or number < 0:
        raise ValueError("invalid -j parameter")
    return number if number > 0 else _INT_MAX


def parse_keep_going(value: str) -> int:
    """Parse a ``-k`` value; 0 or less means never stop."""
    number, rest = _strtol(value)
    if rest:
        raise ValueError("-k parameter not numeric; did you mean -k 0?")
    return number if number > 0 else _INT_MAX


def parse_load_average(value: str) -> float:
    """Parse a ``-l`` value; trailing text after the number is ignored."""
    match = _STRTOD.match(value)
    if not match:
        raise ValueError("-l parameter not numeric: did you mean -l 0.0?")
    return float(match.group(0))


def _debug_list() -> str:
    lines = [
        "debugging modes:",
        "  stats        print operation counts/timing info",
        "  explain      explain what caused a command to execute",
        "  keepdepfile  don't delete depfiles after they're read by shuriken",
        "  keeprsp      don't delete @response files on success",
    ]
    if os.name == "nt":
        lines.append(
            "  nostatcache  don't batch stat() calls per directory and cache them"
        )
    lines.append("multiple modes can be enabled via -d FOO -d BAR")
    return "\n".join(lines) + "\n"


def debug_enable(name: str, debug: DebugFlags) -> None:
    """Enable the debugging mode ``name``; raises UsageError to stop the run."""
    if name == "list":
        raise UsageError(_debug_list(), 1, to_stdout=True)
    if name == "stats":
        debug.metrics = Metrics()
    elif name == "explain":
        debug.explain = True
    elif name == "keepdepfile":
        debug.keep_depfile = True
    elif name == "keeprsp":
        debug.keep_rsp = True
    elif name == "nostatcache":
        debug.experimental_statcache = False
    else:
        raise UsageError(f"unknown debug setting '{name}'", 1, is_error=True)


_WARNING_LIST = (
    "warning flags:\n"
    "  dupbuild={err,warn}  multiple build lines for one target\n"
    "  phonycycle={err,warn}  phony build statement references itself\n"
    "  depfilemulti={err,warn}  depfile has multiple output paths on separate lines\n"
)

_WARNING_FLAGS = {
    "dupbuild=err": ("dupe_edges_should_err", True),
    "dupbuild=warn": ("dupe_edges_should_err", False),
    "phonycycle=err": ("phony_cycle_should_err", True),
    "phonycycle=warn": ("phony_cycle_should_err", False),
    "depfilemulti=err": ("depfile_distinct_target_lines_should_err", True),
    "depfilemulti=warn": ("depfile_distinct_target_lines_should_err", False),
}


def warning_enable(name: str, options: Options) -> None:
    """Set the warning flag ``name``; raises UsageError to stop the run."""
    if name == "list":
        raise UsageError(_WARNING_LIST, 1, to_stdout=True)
    try:
        attribute, value = _WARNING_FLAGS[name]
    except KeyError:
        raise UsageError(f"unknown warning flag '{name}'", 1, is_error=True) from None
    setattr(options, attribute, value)


def usage_text(config: BuildConfig) -> str:
    """The help text printed for ``-h``."""
    return (
        "usage: shuriken [options] [targets...]\n"
        "\n"
        "if targets are unspecified, builds the 'default' target (see manual).\n"
        "\n"
        "options:\n"
        f'  --version      print shuriken version ("{VERSION}")\n'
        "  -v, --verbose  show all command lines while building\n"
        "\n"
        "  -C DIR   change to DIR before doing anything else\n"
        "  -f FILE  specify input build file [default=build.ninja]\n"
        "\n"
        "  -j N     run N jobs in parallel (0 means infinity) "
        f"[default={config.parallelism} on this system]\n"
        "  -k N     keep going until N jobs fail (0 means infinity) [default=1]\n"
        "  -l N     do not start new jobs if the load average is greater than N\n"
        "  -n       dry run (don't run commands but act like they succeeded)\n"
        "\n"
        "  -d MODE  enable debugging (use '-d list' to list modes)\n"
        "  -t TOOL  run a subtool (use '-t list' to list subtools)\n"
        "    terminates toplevel options; further flags are passed to the tool\n"
        "  -w FLAG  adjust warnings (use '-w list' to list warnings)\n"
    )


def _checked(parse, value: str):
    try:
        return parse(value)
    except ValueError as exc:
        fatal(str(exc))


def _apply(opt: str, value: str | None, options: Options, config: BuildConfig) -> None:
    if opt == "d":
        debug_enable(value, options.debug)
    elif opt == "f":
        options.input_file = value
    elif opt == "j":
        config.parallelism = _checked(parse_jobs, value)
    elif opt == "k":
        config.failures_allowed = _checked(parse_keep_going, value)
    elif opt == "l":
        config.max_load_average = _checked(parse_load_average, value)
    elif opt == "n":
        config.dry_run = True
    elif opt == "t":
        options.tool = value
    elif opt == "v":
        config.verbose = True
    elif opt == "w":
        warning_enable(value, options)
    elif opt == "C":
        options.working_dir = value
    elif opt == "version":
        raise UsageError(VERSION + "\n", 0, to_stdout=True)
    else:
        raise UsageError(usage_text(config), 1)


def _long_option(spec: str, config: BuildConfig) -> str:
    name, has_value, _ = spec.partition("=")
    if name in _LONG_OPTIONS:
        matches = [name]
    else:
        matches = [long for long in _LONG_OPTIONS if long.startswith(name)]
    if len(matches) != 1 or has_value or not name:
        raise UsageError(usage_text(config), 1)
    return _LONG_OPTIONS[matches[0]]


def read_flags(argv: list[str] | None = None) -> tuple[Options, BuildConfig, list[str]]:
    """Parse command-line flags (without the program name).

    Returns the options, the build configuration and the remaining
    arguments. Parsing stops after ``-t TOOL``; what follows is left for
    the tool. Raises UsageError when the run should end right away.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    config = BuildConfig(parallelism=guess_parallelism())
    options = Options()
    positional: list[str] = []

    index = 0
    while index < len(args) and options.tool is None:
        arg = args[index]
        index += 1
        if arg == "--":
            break
        if arg.startswith("--"):
            _apply(_long_option(arg[2:], config), None, options, config)
            continue
        if not arg.startswith("-") or arg == "-":
            positional.append(arg)
            continue
        cluster = arg[1:]
        for offset, opt in enumerate(cluster):
            takes_value = _SHORT_OPTIONS.get(opt)
            if takes_value is None:
                raise UsageError(usage_text(config), 1)
            if not takes_value:
                _apply(opt, None, options, config)
                continue
            value = cluster[offset + 1:]
            if not value:
                if index >= len(args):
                    raise UsageError(usage_text(config), 1)
                value = args[index]
                index += 1
            _apply(opt, value, options, config)
            break

    positional.extend(args[index:])
    return options, config, positional