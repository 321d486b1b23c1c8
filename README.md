# shuriken

Building blocks for a small build tool: path canonicalization, shell and
Win32 escaping, string helpers, version checks, timing metrics and
command-line flag parsing.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Paths, escaping and output (`shuriken.util`)

```python
from shuriken.util import canonicalize_path, shell_escape, win32_escape, elide_middle

canonicalize_path("./x/foo/../bar.h", windows=False)  # -> ("x/bar.h", 0)
shell_escape("foo bar")                              # -> "'foo bar'"
win32_escape("foo bar")                              # -> '"foo bar"'
elide_middle("01234567890123456789", 10)             # -> "012...789"
```

`canonicalize_path` returns the canonical path together with slash bits: on
Windows, bit *n* is set when the *n*-th separator was a backslash. It raises
`CanonicalizeError` for an empty path. A path with too many components is
reported with `fatal`, which prints the message and raises `FatalError`.

Other helpers: `strip_ansi_escape_codes`, `is_latin_alpha`, `read_file`,
`truncate`, `processor_count` and `load_average`. `warning`, `error` and
`success` print prefixed messages, in colour when the stream is a terminal.

## String helpers (`shuriken.stringutil`)

`split_string_piece`, `join_string_piece`, `to_lower_ascii`,
`equals_case_insensitive_ascii`, `murmur_hash2` (32-bit MurmurHash2; strings
are hashed as UTF-8) and `escape_for_depfile`, which escapes spaces and leaves
single backslashes alone.

## Versions (`shuriken.version`)

`VERSION` is the tool's version string. `parse_version("1.9.0")` returns
`(1, 9)`. `check_ninja_version` prints a warning when the build file asks for
an older major version and raises `IncompatibleVersionError` when it needs a
newer one.

## Timing (`shuriken.metrics`)

```python
from shuriken.metrics import Metrics, Stopwatch

metrics = Metrics()
with metrics.record("parse"):
    ...
metrics.report()  # table on stdout; pass file=... to write elsewhere

watch = Stopwatch()
watch.restart()
seconds = watch.elapsed()
```

`get_time_millis()` gives milliseconds from an arbitrary epoch.

## Command-line flags (`shuriken.flags`)

```python
from shuriken.flags import read_flags, UsageError

try:
    options, config, targets = read_flags(["-j", "4", "-n", "all"])
except UsageError as exc:
    exc.report()
    raise SystemExit(exc.exit_code)
```

`read_flags` understands `-C DIR`, `-f FILE`, `-j N`, `-k N`, `-l N`, `-n`,
`-v`/`--verbose`, `-d MODE`, `-w FLAG`, `-t TOOL`, `--version` and
`-h`/`--help`. Parsing stops after `-t TOOL`; the remaining arguments are
returned for the tool. `--version`, `-h`, `-d list`, `-w list` and unknown
debug or warning names end parsing with a `UsageError` carrying the text to
print and the exit code. An invalid `-j`, `-k` or `-l` value is reported with
`fatal`. The parsers `parse_jobs`, `parse_keep_going`, `parse_load_average`,
`debug_enable`, `warning_enable`, `guess_parallelism` and `usage_text` can also
be used on their own.

## What this package does not do

It installs no command. It does not read build files, run commands or build
targets, and it has no subtools: `read_flags` only records the name given to
`-t`. It keeps no build or dependency logs.