"""Building blocks for a build tool: paths, escaping, strings, versions, metrics and flags."""

__version__ = "0.1.0"