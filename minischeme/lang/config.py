"""Run-time configuration for minischeme. There are no configuration files or environment variables: a Config is built
from command-line arguments (see main.py) or constructed directly by library callers.
"""

from dataclasses import dataclass


@dataclass
class Config:
    """Knobs shared by the reader, evaluator and error reporting.

    max_depth bounds both list nesting in the reader and nested call depth in the evaluator, so that pathological input
    is reported as a minischeme error instead of exhausting the Python stack.
    """
    max_depth: int = 100
    color: bool = True
    fatal: bool = True

    def __post_init__(self):
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")

    @classmethod
    def from_args(cls, args):
        """Builds a Config from an argparse namespace (see main.py)."""
        fatal = args.file is not None or args.expr is not None  # the shell reports errors and keeps going
        return cls(max_depth=args.max_depth, color=not args.no_color, fatal=fatal)
