"""CLI package for HydroGuard.

Execute via:
  python -m hydroguard.cli <command> [options]

Or, after installation, through the console script:
  hydroguard <command>

Commands implemented in `main.py` using the standard library `argparse`.
"""

from .main import main  # re-export for python -m hydroguard.cli

__all__ = ["main"]
