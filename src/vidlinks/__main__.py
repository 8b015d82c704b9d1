"""Allow ``python -m vidlinks`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m vidlinks`` behaves identically to the ``vidlinks``
console script.
"""

from __future__ import annotations

from vidlinks.cli.app import cli

if __name__ == "__main__":
    cli()
