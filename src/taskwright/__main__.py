"""Allow ``python -m taskwright`` invocation.

Delegates to the console-script entry point so that
``python -m taskwright`` behaves identically to ``taskwright``.
"""

from __future__ import annotations

from taskwright.cli.app import cli

if __name__ == "__main__":
    cli()
