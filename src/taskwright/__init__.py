"""taskwright — command-line dispatcher for task-based automation.

Separates framework-level options from task arguments, resolves the
task to run and reports failures consistently.
"""

from taskwright.version import __version__

__all__: list[str] = ["__version__"]
