"""Infrastructure layer — filesystem integration.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Raw ``OSError`` / parser exceptions never escape; they are re-raised
  as :class:`~taskwright.exceptions.TaskwrightError`.
"""

from taskwright.infra.project import (
    CONFIG_FILE_NAME,
    find_config_file,
    is_cwd_inside_project,
    load_config,
    write_default_config,
)

__all__: list[str] = [
    "CONFIG_FILE_NAME",
    "find_config_file",
    "is_cwd_inside_project",
    "load_config",
    "write_default_config",
]
