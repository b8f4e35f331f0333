"""In-memory task registry.

Holds :class:`~taskwright.core.models.TaskDefinition` objects keyed by
name.  How tasks get authored or loaded from plugins is not this
module's concern; it only stores and looks them up.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from taskwright.core.models import TaskAction, TaskDefinition, TaskParamDefinition

logger = logging.getLogger(__name__)


class TaskRegistry:
    """Name → definition lookup satisfying ``TaskDefinitionSource``.

    Defining a task under an existing name replaces the earlier
    definition, so built-in tasks can be overridden.
    """

    def __init__(self, definitions: Iterable[TaskDefinition] = ()) -> None:
        self._definitions: dict[str, TaskDefinition] = {}
        for definition in definitions:
            self.add(definition)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def add(self, definition: TaskDefinition) -> TaskDefinition:
        """Register *definition* and return it."""
        if definition.name in self._definitions:
            logger.debug("Overriding task %s", definition.name)
        self._definitions[definition.name] = definition
        return definition

    def define(
        self,
        name: str,
        description: str,
        action: TaskAction,
        *,
        params: Iterable[TaskParamDefinition] = (),
        positional_params: Iterable[TaskParamDefinition] = (),
    ) -> TaskDefinition:
        """Build a :class:`TaskDefinition` from its parts and register it."""
        return self.add(
            TaskDefinition(
                name=name,
                description=description,
                action=action,
                params=tuple(params),
                positional_params=tuple(positional_params),
            )
        )

    def get(self, name: str) -> TaskDefinition | None:
        return self._definitions.get(name)

    def get_task_definitions(self) -> Mapping[str, TaskDefinition]:
        return MappingProxyType(self._definitions)
