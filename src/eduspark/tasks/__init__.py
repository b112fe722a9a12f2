"""Built-in EduSpark tasks.

Each submodule declares its schemas and a ``TASKS`` list;
:func:`build_default_registry` collects them into a frozen registry.
"""

from __future__ import annotations

from eduspark.flows.registry import TaskRegistry, TaskSpec
from eduspark.tasks import assessment, tutoring, visual, writing


def default_tasks() -> list[TaskSpec]:
    return [*tutoring.TASKS, *assessment.TASKS, *writing.TASKS, *visual.TASKS]


def build_default_registry() -> TaskRegistry:
    """Register every built-in task and freeze the registry.

    Raises:
        DuplicateTask: Two built-in tasks share a name.
        TemplateFieldMissing: A template references an undeclared field.
    """
    return TaskRegistry(default_tasks()).freeze()


__all__ = ["build_default_registry", "default_tasks"]
