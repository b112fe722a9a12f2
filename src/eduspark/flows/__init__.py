"""Typed prompt flows.

- :mod:`registry`: task definitions and the name-keyed registry
- :mod:`prompt`: rendering validated input into model prompts
- :mod:`executor`: the backend call and output-schema enforcement
- :mod:`actions`: the success/failure boundary used by callers
- :mod:`quiz`: verified quiz grading
"""

from eduspark.flows.actions import ActionOutcome, ActionRunner, ErrorDetail
from eduspark.flows.executor import FlowExecutor
from eduspark.flows.prompt import PromptSection, PromptTemplate, RenderedPrompt, render_prompt
from eduspark.flows.registry import MediaPolicy, TaskRegistry, TaskSpec

__all__ = [
    "ActionOutcome",
    "ActionRunner",
    "ErrorDetail",
    "FlowExecutor",
    "MediaPolicy",
    "PromptSection",
    "PromptTemplate",
    "RenderedPrompt",
    "TaskRegistry",
    "TaskSpec",
    "render_prompt",
]
