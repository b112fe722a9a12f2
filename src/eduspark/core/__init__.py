"""Core package initialization.

:class:`eduspark.core.service.EduSpark` is not re-exported here; it imports the
task and flow packages, which themselves import from ``eduspark.core``.
"""

from eduspark.core.config import EduSparkConfig, LLMConfig, StoreConfig

__all__ = [
    "EduSparkConfig",
    "LLMConfig",
    "StoreConfig",
]
