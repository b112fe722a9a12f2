"""EduSpark.

Typed AI learning tools:
- a registry of named tasks with validated input and output schemas
- prompt rendering and a pluggable generative backend (OpenAI or local LLaMA)
- a never-raising action boundary used by the REST API and the CLI
"""

__version__ = "0.1.0"

from eduspark.core.config import EduSparkConfig

__all__ = ["__version__", "EduSparkConfig"]
