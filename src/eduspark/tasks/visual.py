"""Image tasks."""

from __future__ import annotations

from eduspark.flows.prompt import PromptTemplate
from eduspark.flows.registry import MediaPolicy, TaskSpec
from eduspark.tasks.base import NonEmptyStr, WireModel

VISUALIZE_CONCEPT = "visualize-concept"

PLACEHOLDER_IMAGE_URI = "https://placehold.co/1024x576.png"


class VisualizeConceptInput(WireModel):
    concept_description: NonEmptyStr


class VisualizeConceptOutput(WireModel):
    image_data_uri: NonEmptyStr
    text_feedback: str


TASKS: list[TaskSpec] = [
    TaskSpec(
        name=VISUALIZE_CONCEPT,
        input_model=VisualizeConceptInput,
        output_model=VisualizeConceptOutput,
        failure_message="Failed to visualize concept",
        achievement="conceptConnoisseur",
        template=PromptTemplate.simple(
            'A simple, clear, 2D educational diagram illustrating the concept of: "{concept_description}". '
            "The style should be clean, with clear labels, suitable for a textbook or presentation."
        ),
        media=MediaPolicy(
            image_field="imageDataUri",
            text_field="textFeedback",
            success_text="Here is a visual representation of your concept.",
            placeholder_uri=PLACEHOLDER_IMAGE_URI,
            placeholder_text=(
                "AI image generation is currently unavailable. Here is a placeholder image."
            ),
        ),
    ),
]
