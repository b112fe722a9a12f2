"""Writing tasks: essays, stories, summaries, debate topics."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from eduspark.flows.prompt import PromptSection, PromptTemplate
from eduspark.flows.registry import TaskSpec
from eduspark.tasks.base import Length, NonEmptyStr, WireModel

GENERATE_ESSAY = "generate-essay"
GENERATE_STORY = "generate-story"
SUMMARIZE_TEXT = "summarize-text"
SUGGEST_DEBATE_TOPICS = "suggest-debate-topics"

EssayStyle = Literal["academic", "persuasive", "narrative", "descriptive", "expository"]
StoryGenre = Literal["fantasy", "sci-fi", "mystery", "adventure", "comedy", "drama"]


class GenerateEssayInput(WireModel):
    topic: NonEmptyStr
    essay_length: Length | None = None
    style: EssayStyle | None = None


class GenerateEssayOutput(WireModel):
    title_suggestion: str
    essay: str


class GenerateStoryInput(WireModel):
    main_character: NonEmptyStr
    setting: NonEmptyStr
    genre: StoryGenre
    story_length: Length | None = None


class GenerateStoryOutput(WireModel):
    title: str
    story_text: str


class SummarizeTextInput(WireModel):
    chapter_name: str | None = None
    text_to_summarize: NonEmptyStr
    summary_length: Length | None = None


class SummarizeTextOutput(WireModel):
    summary: str


class SuggestDebateTopicsInput(WireModel):
    subject_area: NonEmptyStr
    num_topics: int = Field(ge=2, le=7)


class SuggestDebateTopicsOutput(WireModel):
    suggested_title: str
    topics: list[str]


TASKS: list[TaskSpec] = [
    TaskSpec(
        name=GENERATE_ESSAY,
        input_model=GenerateEssayInput,
        output_model=GenerateEssayOutput,
        failure_message="Failed to generate essay",
        template=PromptTemplate(
            sections=(
                PromptSection('Write an essay on the topic: "{topic}".'),
                PromptSection("Desired Length: {essay_length}", when="essay_length"),
                PromptSection("Writing Style: {style}", when="style"),
                PromptSection("Also suggest a creative title for the essay."),
            )
        ),
    ),
    TaskSpec(
        name=GENERATE_STORY,
        input_model=GenerateStoryInput,
        output_model=GenerateStoryOutput,
        failure_message="Failed to generate story",
        achievement="buddingAuthor",
        template=PromptTemplate(
            sections=(
                PromptSection(
                    "Write a story with the following elements:\n"
                    "Main Character: {main_character}\n"
                    "Setting: {setting}\n"
                    "Genre: {genre}"
                ),
                PromptSection("Length: {story_length}", when="story_length"),
                PromptSection(
                    "The story should have a clear beginning, middle, and end.\n"
                    "Also, provide a creative title for the story."
                ),
            )
        ),
    ),
    TaskSpec(
        name=SUMMARIZE_TEXT,
        input_model=SummarizeTextInput,
        output_model=SummarizeTextOutput,
        failure_message="Failed to summarize text",
        achievement="masterSummarizer",
        template=PromptTemplate(
            system="You are an AI that summarizes text concisely.",
            sections=(
                PromptSection("Summarize the following text."),
                PromptSection("Chapter Name: {chapter_name}", when="chapter_name"),
                PromptSection("Desired Length: {summary_length}", when="summary_length"),
                PromptSection("Text to Summarize:\n---\n{text_to_summarize}\n---"),
            ),
        ),
    ),
    TaskSpec(
        name=SUGGEST_DEBATE_TOPICS,
        input_model=SuggestDebateTopicsInput,
        output_model=SuggestDebateTopicsOutput,
        failure_message="Failed to suggest debate topics",
        template=PromptTemplate.simple(
            "Generate {num_topics} engaging and thought-provoking debate topics for the subject "
            'area: "{subject_area}". Also suggest a creative title for this set of topics.'
        ),
    ),
]
