"""Assessment tasks: quizzes, answer verification, question papers, chapter material, flashcards."""

from __future__ import annotations

from pydantic import Field

from eduspark.flows.prompt import PromptSection, PromptTemplate
from eduspark.flows.registry import TaskSpec
from eduspark.tasks.base import NonEmptyStr, WireModel

GENERATE_QUIZ = "generate-quiz"
VERIFY_QUIZ_ANSWERS = "verify-quiz-answers"
GENERATE_QUESTION_PAPER = "generate-question-paper"
GENERATE_CHAPTER_MATERIAL = "generate-chapter-material"
GENERATE_FLASHCARDS = "generate-flashcards"


# Quiz


class QuizQuestion(WireModel):
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer_index: int = Field(ge=0, le=3)
    explanation: str


class GenerateQuizInput(WireModel):
    topic: NonEmptyStr
    context_text: str | None = None
    num_questions: int = Field(ge=1, le=10)


class GenerateQuizOutput(WireModel):
    quiz_title: str
    questions: list[QuizQuestion]


# Verification


class QuestionAndAnswer(WireModel):
    question_text: NonEmptyStr
    options: list[str] = Field(min_length=4, max_length=4)
    user_selected_option_index: int | None = Field(default=None, ge=0, le=3)


class VerifiedQuestionResult(WireModel):
    is_user_choice_correct: bool
    verified_correct_answer_index: int = Field(ge=0, le=3)
    explanation: str


class VerifyQuizAnswersInput(WireModel):
    questions_and_user_answers: list[QuestionAndAnswer] = Field(min_length=1)


class VerifyQuizAnswersOutput(WireModel):
    verified_results: list[VerifiedQuestionResult]


# Question paper


class PaperQuestion(WireModel):
    question_text: str
    question_type: str
    marks: int = Field(ge=0)
    options: list[str] | None = None
    correct_answer: str | None = None
    answer_key_points: str | None = None


class PaperSection(WireModel):
    section_name: str
    section_instructions: str | None = None
    questions: list[PaperQuestion]


class QuestionPaperInput(WireModel):
    class_name: NonEmptyStr
    subject: NonEmptyStr
    exam_type: NonEmptyStr
    total_marks: int = Field(ge=1)
    duration: NonEmptyStr
    specific_topics: str | None = None
    source_material_text: str | None = None


class QuestionPaperOutput(WireModel):
    title: str
    total_marks: int
    duration: str
    general_instructions: str
    sections: list[PaperSection]


# Chapter material


class MCQ(WireModel):
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer_index: int = Field(ge=0, le=3)


class ChapterMaterialInput(WireModel):
    class_name: NonEmptyStr
    subject: NonEmptyStr
    chapter_name: NonEmptyStr


class ChapterMaterialOutput(WireModel):
    summary: str
    questions: list[str]
    mcqs: list[MCQ]


# Flashcards


class Flashcard(WireModel):
    question: str
    answer: str


class GenerateFlashcardsInput(WireModel):
    source_text: NonEmptyStr
    num_flashcards: int = Field(ge=3, le=20)


class GenerateFlashcardsOutput(WireModel):
    suggested_title: str
    flashcards: list[Flashcard]


TASKS: list[TaskSpec] = [
    TaskSpec(
        name=GENERATE_QUIZ,
        input_model=GenerateQuizInput,
        output_model=GenerateQuizOutput,
        failure_message="Failed to generate quiz",
        achievement="quizWhiz",
        template=PromptTemplate(
            sections=(
                PromptSection(
                    'Generate a quiz with {num_questions} multiple-choice questions on the topic: "{topic}".'
                ),
                PromptSection(
                    "Use the following context to generate the questions:\n---\n{context_text}\n---",
                    when="context_text",
                ),
                PromptSection(
                    "Each question should have 4 options, a correct answer index (0-3), and a brief "
                    "explanation for the correct answer. Provide a title for the quiz."
                ),
            )
        ),
    ),
    TaskSpec(
        name=VERIFY_QUIZ_ANSWERS,
        input_model=VerifyQuizAnswersInput,
        output_model=VerifyQuizAnswersOutput,
        failure_message="Failed to verify quiz answers",
        template=PromptTemplate(
            system=(
                "You are an AI that verifies quiz answers. Your task is to independently determine "
                "the correct answer for each question and compare it to the user's selection."
            ),
            sections=(
                PromptSection(
                    "I am a student who just took a quiz. Please verify my answers and provide the "
                    "correct answer index and a brief explanation for each question, regardless of "
                    "whether my answer was right or wrong."
                ),
                PromptSection("Here is the quiz data:\n{questions_and_user_answers}"),
                PromptSection(
                    "Return one result per question, in the same order. For each item, determine if "
                    "the user's choice was correct, and provide the 'verifiedCorrectAnswerIndex' and a "
                    "brief 'explanation' for the correct answer. An unanswered question "
                    "(userSelectedOptionIndex null) is never correct."
                ),
            ),
        ),
    ),
    TaskSpec(
        name=GENERATE_QUESTION_PAPER,
        input_model=QuestionPaperInput,
        output_model=QuestionPaperOutput,
        failure_message="Failed to generate question paper",
        template=PromptTemplate(
            sections=(
                PromptSection(
                    "Generate a question paper following CBSE patterns based on these specifications:\n"
                    "Class: {class_name}\n"
                    "Subject: {subject}\n"
                    "Exam Type: {exam_type}\n"
                    "Total Marks: {total_marks}\n"
                    "Duration: {duration}"
                ),
                PromptSection(
                    "Specific Topics to focus on: {specific_topics}", when="specific_topics"
                ),
                PromptSection(
                    "Base questions on this source material if possible:\n---\n{source_material_text}\n---",
                    when="source_material_text",
                ),
                PromptSection(
                    "The paper should include a title, general instructions, and multiple sections "
                    "(e.g., Section A: MCQs, Section B: Short Answer). Each question must have assigned "
                    "marks and a question type. For MCQs, provide options. Also provide the correct "
                    "answer or key answer points for every question. The marks of all questions must "
                    "add up to the total marks."
                ),
            )
        ),
    ),
    TaskSpec(
        name=GENERATE_CHAPTER_MATERIAL,
        input_model=ChapterMaterialInput,
        output_model=ChapterMaterialOutput,
        failure_message="Failed to generate chapter material",
        template=PromptTemplate.simple(
            "Generate educational material for a chapter.\n"
            "Class/Exam: {class_name}\n"
            "Subject: {subject}\n"
            "Chapter: {chapter_name}\n"
            "Provide a concise summary, 5-7 practice questions (short answer/descriptive), and 5 "
            "multiple-choice questions (MCQs) with 4 options each and the correct answer index."
        ),
    ),
    TaskSpec(
        name=GENERATE_FLASHCARDS,
        input_model=GenerateFlashcardsInput,
        output_model=GenerateFlashcardsOutput,
        failure_message="Failed to generate flashcards",
        achievement="flashcardFanatic",
        template=PromptTemplate.simple(
            "Generate {num_flashcards} flashcards from the following text. Each flashcard should "
            "have a clear question and a concise answer. Also suggest a title for the flashcard set.\n"
            "Source Text:\n---\n{source_text}\n---"
        ),
    ),
]
