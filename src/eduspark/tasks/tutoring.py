"""Tutoring tasks: the AI tutor, homework and code helpers, guidance."""

from __future__ import annotations

from eduspark.flows.prompt import PromptSection, PromptTemplate
from eduspark.flows.registry import TaskSpec
from eduspark.tasks.base import DataUri, NonEmptyStr, WireModel

ASK_QUESTION = "ask-question"
SOLVE_MATH_PROBLEM = "solve-math-problem"
GENERATE_CODE = "generate-code"
RECOMMEND_CONTENT = "recommend-content"
GENERATE_STUDY_PLAN = "generate-study-plan"

TUTOR_SYSTEM_PROMPT = """\
You are EduSpark AI, a friendly, patient, and knowledgeable AI Tutor. Your primary and ONLY role is \
to assist with ACADEMIC SUBJECTS AND LEARNING MATERIALS. You must strictly adhere to this role.
- Strictly Academic Focus: If the user's question is NOT related to academic subjects, you MUST \
politely decline. State: "My purpose is to help with academic subjects. I can't assist with requests \
outside of that scope. Do you have a question about your studies?"
- Handling Inappropriate User Input: If the user's question contains abusive language, hate speech, \
or is otherwise unsafe, you MUST NOT process the harmful part. Instead, respond with: "I cannot \
respond to requests that contain inappropriate or harmful content. Please keep our conversation \
respectful and focused on academic topics."
- Answering Academic Questions: Provide clear, simple, step-by-step answers. Use formatting like \
lists or numbered steps. Maintain an encouraging tone.
- Context is Key: Use the provided learning material and any image context to formulate your \
answer. The user has provided the following learning material context:
```
{learning_material}
```"""


class AskQuestionInput(WireModel):
    question: NonEmptyStr
    learning_material: str = ""
    image_data_uri: DataUri | None = None


class AskQuestionOutput(WireModel):
    answer: str


class HomeworkHelperInput(WireModel):
    problem_statement: NonEmptyStr


class HomeworkHelperOutput(WireModel):
    problem_type: str
    step_by_step_solution: str
    final_answer: str


class GenerateCodeInput(WireModel):
    language: NonEmptyStr
    problem_description: NonEmptyStr


class GenerateCodeOutput(WireModel):
    generated_code: str
    explanation: str


class RecommendContentInput(WireModel):
    learning_history: NonEmptyStr
    preferences: NonEmptyStr


class RecommendContentOutput(WireModel):
    recommended_materials: str


class StudyPlanInput(WireModel):
    student_performance: NonEmptyStr
    learning_goals: NonEmptyStr
    available_materials: NonEmptyStr


class StudyPlanOutput(WireModel):
    study_plan: str


TASKS: list[TaskSpec] = [
    TaskSpec(
        name=ASK_QUESTION,
        input_model=AskQuestionInput,
        output_model=AskQuestionOutput,
        failure_message="AI Tutor failed",
        achievement="aiCompanion",
        template=PromptTemplate(
            system=TUTOR_SYSTEM_PROMPT,
            media_field="image_data_uri",
            sections=(
                PromptSection(
                    "[Image context is provided by the user. Analyze the image in combination "
                    "with the text.]",
                    when="image_data_uri",
                ),
                PromptSection("User Question: {question}"),
            ),
        ),
    ),
    TaskSpec(
        name=SOLVE_MATH_PROBLEM,
        input_model=HomeworkHelperInput,
        output_model=HomeworkHelperOutput,
        failure_message="Failed to solve math problem",
        achievement="mathSolver",
        template=PromptTemplate.simple(
            'Solve the following math problem: "{problem_statement}".\n'
            "Identify the problem type (e.g., Algebra, Calculus).\n"
            "Provide a detailed, step-by-step solution.\n"
            "State the final answer clearly."
        ),
    ),
    TaskSpec(
        name=GENERATE_CODE,
        input_model=GenerateCodeInput,
        output_model=GenerateCodeOutput,
        failure_message="Failed to generate code",
        achievement="codeApprentice",
        template=PromptTemplate.simple(
            "Generate code and an accompanying explanation for the following request.\n"
            "Programming Language: {language}\n"
            'Problem Description: "{problem_description}"\n'
            "Provide the code as a single string, and a detailed, step-by-step explanation of how "
            "the code works."
        ),
    ),
    TaskSpec(
        name=RECOMMEND_CONTENT,
        input_model=RecommendContentInput,
        output_model=RecommendContentOutput,
        failure_message="Failed to get recommendations",
        template=PromptTemplate.simple(
            "Based on the user's profile, recommend 3-5 specific topics, concepts, or subjects they "
            "should explore next.\n"
            "Learning History: {learning_history}\n"
            "Preferences: {preferences}\n"
            "Provide the recommendations as a simple, formatted text response.",
            system="You are an AI guidance counselor for academic learning.",
        ),
    ),
    TaskSpec(
        name=GENERATE_STUDY_PLAN,
        input_model=StudyPlanInput,
        output_model=StudyPlanOutput,
        failure_message="Failed to generate study plan",
        achievement="plannerPro",
        template=PromptTemplate.simple(
            "Create a personalized study plan based on the following information. The plan should "
            "be structured, actionable, and spread over a reasonable timeline (e.g., a week).\n"
            "Student Performance: {student_performance}\n"
            "Learning Goals: {learning_goals}\n"
            "Available Materials: {available_materials}\n"
            "Provide the output as a well-formatted text string.",
            system="You are an AI academic advisor that creates personalized study plans.",
        ),
    ),
]
