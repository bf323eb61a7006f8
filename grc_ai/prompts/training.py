# grc_ai/prompts/training.py

"""
Training and awareness program prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

TRAINING_PERSONA = "You are an expert compliance training designer and instructional designer."

training_info = info_block("Training Information", type_label="Training Type", scope_label="Audience")

TRAINING_SECTIONS = {
    ContentType.TRAINING_PROGRAM: ("training program", (
        "Outline modules, delivery methods, duration and audience",
        "Tie each module to a compliance or risk objective",
    )),
    ContentType.TRAINING_DESCRIPTION: ("description", (
        "Explain what participants will learn and why it matters",
        "Keep it between 80-200 words",
    )),
    ContentType.ASSESSMENT_CRITERIA: ("assessment criteria", (
        "Define how learner competence will be measured",
        "Include pass marks and assessment methods",
    )),
    ContentType.TRAINING_MATERIALS: ("training materials outline", (
        "List the materials needed (slides, handouts, case studies, e-learning)",
        "Summarize the key content of each item",
    )),
    ContentType.TRAINING_SCHEDULE: ("schedule", (
        "Propose sessions, durations and sequencing",
        "Include refresher training frequency",
    )),
    ContentType.CERTIFICATION_REQUIREMENTS: ("certification requirements", (
        "Define completion, assessment and recertification requirements",
        "State record-keeping obligations",
    )),
    ContentType.TRAINING_EVALUATION: ("evaluation", (
        "Use the Kirkpatrick levels (reaction, learning, behavior, results)",
        "Suggest survey questions and metrics for each level",
    )),
    ContentType.COMPETENCY_MAPPING: ("competency mapping", (
        "Map roles to the competencies they need",
        "Link each competency to the modules that build it",
    )),
    ContentType.TRAINING_EFFECTIVENESS: ("effectiveness analysis", (
        "Define indicators that show the training changed behavior",
        "Recommend improvements based on the indicators",
    )),
    ContentType.COMPLIANCE_TRAINING: ("compliance training content", (
        "Explain the obligations of $framework in plain language",
        "Include practical do and don't examples",
    )),
    ContentType.SKILL_DEVELOPMENT_PLAN: ("skill development plan", (
        "Identify skill gaps and the activities that close them",
        "Set milestones over 6-12 months",
    )),
}

for content_type, (what, requirements) in TRAINING_SECTIONS.items():
    register(content_type, PromptRule(
        persona=TRAINING_PERSONA,
        task=f'Generate the {what} for the training "$title"',
        blocks=(training_info,),
        requirements=requirements + ("Make it appropriate for $business_unit",),
        output=ONLY_TEXT.format(what=what),
        subject="the training",
    ))

register(ContentType.LEARNING_OBJECTIVES, PromptRule(
    persona=TRAINING_PERSONA,
    task='Generate learning objectives for the training "$title"',
    blocks=(training_info,),
    requirements=(
        "Create 4-6 specific, measurable learning objectives",
        "Start each objective with an action verb from Bloom's taxonomy",
        "Each objective should describe what the learner will be able to do after the training",
    ),
    output=(
        "Format: Return only the objectives as a clean JSON array of strings, no additional text or formatting.\n"
        'Example: ["Identify the categories of personal data processed in their role", '
        '"Apply the incident reporting procedure within the required timeline"]'
    ),
    subject="the training",
))
