"""Tool registry: one configuration record per career-assistant tool.

Every tool shares the same relay mechanics and differs only in the data
held here: route, prompts, required inputs, output bound and output shape.
"""

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from career_copilot.models.results import AuditResult, InterviewResult, SkillsGapResult


class ToolId(str, Enum):
    """Identifiers for the available tools."""

    OPTIMIZE = "optimize"
    AUDIT = "audit"
    COVER_LETTER = "cover-letter"
    INTERVIEW = "interview"
    SKILLS_GAP = "skills-gap"


class OutputFormat(str, Enum):
    """Shape of the accumulated result once the stream ends."""

    TEXT = "text"
    JSON = "json"


FIELD_LABELS: dict[str, str] = {
    "cv_text": "CV text",
    "job_description": "job description",
}


class ToolConfig(BaseModel):
    """Static configuration for a single tool.

    Attributes:
        id: Tool identifier.
        path: Route the relay is mounted on.
        title: Display name.
        description: One-line summary for listings.
        system_prompt: Fixed system message sent to the model.
        user_prompt: Template for the user turn; placeholders are field names.
        required_fields: Request fields that must be non-empty.
        max_tokens: Upper bound on generated tokens.
        output: Whether the result is free text or one JSON object.
        result_model: Pydantic model the JSON result is validated against.
        failure_message: Error body returned when the provider fails pre-stream.
    """

    model_config = ConfigDict(frozen=True)

    id: ToolId
    path: str
    title: str
    description: str
    system_prompt: str
    user_prompt: str
    required_fields: tuple[str, ...] = ("cv_text", "job_description")
    max_tokens: int = Field(default=4096, ge=1)
    output: OutputFormat = OutputFormat.TEXT
    result_model: type[BaseModel] | None = None
    failure_message: str

    def missing_fields(self, values: Mapping[str, str]) -> list[str]:
        """Return required fields that are absent or blank in ``values``."""
        return [name for name in self.required_fields if not (values.get(name) or "").strip()]

    @property
    def validation_message(self) -> str:
        """Error message returned when any required field is missing."""
        joined = " and ".join(FIELD_LABELS.get(name, name) for name in self.required_fields)
        verb = "is" if len(self.required_fields) == 1 else "are"
        return f"{joined[0].upper()}{joined[1:]} {verb} required"

    def render_prompt(self, values: Mapping[str, str]) -> str:
        """Interpolate request fields into the user-turn template."""
        return self.user_prompt.format(**{name: values.get(name, "") for name in self.required_fields})


_LANGUAGE_RULE = "Write in the same language as the CV and job description."

TOOLS: dict[ToolId, ToolConfig] = {
    ToolId.OPTIMIZE: ToolConfig(
        id=ToolId.OPTIMIZE,
        path="/api/cv/optimize",
        title="CV Optimization",
        description="Rewrite your CV to match a job posting",
        system_prompt=(
            "You are an expert CV/resume optimizer. Your task is to rewrite and optimize "
            "the provided CV to better match the job description.\n\n"
            "Rules:\n"
            "- Keep all factual information accurate - do not invent experience or skills\n"
            "- Reorganize and rewrite bullet points to highlight relevant experience\n"
            "- Use action verbs and quantifiable achievements\n"
            "- Optimize keywords to match the job description\n"
            "- Maintain professional tone\n"
            "- Format the output as a clean, well-structured CV\n"
            "- Use markdown formatting for headers and sections\n"
            "- Write in the same language as the original CV"
        ),
        user_prompt=(
            "Here is my CV:\n\n{cv_text}\n\n"
            "Here is the job description I'm applying for:\n\n{job_description}\n\n"
            "Please optimize my CV for this position."
        ),
        failure_message="Failed to optimize CV",
    ),
    ToolId.AUDIT: ToolConfig(
        id=ToolId.AUDIT,
        path="/api/cv/audit",
        title="ATS Audit",
        description="Score your CV against applicant tracking systems",
        system_prompt=(
            "You are an expert ATS (Applicant Tracking System) analyst and CV reviewer. "
            "Analyze the provided CV and provide a detailed audit.\n\n"
            "You must respond with valid JSON in this exact format:\n"
            "{\n"
            '  "score": <number 0-100>,\n'
            '  "summary": "<brief overall assessment>",\n'
            '  "categories": [\n'
            "    {\n"
            '      "name": "<category name>",\n'
            '      "score": <number 0-100>,\n'
            '      "icon": "<one of: format, content, keywords, impact, readability>",\n'
            '      "findings": ["<finding 1>", "<finding 2>"]\n'
            "    }\n"
            "  ],\n"
            '  "strengths": ["<strength 1>", "<strength 2>"],\n'
            '  "improvements": ["<improvement 1>", "<improvement 2>"],\n'
            '  "atsIssues": ["<issue 1>", "<issue 2>"]\n'
            "}\n\n"
            "Categories to evaluate:\n"
            "1. Format & Structure (formatting, layout, sections)\n"
            "2. Content Quality (achievements, descriptions, relevance)\n"
            "3. Keywords & SEO (industry keywords, action verbs)\n"
            "4. Impact & Metrics (quantifiable achievements, results)\n"
            "5. ATS Readability (parsing compatibility, file format issues)\n\n"
            "Write analysis in the same language as the CV."
        ),
        user_prompt="Please audit this CV:\n\n{cv_text}",
        required_fields=("cv_text",),
        output=OutputFormat.JSON,
        result_model=AuditResult,
        failure_message="Failed to audit CV",
    ),
    ToolId.COVER_LETTER: ToolConfig(
        id=ToolId.COVER_LETTER,
        path="/api/cover-letter/generate",
        title="Cover Letter",
        description="Generate a cover letter tailored to the role",
        system_prompt=(
            "You are an expert cover letter writer. Create a compelling, personalized "
            "cover letter based on the candidate's CV and the job description.\n\n"
            "Rules:\n"
            "- Make it personal and specific to the role\n"
            "- Highlight the most relevant experience and skills\n"
            "- Show enthusiasm for the company and role\n"
            "- Keep it concise (3-4 paragraphs)\n"
            "- Use professional but engaging tone\n"
            "- Reference specific requirements from the job description\n"
            "- Use markdown formatting\n"
            f"- {_LANGUAGE_RULE}"
        ),
        user_prompt=(
            "Here is my CV:\n\n{cv_text}\n\n"
            "Here is the job description:\n\n{job_description}\n\n"
            "Please write a cover letter for this position."
        ),
        max_tokens=2048,
        failure_message="Failed to generate cover letter",
    ),
    ToolId.INTERVIEW: ToolConfig(
        id=ToolId.INTERVIEW,
        path="/api/interview/simulate",
        title="Interview Simulation",
        description="Practice likely questions with suggested answers",
        system_prompt=(
            "You are an expert recruiter and interview coach. Generate interview questions "
            "with suggested answers based on the candidate's CV and the job they're "
            "applying for.\n\n"
            "You must respond with valid JSON in this exact format:\n"
            "{\n"
            '  "questions": [\n'
            "    {\n"
            '      "question": "<interview question>",\n'
            '      "category": "<one of: behavioral, technical, situational, general>",\n'
            '      "difficulty": "<one of: easy, medium, hard>",\n'
            '      "suggestedAnswer": "<detailed suggested answer>",\n'
            '      "tips": ["<tip 1>", "<tip 2>"]\n'
            "    }\n"
            "  ]\n"
            "}\n\n"
            "Generate 8-10 questions covering:\n"
            "- 2-3 behavioral questions (STAR method)\n"
            "- 2-3 technical/role-specific questions\n"
            "- 2 situational questions\n"
            "- 1-2 general questions (motivation, career goals)\n\n"
            f"{_LANGUAGE_RULE}"
        ),
        user_prompt=(
            "Here is my CV:\n\n{cv_text}\n\n"
            "Here is the job description:\n\n{job_description}\n\n"
            "Please generate interview questions and suggested answers."
        ),
        output=OutputFormat.JSON,
        result_model=InterviewResult,
        failure_message="Failed to simulate interview",
    ),
    ToolId.SKILLS_GAP: ToolConfig(
        id=ToolId.SKILLS_GAP,
        path="/api/skills/analyze",
        title="Skills Gap",
        description="Compare your skills with the job requirements",
        system_prompt=(
            "You are an expert career advisor specializing in skills gap analysis. "
            "Compare the candidate's skills from their CV with the requirements in the "
            "job description.\n\n"
            "You must respond with valid JSON in this exact format:\n"
            "{\n"
            '  "matchScore": <number 0-100>,\n'
            '  "summary": "<brief assessment of overall fit>",\n'
            '  "matchedSkills": [\n'
            "    {\n"
            '      "skill": "<skill name>",\n'
            '      "level": "<one of: strong, moderate, basic>",\n'
            '      "evidence": "<where this appears in the CV>"\n'
            "    }\n"
            "  ],\n"
            '  "missingSkills": [\n'
            "    {\n"
            '      "skill": "<required skill not found>",\n'
            '      "importance": "<one of: critical, important, nice-to-have>",\n'
            '      "recommendation": "<how to acquire this skill>"\n'
            "    }\n"
            "  ],\n"
            '  "recommendations": [\n'
            "    {\n"
            '      "action": "<recommended action>",\n'
            '      "timeframe": "<estimated time>",\n'
            '      "resources": ["<resource 1>", "<resource 2>"]\n'
            "    }\n"
            "  ]\n"
            "}\n\n"
            f"{_LANGUAGE_RULE}"
        ),
        user_prompt=(
            "Here is my CV:\n\n{cv_text}\n\n"
            "Here is the job description:\n\n{job_description}\n\n"
            "Please analyze the skills gap."
        ),
        output=OutputFormat.JSON,
        result_model=SkillsGapResult,
        failure_message="Failed to analyze skills",
    ),
}


def get_tool(tool_id: ToolId | str) -> ToolConfig:
    """Look up a tool by identifier.

    Raises:
        KeyError: If no tool has that identifier.
    """
    try:
        return TOOLS[ToolId(tool_id)]
    except ValueError as e:
        raise KeyError(tool_id) from e
