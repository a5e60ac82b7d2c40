"""Structured results returned by the JSON-producing tools.

Field names mirror the JSON contract each system prompt asks the model for
(camelCase on the wire, snake_case in Python).
"""

from pydantic import BaseModel, ConfigDict, Field


class _ResultModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AuditCategory(_ResultModel):
    """One scored area of an ATS audit."""

    name: str
    score: float = Field(ge=0, le=100)
    icon: str = "content"
    findings: list[str] = Field(default_factory=list)


class AuditResult(_ResultModel):
    """ATS audit of a CV.

    Attributes:
        score: Overall score from 0 to 100.
        summary: Brief overall assessment.
        categories: Per-area scores and findings.
        strengths: What the CV already does well.
        improvements: Suggested changes.
        ats_issues: Problems likely to break ATS parsing.
    """

    score: float = Field(ge=0, le=100)
    summary: str = ""
    categories: list[AuditCategory] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    ats_issues: list[str] = Field(default_factory=list, alias="atsIssues")


class InterviewQuestion(_ResultModel):
    """A simulated interview question with a suggested answer."""

    question: str
    category: str = "general"
    difficulty: str = "medium"
    suggested_answer: str = Field(default="", alias="suggestedAnswer")
    tips: list[str] = Field(default_factory=list)


class InterviewResult(_ResultModel):
    """Interview simulation output."""

    questions: list[InterviewQuestion] = Field(default_factory=list)


class MatchedSkill(_ResultModel):
    skill: str
    level: str = "basic"
    evidence: str = ""


class MissingSkill(_ResultModel):
    skill: str
    importance: str = "important"
    recommendation: str = ""


class Recommendation(_ResultModel):
    action: str
    timeframe: str = ""
    resources: list[str] = Field(default_factory=list)


class SkillsGapResult(_ResultModel):
    """Skills-gap analysis between a CV and a job description.

    Attributes:
        match_score: Overall fit from 0 to 100.
        summary: Brief assessment of overall fit.
        matched_skills: Required skills found in the CV.
        missing_skills: Required skills absent from the CV.
        recommendations: Actions to close the gap.
    """

    match_score: float = Field(ge=0, le=100, alias="matchScore")
    summary: str = ""
    matched_skills: list[MatchedSkill] = Field(default_factory=list, alias="matchedSkills")
    missing_skills: list[MissingSkill] = Field(default_factory=list, alias="missingSkills")
    recommendations: list[Recommendation] = Field(default_factory=list)
