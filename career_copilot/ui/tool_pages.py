"""NiceGUI pages for the career-assistant tools with live SSE streaming."""

import base64
import os

import httpx
from nicegui import events, ui

from career_copilot.client.dispatcher import StreamingRequest
from career_copilot.client.results import parse_tool_result
from career_copilot.models.results import AuditResult, InterviewResult, SkillsGapResult
from career_copilot.models.tools import TOOLS, OutputFormat, ToolConfig, ToolId, get_tool

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

TOOL_ICONS = {
    ToolId.OPTIMIZE: "auto_fix_high",
    ToolId.AUDIT: "fact_check",
    ToolId.COVER_LETTER: "mail",
    ToolId.INTERVIEW: "record_voice_over",
    ToolId.SKILLS_GAP: "insights",
}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    body { background: #f5f5f5; min-height: 100vh; }
    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .tool-card { transition: box-shadow 0.2s; }
    .tool-card:hover { box-shadow: 0 4px 16px rgba(102, 126, 234, 0.35); }
    .result-box { background: white; border-radius: 12px; border: 1px solid #e5e7eb; }
</style>
"""


def score_color(score: float) -> str:
    """Map a 0-100 score to a Quasar color name."""
    if score >= 80:
        return "positive"
    if score >= 60:
        return "warning"
    return "negative"


async def extract_pdf_text(content: bytes) -> str:
    """Send PDF bytes to the parse endpoint and return the extracted text.

    Raises:
        ValueError: If the server rejects the document.
    """
    payload = {"base64": base64.b64encode(content).decode("ascii")}
    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=60.0) as client:
        response = await client.post("/api/pdf/parse", json=payload)
    data = response.json()
    if response.is_error:
        raise ValueError(data.get("error") or f"HTTP {response.status_code}")
    return data["text"]


def render_header(title: str, subtitle: str, back: bool = True) -> None:
    with ui.row().classes("w-full header px-5 py-4 items-center gap-3"):
        if back:
            ui.button(icon="arrow_back", on_click=lambda: ui.navigate.to("/")).props(
                "flat round color=white"
            )
        with ui.column().classes("gap-0"):
            ui.label(title).classes("text-lg font-semibold text-white")
            ui.label(subtitle).classes("text-xs text-white/80")


def render_bullets(title: str, items: list[str], icon: str) -> None:
    if not items:
        return
    ui.label(title).classes("text-sm font-semibold mt-2")
    for item in items:
        with ui.row().classes("items-start gap-2 no-wrap"):
            ui.icon(icon).classes("text-base text-gray-500")
            ui.label(item).classes("text-sm")


def render_audit(result: AuditResult) -> None:
    with ui.row().classes("items-center gap-4"):
        ui.circular_progress(value=result.score, max=100, size="80px", show_value=True).props(
            f"color={score_color(result.score)}"
        )
        ui.label(result.summary).classes("text-sm flex-1")
    for category in result.categories:
        with ui.expansion(f"{category.name} - {category.score:.0f}/100").classes("w-full"):
            ui.linear_progress(value=category.score / 100, show_value=False).props(
                f"color={score_color(category.score)}"
            )
            render_bullets("Findings", category.findings, "chevron_right")
    render_bullets("Strengths", result.strengths, "check_circle")
    render_bullets("Improvements", result.improvements, "trending_up")
    render_bullets("ATS issues", result.ats_issues, "warning")


def render_interview(result: InterviewResult) -> None:
    if not result.questions:
        ui.label("No questions were generated.").classes("text-sm text-gray-500")
    for index, question in enumerate(result.questions, start=1):
        with ui.expansion(f"{index}. {question.question}").classes("w-full"):
            with ui.row().classes("gap-2"):
                ui.badge(question.category)
                ui.badge(question.difficulty, color="grey")
            ui.markdown(question.suggested_answer).classes("text-sm")
            render_bullets("Tips", question.tips, "lightbulb")


def render_skills_gap(result: SkillsGapResult) -> None:
    with ui.row().classes("items-center gap-4"):
        ui.circular_progress(
            value=result.match_score, max=100, size="80px", show_value=True
        ).props(f"color={score_color(result.match_score)}")
        ui.label(result.summary).classes("text-sm flex-1")
    if result.matched_skills:
        ui.label("Matched skills").classes("text-sm font-semibold mt-2")
        for skill in result.matched_skills:
            with ui.row().classes("items-center gap-2"):
                ui.badge(skill.level, color="positive")
                ui.label(skill.skill).classes("text-sm font-medium")
                ui.label(skill.evidence).classes("text-xs text-gray-500")
    if result.missing_skills:
        ui.label("Missing skills").classes("text-sm font-semibold mt-2")
        for skill in result.missing_skills:
            with ui.column().classes("gap-0"):
                with ui.row().classes("items-center gap-2"):
                    ui.badge(skill.importance, color="negative")
                    ui.label(skill.skill).classes("text-sm font-medium")
                ui.label(skill.recommendation).classes("text-xs text-gray-500")
    for recommendation in result.recommendations:
        with ui.card().classes("w-full"):
            ui.label(recommendation.action).classes("text-sm font-medium")
            ui.label(recommendation.timeframe).classes("text-xs text-gray-500")
            render_bullets("Resources", recommendation.resources, "link")


RENDERERS = {
    ToolId.AUDIT: render_audit,
    ToolId.INTERVIEW: render_interview,
    ToolId.SKILLS_GAP: render_skills_gap,
}


@ui.page("/")
def home_page() -> None:
    """Tool listing."""
    ui.add_head_html(CUSTOM_CSS)
    with ui.column().classes("w-full max-w-3xl mx-auto p-4 md:p-8 gap-4"):
        render_header("Career Copilot", "AI tools for your job search", back=False)
        for tool in TOOLS.values():
            with (
                ui.card()
                .classes("w-full cursor-pointer tool-card")
                .on("click", lambda t=tool: ui.navigate.to(f"/tools/{t.id.value}")),
                ui.row().classes("items-center gap-4 no-wrap"),
            ):
                ui.icon(TOOL_ICONS[tool.id]).classes("text-3xl text-indigo-500")
                with ui.column().classes("gap-0"):
                    ui.label(tool.title).classes("text-base font-semibold")
                    ui.label(tool.description).classes("text-sm text-gray-500")


@ui.page("/tools/{tool_id}")
def tool_page(tool_id: str) -> None:
    """Input form and streamed result for one tool."""
    ui.add_head_html(CUSTOM_CSS)
    try:
        tool: ToolConfig = get_tool(tool_id)
    except KeyError:
        ui.label(f"Unknown tool: {tool_id}").classes("text-lg p-8")
        return

    last_body: dict[str, str] = {}
    request = StreamingRequest(
        tool.path,
        base_url=API_BASE_URL,
        on_change=lambda _: result_view.refresh(),
    )

    async def handle_upload(e: events.UploadEventArguments) -> None:
        try:
            cv_input.value = await extract_pdf_text(await e.file.read())
            ui.notify(f"Loaded {e.file.name}", type="positive")
        except (ValueError, httpx.HTTPError) as exc:
            ui.notify(f"Could not read PDF: {exc}", type="negative")

    async def run(body: dict[str, str]) -> None:
        last_body.clear()
        last_body.update(body)
        await request.execute(body)

    async def submit() -> None:
        values = {"cv_text": cv_input.value or "", "job_description": ""}
        if job_input is not None:
            values["job_description"] = job_input.value or ""
        if tool.missing_fields(values):
            ui.notify(tool.validation_message, type="warning")
            return
        body = {"cvText": values["cv_text"].strip()}
        if "job_description" in tool.required_fields:
            body["jobDescription"] = values["job_description"].strip()
        await run(body)

    async def try_again() -> None:
        if last_body:
            await run(dict(last_body))

    def clear() -> None:
        request.cancel()
        request.reset()
        cv_input.value = ""
        if job_input is not None:
            job_input.value = ""

    @ui.refreshable
    def result_view() -> None:
        if request.error:
            with ui.row().classes("w-full items-center gap-3 p-4 result-box"):
                ui.icon("error").classes("text-2xl text-red-500")
                ui.label(request.error).classes("text-sm flex-1")
                ui.button("Try again", icon="refresh", on_click=try_again).props("flat")
            return

        if request.is_loading and not request.result:
            with ui.row().classes("items-center gap-3 p-4"):
                ui.spinner(size="lg")
                ui.label("Working on it...").classes("text-sm text-gray-500")
            return

        if not request.result:
            return

        with ui.column().classes("w-full p-4 gap-2 result-box"):
            if tool.output is OutputFormat.TEXT:
                ui.markdown(request.result).classes("w-full")
            elif request.is_loading:
                with ui.row().classes("items-center gap-3"):
                    ui.spinner()
                    ui.label(f"Analyzing... {len(request.result)} characters received").classes(
                        "text-sm text-gray-500"
                    )
            else:
                parsed = parse_tool_result(tool, request.result)
                if parsed is None:
                    ui.label("The response could not be read as a structured result.").classes(
                        "text-sm text-red-500"
                    )
                    with ui.expansion("Raw response").classes("w-full"):
                        ui.label(request.result).classes("text-xs whitespace-pre-wrap")
                else:
                    RENDERERS[tool.id](parsed)

            if not request.is_loading:
                ui.button(
                    "Copy", icon="content_copy", on_click=lambda: ui.clipboard.write(request.result)
                ).props("flat dense")

    with ui.column().classes("w-full max-w-3xl mx-auto p-4 md:p-8 gap-4"):
        render_header(tool.title, tool.description)

        cv_input = ui.textarea("Your CV", placeholder="Paste your CV or upload a PDF").classes(
            "w-full"
        ).props("outlined autogrow")
        ui.upload(label="Upload CV (PDF)", on_upload=handle_upload, auto_upload=True).props(
            "accept=.pdf flat bordered"
        ).classes("w-full")

        job_input = None
        if "job_description" in tool.required_fields:
            job_input = ui.textarea(
                "Job description", placeholder="Paste the job posting"
            ).classes("w-full").props("outlined autogrow")

        with ui.row().classes("gap-2"):
            ui.button("Run", icon="play_arrow", on_click=submit).bind_enabled_from(
                request, "is_loading", backward=lambda loading: not loading
            )
            ui.button("Cancel", icon="stop", on_click=request.cancel).props(
                "flat"
            ).bind_visibility_from(request, "is_loading")
            ui.button("Clear", icon="delete_sweep", on_click=clear).props("flat")

        result_view()
