"""FastAPI endpoints for the career-assistant tools.

HTTP and streaming routes with async request handling.
Tool responses stream as Server-Sent Events.

Endpoints:
    - GET /health: Service health status
    - POST /api/cv/optimize: CV rewrite for a job posting
    - POST /api/cv/audit: ATS audit (JSON result)
    - POST /api/cover-letter/generate: Cover letter
    - POST /api/interview/simulate: Interview questions (JSON result)
    - POST /api/skills/analyze: Skills-gap analysis (JSON result)
    - POST /api/pdf/parse: Text extraction from a base64 PDF
"""

from career_copilot.api.app import app, create_app

__all__ = ["app", "create_app"]
