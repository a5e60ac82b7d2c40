"""NiceGUI interface - thin visualization layer for the career tools.

Responsibilities:
    - Tool listing and one form per tool
    - PDF upload feeding the CV text field
    - Live rendering of streamed results
    - Structured views for audit, interview and skills-gap results

Contains minimal business logic. Delegates all operations to the API
through the streaming client.
"""
