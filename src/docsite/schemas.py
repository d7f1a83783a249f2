"""
Pydantic schemas — define what goes in and what comes out of every endpoint.

Naming convention:
- *Request = what the client sends
- *Response = what the server returns
"""
from typing import Optional

from pydantic import BaseModel, Field


# --- Navigation ---

class BreadcrumbItem(BaseModel):
    """
    One step of the navigation trail.
    The current page has no url — it isn't a link.
    """
    name: str
    url: Optional[str] = None


# --- Code formatting ---

class FormatCodeRequest(BaseModel):
    """A single code snippet to normalize for display."""
    code: str = Field(description="The raw snippet text (may be empty)")
    language: Optional[str] = Field(None, description="Language tag, e.g. js, ts, json, python (case-insensitive)")
    sync: bool = Field(False, description="Whitespace cleanup only — never calls the external formatter")


class FormatCodeResponse(BaseModel):
    code: str

