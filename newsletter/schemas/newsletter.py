"""Newsletter Schemas — JSON body of POST /newsletters.

Invariants:
    - title, content.html and content.text are all required strings
    - Missing fields or wrong types are rejected with 400 before any auth/DB work

Design Decisions:
    - Nested Content model mirrors the wire format ({title, content: {html, text}})
"""

from pydantic import BaseModel


class NewsletterContent(BaseModel):
    html: str
    text: str


class NewsletterIssue(BaseModel):
    """One newsletter issue as submitted by the operator."""
    title: str
    content: NewsletterContent
