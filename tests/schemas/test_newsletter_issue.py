"""Newsletter Issue Schema — verifies the POST /newsletters body shape."""

import pytest
from pydantic import ValidationError

from newsletter.schemas.newsletter import NewsletterIssue


def test_parses_nested_content():
    issue = NewsletterIssue.model_validate({
        "title": "Issue #1",
        "content": {"html": "<p>Hi</p>", "text": "Hi"},
    })
    assert issue.title == "Issue #1"
    assert issue.content.html == "<p>Hi</p>"
    assert issue.content.text == "Hi"


@pytest.mark.parametrize(
    "payload",
    [
        {"content": {"html": "<p>Hi</p>", "text": "Hi"}},
        {"title": "Issue #1"},
        {"title": "Issue #1", "content": {"html": "<p>Hi</p>"}},
        {"title": "Issue #1", "content": "not an object"},
    ],
)
def test_rejects_incomplete_payloads(payload):
    with pytest.raises(ValidationError):
        NewsletterIssue.model_validate(payload)
