"""
First-access email rendering
"""

from html import escape

from docgate.services.notification.models import EmailMessage
from docgate.services.store.models import DocumentRecord

DEFAULT_SUBJECT_TEMPLATE = "Welcome aboard | Your document: {title}"

BODY_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; color: #222">
  <p>Dear friend,</p>
  <p>{thank_you_content}</p>
  <p>
    <strong>Document:</strong> {title}<br />
    <strong>Introduction:</strong> {introduction}<br />
    <a href="{link}" target="_blank" rel="noopener noreferrer">Open the document</a>
  </p>
</div>
"""


def render_subject(title: str, template: str = DEFAULT_SUBJECT_TEMPLATE) -> str:
    return template.format(title=title)


def render_body(document: DocumentRecord) -> str:
    """Render the HTML body; every document field is escaped"""
    content = escape(document.thank_you_content or "").replace("\n", "<br />\n")
    return BODY_TEMPLATE.format(
        thank_you_content=content,
        title=escape(document.title),
        introduction=escape(document.introduction),
        link=escape(document.link, quote=True),
    )


def build_first_access_email(
    to: str,
    document: DocumentRecord,
    subject_template: str = DEFAULT_SUBJECT_TEMPLATE,
) -> EmailMessage:
    return EmailMessage(
        to=to,
        subject=render_subject(document.title, subject_template),
        html=render_body(document),
    )
