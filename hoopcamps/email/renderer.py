"""HTML e-mail rendering with Jinja2.

Templates live next to this module and all extend `base.html`. Values are
autoescaped, so camp names and rejection reasons typed by users cannot
inject markup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

_templates_dir = os.path.join(os.path.dirname(__file__), "templates")
_jinja_env = Environment(
    loader=FileSystemLoader(_templates_dir),
    autoescape=select_autoescape(["html", "xml"]),
)

APP_NAME = "Basketball Camps"
BRAND_LIGHT = "#FB923C"
BRAND_DARK = "#C2410C"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


def render_email(template_name: str, **context: Any) -> str:
    base = {
        "app_name": APP_NAME,
        "brand_light": BRAND_LIGHT,
        "brand_dark": BRAND_DARK,
    }
    base.update(context or {})
    return _jinja_env.get_template(template_name).render(**base)


def camp_approval_email(camp_name: str, owner_name: str) -> RenderedEmail:
    return RenderedEmail(
        subject=f"Congratulations! {camp_name} is Now Live",
        html=render_email("camp_approval.html", camp_name=camp_name, owner_name=owner_name),
    )


def camp_rejection_email(camp_name: str, owner_name: str, rejection_reason: str) -> RenderedEmail:
    return RenderedEmail(
        subject=f"Update on {camp_name} Submission",
        html=render_email(
            "camp_rejection.html",
            camp_name=camp_name,
            owner_name=owner_name,
            rejection_reason=rejection_reason,
        ),
    )


def review_verification_email(participant_name: str, verification_url: str, camp_name: str | None = None) -> RenderedEmail:
    return RenderedEmail(
        subject="Verify Your Basketball Camp Review",
        html=render_email(
            "review_verification.html",
            participant_name=participant_name,
            verification_url=verification_url,
            camp_name=camp_name,
        ),
    )


def submission_notification_email(submission: dict[str, Any]) -> RenderedEmail:
    """`submission` uses the snake_case keys of the notification payload."""
    return RenderedEmail(
        subject=f"New Camp Submission: {submission.get('camp_name', '')}",
        html=render_email("camp_submission_notification.html", submission=submission, max_width="800px"),
    )
