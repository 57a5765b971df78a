"""Resend client for admin notifications about reported recipes."""

import html
import logging

import requests

from .config import get_settings
from .errors import InternalError

logger = logging.getLogger(__name__)


class EmailNotConfiguredError(InternalError):
    pass


class EmailDeliveryError(InternalError):
    pass


def is_configured() -> bool:
    """Check if the Resend API key is configured."""
    try:
        return get_settings().email_configured
    except Exception:
        return False


def build_report_html(
    recipe_id: str, recipe_title: str, name: str, email: str, message: str
) -> str:
    """Render the report email body. Every user-supplied value is escaped."""
    e = html.escape
    return (
        "<h2>Recipe Report</h2>"
        f"<p><strong>Recipe:</strong> {e(recipe_title)}</p>"
        f"<p><strong>Recipe ID:</strong> {e(recipe_id)}</p>"
        f"<p><strong>Reported by:</strong> {e(name)} ({e(email)})</p>"
        "<p><strong>Message:</strong></p>"
        f"<p>{e(message)}</p>"
    )


def send_recipe_report(
    recipe_id: str, recipe_title: str, name: str, email: str, message: str
) -> str | None:
    """Email a recipe report to the site admin.

    Returns:
        The provider's message id, when it sends one back.

    Raises:
        EmailNotConfiguredError: If no API key is set.
        EmailDeliveryError: If the provider rejects or cannot be reached.
    """
    settings = get_settings()
    if not settings.email_configured:
        logger.error("[send_recipe_report] Resend API key is not defined, cannot send report")
        raise EmailNotConfiguredError("Failed to send report")

    payload = {
        "from": settings.report_from_email,
        "to": [settings.admin_email],
        "subject": f"Recipe Report: {recipe_title}",
        "html": build_report_html(recipe_id, recipe_title, name, email, message),
    }

    try:
        response = requests.post(
            settings.resend_api_url,
            json=payload,
            headers={"Authorization": f"Bearer {settings.resend_api_key}"},
            timeout=settings.http_timeout_seconds,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"[send_recipe_report] FAILED for recipe_id={recipe_id}: {e}")
        raise EmailDeliveryError("Failed to send report") from e

    logger.info(f"[send_recipe_report] SUCCESS: recipe_id={recipe_id}")
    try:
        return response.json().get("id")
    except ValueError:
        return None
