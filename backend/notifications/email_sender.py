"""
Email sending via Resend API for found-item notifications.

Builds the notification message and dispatches it exactly once. Sends are
at-most-once: a failed send is reported to the caller and never retried.
"""

from html import escape
from typing import Any, Dict, List, Optional

import resend

from models import NotificationMessage
from models.types import EmailAddress
from shared.config import NotifyConfig
from shared.exceptions import DispatchFailure


def build_subject(category: str) -> str:
    return f"A found item was posted in {category}"


def build_notification_message(
    config: NotifyConfig,
    recipients: List[EmailAddress],
    category: str,
    found_item_title: Optional[str] = None,
    found_item_id: Optional[str] = None,
) -> NotificationMessage:
    """
    Build the notification email for a found item.

    Args:
        config: Runtime configuration (sender address and site URL)
        recipients: Ordered recipient addresses
        category: Category the found item was posted in
        found_item_title: Optional title of the found item
        found_item_id: Optional reference id of the found item

    Returns:
        NotificationMessage ready to dispatch
    """
    return NotificationMessage(
        from_email=config.email_from,
        to=recipients,
        subject=build_subject(category),
        html=_build_notification_html(
            category, config.site_url, found_item_title, found_item_id
        ),
        text=_build_notification_text(
            category, config.site_url, found_item_title, found_item_id
        ),
    )


def _build_notification_html(
    category: str,
    site_url: str,
    found_item_title: Optional[str],
    found_item_id: Optional[str],
) -> str:
    """
    Build HTML email body.

    User-supplied values are escaped before embedding.
    """
    html = f"""
<div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333;">
    <p>Hello,</p>
    <p>Someone just reported a <strong>found</strong> item in the category <strong>{escape(category)}</strong>.</p>
"""

    if found_item_title:
        html += f"""
    <p>Item: <strong>{escape(found_item_title)}</strong></p>
"""

    html += f"""
    <p>Visit Campus Finder to view details and reach out:</p>
    <p><a href="{escape(site_url, quote=True)}" target="_blank" rel="noopener noreferrer">Open Campus Finder</a></p>
"""

    if found_item_id:
        html += f"""
    <p>Reference ID: {escape(found_item_id)}</p>
"""

    html += """
</div>
"""
    return html


def _build_notification_text(
    category: str,
    site_url: str,
    found_item_title: Optional[str],
    found_item_id: Optional[str],
) -> str:
    text = f"""Hello,

Someone just reported a FOUND item in the category {category}.
"""

    if found_item_title:
        text += f"Item: {found_item_title}\n"

    text += f"""
Visit Campus Finder to view details and reach out:
{site_url}
"""

    if found_item_id:
        text += f"\nReference ID: {found_item_id}\n"

    return text


def send_notification(message: NotificationMessage, api_key: str) -> Dict[str, Any]:
    """
    Send a notification email via Resend.

    Args:
        message: Message to send (all recipients in one call)
        api_key: Resend API key

    Returns:
        Resend response payload (contains the email id)

    Raises:
        DispatchFailure: If Resend rejects the request or the call fails
    """
    resend.api_key = api_key

    try:
        response = resend.Emails.send(message.to_resend_params())
    except Exception as e:
        details = getattr(e, "message", None) or str(e)
        raise DispatchFailure("Email send failed", details=details) from e

    return dict(response) if response else {}
