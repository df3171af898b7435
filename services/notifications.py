"""
Lead notification email for PW Pattaya.

Sends the office a plain-text and HTML summary of every new contact lead.
Delivery goes through Django's mail framework; settings.EMAIL_BACKEND decides
whether it reaches SMTP or the console.
"""

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import escape, linebreaks

from . import NotificationError

logger = logging.getLogger(__name__)


def build_lead_subject(lead) -> str:
    return f"New Lead: {lead.name}"


def build_lead_text(lead) -> str:
    lines = [
        "New lead received from the PW Pattaya website",
        "",
        f"Name: {lead.name}",
        f"Email: {lead.email}",
        f"Phone: {lead.phone}",
    ]
    if lead.subject:
        lines.append(f"Subject: {lead.subject}")
    if lead.property_id:
        lines.append(f"Property: {lead.property}")
    lines += ["", "Message:", lead.message]
    return "\n".join(lines)


def build_lead_html(lead) -> str:
    fields = [
        ('Name', escape(lead.name)),
        ('Email', f'<a href="mailto:{escape(lead.email)}">{escape(lead.email)}</a>'),
        ('Phone', f'<a href="tel:{escape(lead.phone)}">{escape(lead.phone)}</a>'),
    ]
    if lead.subject:
        fields.append(('Subject', escape(lead.subject)))
    if lead.property_id:
        fields.append(('Property', escape(str(lead.property))))
    fields.append(('Message', linebreaks(lead.message, autoescape=True)))

    rows = "\n".join(
        f'<div class="field"><div class="label">{label}</div><div class="value">{value}</div></div>'
        for label, value in fields
    )
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8"></head>'
        '<body style="font-family: Arial, sans-serif; color: #333;">'
        '<h1 style="color: #3d5a6c;">New Lead</h1>'
        f'{rows}'
        '<p style="color: #666; font-size: 12px;">Sent by the PW Pattaya website</p>'
        '</body></html>'
    )


def send_lead_notification(lead) -> None:
    """
    Email the office about a new lead.

    Raises:
        NotificationError: the mail backend failed
    """
    message = EmailMultiAlternatives(
        subject=build_lead_subject(lead),
        body=build_lead_text(lead),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[settings.ADMIN_EMAIL],
        reply_to=[lead.email],
    )
    message.attach_alternative(build_lead_html(lead), 'text/html')

    try:
        message.send()
    except Exception as e:
        raise NotificationError(f"Failed to send lead notification for lead #{lead.pk}: {e}") from e

    logger.info(f"Lead notification sent to {settings.ADMIN_EMAIL} for lead #{lead.pk}")


def safe_send_lead_notification(lead) -> bool:
    """
    Send the lead notification without letting mail problems reach the caller.

    Returns:
        True when the message was handed to the mail backend
    """
    try:
        send_lead_notification(lead)
        return True
    except NotificationError as e:
        logger.error(str(e))
        return False
