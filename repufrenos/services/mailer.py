"""
Outbound email.

The contact page goes through SMTP with the credentials from the
runtime settings file. The live chat widget goes through the hosted email
API configured in ``Settings``.
"""
import html
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import List, Optional

import requests

from repufrenos.config import get_env_settings, get_settings
from repufrenos.log import get_logger
from repufrenos.schemas.admin import EnvSettings
from repufrenos.schemas.common import ActionResult
from repufrenos.schemas.contact import ChatInquiry, ContactForm

logger = get_logger(__name__)

NOT_CONFIGURED = "El servidor no está configurado para enviar correos. Por favor, contacta al administrador."
SEND_FAILED = "No se pudo enviar el correo."
SMTP_TIMEOUT = 10
API_TIMEOUT = 10


def _paragraph(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")


def _recipients(value: Optional[str]) -> List[str]:
    return [r.strip() for r in (value or "").split(",") if r.strip()]


def contact_email_html(form: ContactForm) -> str:
    return (
        "<div>"
        "<h1>Nuevo mensaje de contacto de REPUFRENOS.CL</h1>"
        f"<p><strong>Nombre:</strong> {html.escape(form.name)}</p>"
        f"<p><strong>Correo:</strong> {html.escape(form.email)}</p>"
        f"<p><strong>Asunto:</strong> {html.escape(form.subject)}</p>"
        "<p><strong>Mensaje:</strong></p>"
        f"<p>{_paragraph(form.message)}</p>"
        "</div>"
    )


def chat_email_html(inquiry: ChatInquiry) -> str:
    email = html.escape(inquiry.email)
    return (
        "<div>"
        "<h1>Nueva consulta desde el Chat de REPUFRENOS.CL</h1>"
        f"<p><strong>Nombre:</strong> {html.escape(inquiry.name)}</p>"
        f'<p><strong>Correo para responder:</strong> <a href="mailto:{email}">{email}</a></p>'
        "<p><strong>Mensaje:</strong></p>"
        f"<p>{_paragraph(inquiry.message)}</p>"
        "</div>"
    )


def _smtp_send(env: EnvSettings, message: EmailMessage) -> None:
    port = int(env.SMTP_PORT)
    if env.SMTP_SECURE == "true":
        with smtplib.SMTP_SSL(env.SMTP_HOST, port, timeout=SMTP_TIMEOUT) as server:
            server.login(env.SMTP_USER, env.SMTP_PASS)
            server.send_message(message)
    else:
        with smtplib.SMTP(env.SMTP_HOST, port, timeout=SMTP_TIMEOUT) as server:
            server.starttls()
            server.login(env.SMTP_USER, env.SMTP_PASS)
            server.send_message(message)


def send_contact_email(form: ContactForm, env: Optional[EnvSettings] = None) -> ActionResult:
    """Send a contact page message over SMTP."""
    env = env or get_env_settings()
    if not env.smtp_configured:
        logger.error("SMTP settings are incomplete; contact email not sent")
        return ActionResult(success=False, error=NOT_CONFIGURED)

    message = EmailMessage()
    message["From"] = formataddr((form.name, env.SMTP_USER))
    message["To"] = ", ".join(_recipients(env.SMTP_RECIPIENTS))
    message["Reply-To"] = form.email
    message["Subject"] = f"Nuevo Contacto: {form.subject}"
    message.set_content(form.message)
    message.add_alternative(contact_email_html(form), subtype="html")

    try:
        _smtp_send(env, message)
    except (smtplib.SMTPException, OSError, ValueError):
        logger.exception("Error sending contact email")
        return ActionResult(success=False, error=SEND_FAILED)

    logger.info("Contact email sent for %s", form.email)
    return ActionResult(success=True)


def send_chat_inquiry(inquiry: ChatInquiry) -> ActionResult:
    """Send a chat widget inquiry through the hosted email API."""
    settings = get_settings()
    recipients = _recipients(settings.hosted_email_recipients or get_env_settings().SMTP_RECIPIENTS)
    if not settings.hosted_email_api_key or not recipients:
        logger.error("Hosted email API is not configured; chat inquiry not sent")
        return ActionResult(success=False, error=NOT_CONFIGURED)

    payload = {
        "from": settings.hosted_email_from,
        "to": recipients,
        "reply_to": inquiry.email,
        "subject": f"Nueva Consulta desde el Chat: {inquiry.name}",
        "html": chat_email_html(inquiry),
    }
    try:
        response = requests.post(
            settings.hosted_email_api_url,
            json=payload,
            headers={"Authorization": f"Bearer {settings.hosted_email_api_key}"},
            timeout=API_TIMEOUT,
        )
        response.raise_for_status()
    except requests.RequestException:
        logger.exception("Error sending chat inquiry email")
        return ActionResult(success=False, error=SEND_FAILED)

    logger.info("Chat inquiry sent for %s", inquiry.email)
    return ActionResult(success=True)
