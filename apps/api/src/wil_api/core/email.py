"""
Email Service using Resend

Outbound notifications for the WIL program: acceptance codes, staff and
event codes, rejection notices and student status changes.

Every notification is sent after the database transaction that caused it has
committed. Delivery failures raise NotificationFailure, which callers turn
into a logged warning through `dispatch_notification`; they never undo the
committed state change.
"""

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from html import escape

import resend

from wil_api.core.errors import NotificationFailure

logger = logging.getLogger(__name__)

# Initialize Resend with API key
resend.api_key = os.getenv("RESEND_API_KEY")

# Configurations
EMAIL_FROM = os.getenv("EMAIL_FROM", "MUT Environmental Health WIL <noreply@wil.mut.ac.za>")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:4200")
SIGNATURE = "MUT Faculty of Natural Sciences: Department of Environmental Health"


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> None:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Raises:
        NotificationFailure: If Resend rejects or fails to deliver the message
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return

    try:
        params: resend.Emails.SendParams = {
            "from": EMAIL_FROM,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Run sync Resend call in thread pool to avoid blocking event loop
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        raise NotificationFailure(f"Failed to send '{subject}' to {to_email}") from e


async def dispatch_notification(
    send: Callable[..., Awaitable[None]],
    **fields,
) -> str | None:
    """
    Run a post-commit notification on a best-effort basis.

    Args:
        send: One of the send_* functions in this module
        **fields: Keyword arguments for the send function

    Returns:
        None when the email went out, otherwise a warning message suitable
        for the API response
    """
    try:
        await send(**fields)
        return None
    except Exception as e:
        logger.error(f"Notification {send.__name__} failed: {e}", exc_info=True)
        return "The change was saved but the notification email could not be sent."


def _render(heading: str, greeting_name: str, paragraphs: list[str], code: str | None = None) -> str:
    """Render the shared HTML layout. Callers must escape user input."""
    body = "\n".join(f"<p>{paragraph}</p>" for paragraph in paragraphs)
    code_block = f'<div class="code-box">{code}</div>' if code else ""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
            .header {{ color: #1a365d; margin-bottom: 24px; }}
            .code-box {{ background-color: #f3f4f6; border: 1px solid #e5e7eb; padding: 16px; border-radius: 8px; margin: 16px 0; font-size: 24px; letter-spacing: 4px; text-align: center; font-family: monospace; }}
            .footer {{ margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">{heading}</h1>

            <p>Dear {greeting_name},</p>

            {body}

            {code_block}

            <div class="footer">
                <p>Best regards,</p>
                <p>{SIGNATURE}</p>
            </div>
        </div>
    </body>
    </html>
    """


async def send_application_accepted(to_email: str, first_names: str, code: str) -> None:
    """Send the acceptance notice carrying the student's signup code."""
    signup_url = f"{FRONTEND_URL}/student-signup"
    html_content = _render(
        heading="Application Accepted",
        greeting_name=escape(first_names),
        paragraphs=[
            "Congratulations! Your Student Application Form for Work Integrated "
            "Learning Placements has been accepted.",
            f'Use the registration code below to sign up at <a href="{signup_url}">{signup_url}</a>.',
            "<strong>The code can only be used once.</strong>",
        ],
        code=escape(code),
    )
    await send_email(
        to_email=to_email,
        subject="Your WIL application has been accepted",
        html_content=html_content,
    )


async def send_application_rejected(to_email: str, first_names: str) -> None:
    """Send the rejection notice."""
    html_content = _render(
        heading="Update on Your Application",
        greeting_name=escape(first_names),
        paragraphs=[
            "We regret to inform you that your Student Application Form for Work "
            "Integrated Learning Placements has not been accepted.",
            "We encourage you to apply again in the future.",
        ],
    )
    await send_email(
        to_email=to_email,
        subject="Update on your WIL application",
        html_content=html_content,
    )


async def send_staff_code(to_email: str, staff_name: str, code: str) -> None:
    """Send a staff or mentor registration code."""
    html_content = _render(
        heading="Your Staff Registration Code",
        greeting_name=escape(staff_name),
        paragraphs=[
            "Your staff registration code has been generated.",
            "Please use this code to complete your registration on the WIL system.",
        ],
        code=escape(code),
    )
    await send_email(
        to_email=to_email,
        subject="Your Staff Registration Code",
        html_content=html_content,
    )


async def send_event_code(to_email: str, guest_name: str, code: str) -> None:
    """Send a guest their event code."""
    html_content = _render(
        heading="Your Event Code",
        greeting_name=escape(guest_name),
        paragraphs=[
            "Thank you for the upcoming event you will be hosting for our students.",
            "Please keep this code safe. You will need it to create the event on the WIL system.",
        ],
        code=escape(code),
    )
    await send_email(
        to_email=to_email,
        subject="Your Event Code",
        html_content=html_content,
    )


async def send_student_suspended(to_email: str) -> None:
    """Tell a student their account was suspended."""
    html_content = _render(
        heading="Account Suspended",
        greeting_name=escape(to_email),
        paragraphs=[
            "Please be advised that your account has been suspended from the Work "
            "Integrated Learning system.",
            "If you believe this was done in error, please contact the department.",
        ],
    )
    await send_email(
        to_email=to_email,
        subject="You have been suspended from the WIL system",
        html_content=html_content,
    )


async def send_student_unenrolled(to_email: str) -> None:
    """Tell a student they were unenrolled."""
    html_content = _render(
        heading="Account Unenrolled",
        greeting_name=escape(to_email),
        paragraphs=[
            "Your status has been updated to 'unenrolled' in the Work Integrated Learning system.",
            "Please reach out to your supervisor or the department for more information.",
        ],
    )
    await send_email(
        to_email=to_email,
        subject="You have been unenrolled from the WIL system",
        html_content=html_content,
    )


async def send_student_enrolled(to_email: str) -> None:
    """Tell a student they were (re-)enrolled."""
    html_content = _render(
        heading="Welcome Back",
        greeting_name=escape(to_email),
        paragraphs=[
            "You have been enrolled into the Work Integrated Learning system.",
            "You may now access the system and continue your placement activities.",
        ],
    )
    await send_email(
        to_email=to_email,
        subject="You have been enrolled into the WIL system",
        html_content=html_content,
    )


async def send_student_reactivated(to_email: str) -> None:
    """Tell a student their account is active again."""
    html_content = _render(
        heading="Account Reactivated",
        greeting_name=escape(to_email),
        paragraphs=[
            "Your Work Integrated Learning account has been reactivated.",
            "Remember to submit your daily logsheets to keep your account active.",
        ],
    )
    await send_email(
        to_email=to_email,
        subject="Your WIL account has been reactivated",
        html_content=html_content,
    )
