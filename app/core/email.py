import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from app.config import settings
from app.core.logging import logger
from typing import List, Optional


async def send_email(
    to: List[str],
    subject: str,
    body: str,
    html_body: Optional[str] = None
) -> bool:
    """
    Send an email over SMTP with STARTTLS.

    Args:
        to: List of recipient email addresses
        subject: Email subject
        body: Plain text email body
        html_body: Optional HTML email body

    Returns:
        bool: True if email sent successfully. Failures are logged, never raised.
    """
    logger.info(f"Sending email to {', '.join(to)}")

    message = MIMEMultipart("alternative")
    message["From"] = settings.EMAIL_FROM or settings.SMTP_USER
    message["To"] = ", ".join(to)
    message["Subject"] = subject
    message.attach(MIMEText(body, "plain"))
    if html_body:
        message.attach(MIMEText(html_body, "html"))

    try:
        await aiosmtplib.send(
            message,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            start_tls=True,
        )
    except aiosmtplib.SMTPAuthenticationError as e:
        logger.error(f"SMTP authentication failed for {settings.SMTP_USER}@{settings.SMTP_HOST}: {e}")
        return False
    except aiosmtplib.SMTPException as e:
        logger.error(f"SMTP error sending email to {to}: {type(e).__name__}: {e}")
        return False
    except OSError as e:
        logger.error(f"Could not reach SMTP server {settings.SMTP_HOST}:{settings.SMTP_PORT}: {e}")
        return False

    logger.info(f"Email sent to {', '.join(to)}")
    return True


async def send_otp_email(email: str, otp_code: str, purpose: str = "signup") -> bool:
    """
    Send a one-time code for sign-up verification or password reset.

    Args:
        email: Recipient email address
        otp_code: 6 digit code
        purpose: "signup" or "password_reset"
    """
    is_reset = purpose == "password_reset"
    title = "Password Reset" if is_reset else "Email Verification"
    intro = (
        "You requested a password reset for your Rehabiri account."
        if is_reset
        else "Thank you for signing up for Rehabiri!"
    )
    action = "password reset" if is_reset else "verification"
    subject = f"{title} - Rehabiri App"

    body = f"""
    {title}

    {intro}

    Your verification code is: {otp_code}

    This code will expire in {settings.OTP_EXPIRE_MINUTES} minutes.

    If you didn't request this {action}, please ignore this email.

    Rehabiri - Your Physiotherapy Management App
    """

    html_body = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #0A84FF;">{title}</h2>
        <p>{intro}</p>
        <p>Your verification code is:</p>
        <div style="background-color: #f5f5f5; padding: 20px; text-align: center; margin: 20px 0;">
            <h1 style="color: #0A84FF; font-size: 32px; margin: 0; letter-spacing: 5px;">{otp_code}</h1>
        </div>
        <p>This code will expire in {settings.OTP_EXPIRE_MINUTES} minutes.</p>
        <p>If you didn't request this {action}, please ignore this email.</p>
        <hr style="margin: 30px 0;">
        <p style="color: #666; font-size: 12px;">Rehabiri - Your Physiotherapy Management App</p>
    </div>
    """

    return await send_email([email], subject, body, html_body)
