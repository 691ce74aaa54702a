# Transactional Email via Brevo
# Sends are fire-and-forget: failures are logged and returned, never raised,
# so a mail outage cannot fail an order or application.

import html
import logging
from typing import Dict, List, Optional, Union

import httpx

from config import app_config

logger = logging.getLogger(__name__)

BREVO_API_URL = "https://api.brevo.com/v3/smtp/email"

Recipient = Dict[str, str]


class EmailService:
    """Thin client for Brevo's SMTP-over-HTTP endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_name: Optional[str] = None,
        from_address: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = app_config.BREVO_API_KEY if api_key is None else api_key
        self.from_name = from_name or app_config.EMAIL_FROM_NAME
        self.from_address = from_address or app_config.EMAIL_FROM_ADDRESS
        self.timeout = timeout
        self.transport = transport

    def send_email(
        self,
        to: Union[Recipient, List[Recipient]],
        subject: str,
        html: str,
        text: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> dict:
        if not self.api_key:
            logger.warning(f"BREVO_API_KEY not configured, skipping email '{subject}'")
            return {"error": "Email service not configured"}

        payload = {
            "sender": {"name": self.from_name, "email": self.from_address},
            "to": to if isinstance(to, list) else [to],
            "subject": subject,
            "htmlContent": html,
        }
        if text:
            payload["textContent"] = text
        if tags:
            payload["tags"] = tags

        headers = {
            "accept": "application/json",
            "api-key": self.api_key,
            "content-type": "application/json",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(BREVO_API_URL, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Email send failed for '{subject}': {e}")
            return {"error": str(e)}

        if response.status_code >= 400:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            logger.error(f"Brevo API error {response.status_code}: {response.text}")
            return {"error": message or "Failed to send email"}

        message_id = response.json().get("messageId")
        logger.info(f"Email '{subject}' sent, message id {message_id}")
        return {"messageId": message_id}


def get_email_service() -> EmailService:
    """FastAPI dependency; override in tests to capture outgoing mail."""
    return EmailService()


# ============================================================================
# TEMPLATES
# ============================================================================

def _wrap(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width, initial-scale=1.0"></head>
<body style="margin:0;padding:0;background-color:#0a0a0a;font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,Arial,sans-serif;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background-color:#0a0a0a;padding:40px 20px;">
    <tr><td align="center">
      <table width="100%" style="max-width:560px;background-color:#111111;border-radius:16px;padding:32px;color:#ffffff;">
        <tr><td><h1 style="font-size:22px;margin:0 0 16px;">{title}</h1>{body}</td></tr>
        <tr><td style="padding-top:24px;color:#71717a;font-size:12px;">TapOnce &middot; Smart NFC Business Cards</td></tr>
      </table>
    </td></tr>
  </table>
</body>
</html>"""


def order_confirmation_email(
    customer_name: str,
    order_number: int,
    material_name: str,
    card_name: str,
    total,
    payment_method: str,
) -> dict:
    payment_line = "Cash on Delivery" if payment_method == "cod" else "Online Payment"
    body = f"""
<p>Hi {html.escape(customer_name)},</p>
<p>Thanks for your order! We are reviewing it and will start printing shortly.</p>
<table style="width:100%;color:#e4e4e7;font-size:14px;">
  <tr><td>Order</td><td align="right">#{order_number}</td></tr>
  <tr><td>Card</td><td align="right">{html.escape(card_name)}</td></tr>
  <tr><td>Material</td><td align="right">{html.escape(material_name)}</td></tr>
  <tr><td>Payment</td><td align="right">{payment_line}</td></tr>
  <tr><td><strong>Total</strong></td><td align="right"><strong>&#8377;{total}</strong></td></tr>
</table>
<p>Track your order any time at <a href="{app_config.APP_URL}/order/track" style="color:#8b5cf6;">{app_config.APP_URL}/order/track</a>.</p>
"""
    return {
        "subject": f"Order Confirmed #{order_number} - Your Smart Card is Being Prepared!",
        "html": _wrap("Order Confirmed", body),
    }


def customer_welcome_email(
    customer_name: str,
    order_number: int,
    profile_url: str,
    login_url: str,
    username: str,
    password: Optional[str],
) -> dict:
    username = html.escape(username)
    credentials = (
        f"<p>Username: <strong>{username}</strong><br>Password: <strong>{html.escape(password)}</strong></p>"
        "<p>Please change your password after your first login.</p>"
        if password else
        f"<p>Log in with your existing account: <strong>{username}</strong></p>"
    )
    body = f"""
<p>Hi {html.escape(customer_name)},</p>
<p>Your order #{order_number} has been approved and your digital profile is live.</p>
<p>Profile: <a href="{profile_url}" style="color:#8b5cf6;">{profile_url}</a></p>
{credentials}
<p><a href="{login_url}" style="color:#8b5cf6;">Log in to edit your profile</a></p>
"""
    return {
        "subject": f"Your Smart Card Login Details - Order #{order_number}",
        "html": _wrap("Your profile is ready", body),
    }


def claim_account_email(customer_name: str, order_number: int, claim_url: str) -> dict:
    body = f"""
<p>Hi {html.escape(customer_name)},</p>
<p>Your TapOnce smart card (order #{order_number}) has been booked. Set a password to manage your digital profile:</p>
<p><a href="{claim_url}" style="color:#8b5cf6;">Claim your account</a></p>
<p>This link works once. If you did not place this order you can ignore this email.</p>
"""
    return {
        "subject": f"Claim Your TapOnce Account - Order #{order_number}",
        "html": _wrap("Claim your account", body),
    }


def agent_application_email(agent_name: str) -> dict:
    body = f"""
<p>Hi {html.escape(agent_name)},</p>
<p>We received your application to join the TapOnce Agent Program. Our team reviews applications within 48 hours and will reach out on your registered phone number.</p>
"""
    return {
        "subject": "Application Received - TapOnce Agent Program",
        "html": _wrap("Application Received", body),
    }


def agent_approved_email(agent_name: str, referral_code: str, login_url: str, username: str, password: str) -> dict:
    body = f"""
<p>Hi {html.escape(agent_name)},</p>
<p>Welcome aboard! Your referral code is <strong>{html.escape(referral_code)}</strong>.</p>
<p>Username: <strong>{html.escape(username)}</strong><br>Password: <strong>{html.escape(password)}</strong></p>
<p><a href="{login_url}" style="color:#8b5cf6;">Open the agent portal</a></p>
"""
    return {
        "subject": "You're In - TapOnce Agent Program",
        "html": _wrap("Application Approved", body),
    }
