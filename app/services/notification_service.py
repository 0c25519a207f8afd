"""
app/services/notification_service.py

Purpose: Welcome email dispatch

- Sends the welcome email through an HTTP email provider
- Falls back to logging the email when no provider is configured
- Never raises for transport failures; reports them in the result
"""

import httpx
import uuid
from typing import Dict, Any, Optional
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

WELCOME_TEMPLATE = (
    "Hola,\n\n"
    "Tu cuenta ha sido creada correctamente con el correo {email}.\n\n"
    "¡Gracias por registrarte!"
)


class NotificationService:
    """Service for sending transactional emails"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url if api_url is not None else settings.EMAIL_API_URL
        self.api_key = api_key if api_key is not None else settings.EMAIL_API_KEY
        self.sender = sender or settings.EMAIL_SENDER
        self.timeout = timeout or settings.EMAIL_API_TIMEOUT
        self._transport = transport

    async def send_welcome_email(self, email: str) -> Dict[str, Any]:
        """
        Sends the welcome email to a newly registered user

        Args:
            email: Recipient address

        Returns:
            {
                "success": True/False,
                "message_id": "...",
                "error": "Optional error message"
            }
        """
        subject = settings.WELCOME_EMAIL_SUBJECT
        body = WELCOME_TEMPLATE.format(email=email)

        if not self.is_configured():
            message_id = f"local-{uuid.uuid4().hex[:8]}"
            logger.info(
                f"📧 Welcome email (not sent, no provider configured): {subject}",
                extra={"email": email}
            )
            return {"success": True, "message_id": message_id, "simulated": True}

        return await self.send_email(email, subject, body)

    async def send_email(self, to: str, subject: str, text: str) -> Dict[str, Any]:
        try:
            payload = {
                "from": self.sender,
                "to": to,
                "subject": subject,
                "text": text
            }
            headers = {}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"

            logger.info(f"📤 Sending email to {to}")

            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)

                if response.status_code in [200, 201, 202]:
                    try:
                        result = response.json()
                    except ValueError:
                        result = {}
                    if not isinstance(result, dict):
                        result = {}
                    message_id = result.get("id") or result.get("message_id")
                    logger.info(f"✅ Email sent: id={message_id}")

                    return {
                        "success": True,
                        "message_id": message_id
                    }
                else:
                    logger.error(f"❌ Email API error: {response.status_code} - {response.text}")

                    return {
                        "success": False,
                        "error": f"Email API error: {response.status_code}"
                    }

        except httpx.TimeoutException:
            logger.error("Email API timeout")
            return {
                "success": False,
                "error": "Email API timeout"
            }
        except httpx.HTTPError as e:
            logger.error(f"Error sending email: {e}", exc_info=True)
            return {
                "success": False,
                "error": str(e)
            }

    def is_configured(self) -> bool:
        """Check if an email provider is configured"""
        return bool(self.api_url)


# Singleton instance
notification_service = NotificationService()


def get_notifier() -> NotificationService:
    return notification_service
