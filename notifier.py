"""Email notifier for RemindMe.

Sends the digest through the SendGrid v3 mail/send HTTP API.
"""

from typing import NamedTuple, Optional

import httpx

from logger_config import setup_logger

logger = setup_logger(__name__, 'digest.log')


class DeliveryError(Exception):
    """The email transport did not accept the message."""


class DeliveryResult(NamedTuple):
    status_code: int
    message_id: Optional[str]


class SendGridNotifier:
    """Delivers emails via SendGrid.

    Args:
        api_key: SendGrid API key
        api_url: mail/send endpoint
        from_name: Display name used for the sender
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests pass an httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.sendgrid.com/v3/mail/send",
        from_name: str = "RemindMe",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.from_name = from_name
        self.timeout = timeout
        self.transport = transport

    def _payload(self, from_email: str, to_email: str, subject: str, body: str, html: Optional[str]) -> dict:
        # text/plain must come before text/html
        content = [{"type": "text/plain", "value": body}]
        if html:
            content.append({"type": "text/html", "value": html})
        return {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": from_email, "name": self.from_name},
            "subject": subject,
            "content": content,
        }

    async def send(
        self,
        from_email: str,
        to_email: str,
        subject: str,
        body: str,
        html: Optional[str] = None,
    ) -> DeliveryResult:
        """Send one email.

        Returns:
            DeliveryResult: Status code and SendGrid message id

        Raises:
            DeliveryError: On network errors, timeouts and non-2xx answers
        """
        payload = self._payload(from_email, to_email, subject, body, html)
        headers = {"Authorization": f"Bearer {self.api_key}"}

        logger.info(f"Sending '{subject}' to {to_email}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Timeout while sending '{subject}' to {to_email}")
            raise DeliveryError(f"timeout talking to email transport: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"Network error while sending '{subject}' to {to_email}: {str(e)}")
            raise DeliveryError(f"network error talking to email transport: {e}") from e

        if response.is_error:
            logger.error(
                f"Email transport rejected '{subject}'. "
                f"Status: {response.status_code}, Response: {response.text}"
            )
            raise DeliveryError(f"email transport answered {response.status_code}: {response.text}")

        if response.status_code != 202:
            logger.warning(f"Unexpected email transport status {response.status_code}: {response.text}")

        return DeliveryResult(
            status_code=response.status_code,
            message_id=response.headers.get("X-Message-Id"),
        )
