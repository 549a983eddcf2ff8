import logging

import httpx

logger = logging.getLogger(__name__)

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"
REQUEST_TIMEOUT = 10.0


class ConfirmationEmailer:
    """
    Sends registration confirmations through the EmailJS REST API.

    Sending is best effort: an unconfigured service or a failed request is
    logged and reported as False, never raised, so registration always completes.
    """

    def __init__(self, config, client: httpx.Client | None = None):
        self.config = config
        self.client = client

    @property
    def configured(self) -> bool:
        return self.config.email_configured

    def template_params(self, participant) -> dict:
        event = self.config.event
        return {
            "to_email": participant.email,
            "to_name": participant.full_name,
            "event_name": event.name,
            "event_date": event.date,
            "event_time": event.time,
            "event_location": event.location,
            "additional_party": participant.additional_party or "None",
            "emergency_contact": participant.emergency_contact or "Not provided",
            "emergency_phone": participant.emergency_phone or "Not provided",
            "breakfast_info": event.breakfast_info,
            "lunch_info": event.lunch_info,
        }

    def send(self, participant) -> bool:
        """
        Email a confirmation to `participant`.

        Returns:
            bool: True if EmailJS accepted the message.
        """
        if not self.configured:
            logger.info("Email service not configured; skipping confirmation")
            return False

        payload = {
            "service_id": self.config.emailjs_service_id,
            "template_id": self.config.emailjs_template_id,
            "user_id": self.config.emailjs_public_key,
            "template_params": self.template_params(participant),
        }
        try:
            if self.client is not None:
                response = self.client.post(EMAILJS_SEND_URL, json=payload)
            else:
                with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
                    response = client.post(EMAILJS_SEND_URL, json=payload)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Confirmation email to %s failed: %s", participant.email, e)
            return False

        logger.info("Confirmation email sent to %s", participant.email)
        return True
