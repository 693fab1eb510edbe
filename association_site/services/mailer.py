"""
Mail Service

Sends transactional email through a JSON HTTP API. Without an API key
configured, messages are logged instead of sent.
"""

import logging

import requests
from flask import current_app

logger = logging.getLogger(__name__)


class Mailer:
    """send() reports success as a bool and never raises."""

    def __init__(self, api_url, api_key, sender, timeout=10, session=None):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.http = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        return cls(
            api_url=config.get('MAIL_API_URL'),
            api_key=config.get('MAIL_API_KEY'),
            sender=config.get('MAIL_FROM'),
        )

    def send(self, to, subject, html, text):
        if not self.api_key:
            logger.info('Email not sent (no MAIL_API_KEY): to=%s subject=%r\n%s', to, subject, text)
            return True

        payload = {
            'from': self.sender,
            'to': [to],
            'subject': subject,
            'html': html,
            'text': text,
        }
        try:
            resp = self.http.post(self.api_url, json=payload, timeout=self.timeout,
                                  headers={'Authorization': f'Bearer {self.api_key}'})
        except requests.exceptions.RequestException:
            logger.error('Failed to send email to %s', to, exc_info=True)
            return False

        if resp.status_code >= 400:
            logger.error('Mail provider rejected email to %s: %s %s', to, resp.status_code, resp.text[:200])
            return False
        return True


def get_mailer():
    return current_app.extensions['mailer']
