# Resend client for relaying contact form mails
# Config comes in as a MailConfig object; nothing here reads globals at call time

import os
import logging
from dataclasses import dataclass

import requests

from contact_form import Success, DELIVERY_FAILED

# --- CONFIGURATION ---
RESEND_URL = 'https://api.resend.com/emails'
DEFAULT_MAIL_FROM = 'Website <onboarding@resend.dev>'
REQUIRED_KEYS = ('RESEND_API_KEY', 'MAIL_TO')


def get_env_var(key, default=None, environ=None):
    return (os.environ if environ is None else environ).get(key, default)


@dataclass(frozen=True)
class MailConfig:
    api_key: str = None
    mail_to: str = None
    mail_from: str = None

    def missing_keys(self):
        values = {'RESEND_API_KEY': self.api_key, 'MAIL_TO': self.mail_to}
        return [key for key in REQUIRED_KEYS if not values[key]]

    @property
    def sender(self):
        return self.mail_from or DEFAULT_MAIL_FROM


def load_config(environ=None):
    return MailConfig(
        api_key=get_env_var('RESEND_API_KEY', environ=environ),
        mail_to=get_env_var('MAIL_TO', environ=environ),
        mail_from=get_env_var('MAIL_FROM', environ=environ),
    )


def send_mail(config, mail, reply_to, session=None):
    """Send one composed mail through Resend.

    Returns ``Success`` on a 2xx answer and the ``provider`` Failure for any
    other status. The provider's response body is logged but never handed
    back to the caller. Connection errors propagate to the caller.
    """
    http = session or requests
    payload = {
        'from': config.sender,
        'to': [config.mail_to],
        'reply_to': reply_to,
        'subject': mail.subject,
        'text': mail.text,
        'html': mail.html,
    }
    headers = {
        'Authorization': f'Bearer {config.api_key}',
        'Content-Type': 'application/json',
    }
    resp = http.post(RESEND_URL, json=payload, headers=headers)
    if not 200 <= resp.status_code < 300:
        logging.error(f'Resend error: {resp.status_code} {resp.text}')
        return DELIVERY_FAILED
    return Success()
