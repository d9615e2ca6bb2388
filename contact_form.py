# Validation and formatting for contact form submissions
# Pure functions only: no Flask, no network, no environment access

import json
import re
from dataclasses import dataclass, field

# --- RESULT TYPES ---
STATUS_BY_KIND = {
    'validation': 400,
    'method': 405,
    'config': 500,
    'internal': 500,
    'provider': 502,
}


@dataclass(frozen=True)
class Success:
    payload: dict = field(default_factory=lambda: {'ok': True})

    ok = True

    @property
    def status(self):
        return 200

    def body(self):
        return self.payload


@dataclass(frozen=True)
class Failure:
    kind: str
    message: str

    ok = False

    @property
    def status(self):
        return STATUS_BY_KIND[self.kind]

    def body(self):
        return {'error': self.message}


METHOD_NOT_ALLOWED = Failure('method', 'Method Not Allowed')
CONFIG_INCOMPLETE = Failure('config', 'Serverkonfiguration unvollständig.')
SERVER_ERROR = Failure('internal', 'Serverfehler.')
DELIVERY_FAILED = Failure('provider', 'Mailversand fehlgeschlagen.')

# --- VALIDATION RULES ---
EMAIL_RE = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
LINK_RE = re.compile(r'https?://', re.IGNORECASE)
MIN_MESSAGE_LENGTH = 20
MAX_LINKS = 2  # more links than this is treated as spam

MISSING_FIELDS = 'Bitte Pflichtfelder ausfüllen und Datenschutzzustimmung erteilen.'
INVALID_EMAIL = 'Bitte eine gültige E-Mail-Adresse eingeben.'
MESSAGE_TOO_SHORT = 'Bitte eine aussagekräftige Nachricht (mind. 20 Zeichen) eingeben.'
TOO_MANY_LINKS = 'Zu viele Links in der Nachricht.'


@dataclass(frozen=True)
class Submission:
    name: str
    email: str
    phone: str
    message: str
    consent: bool


@dataclass(frozen=True)
class ComposedMail:
    subject: str
    text: str
    html: str


def parse_body(raw):
    """Decode a raw request body into a dict.

    Empty bodies and JSON values that are not objects count as ``{}``.
    Malformed JSON raises ``ValueError`` so the caller can report it as a
    server error.
    """
    if raw is None:
        return {}
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8')
    if not raw.strip():
        return {}
    data = json.loads(raw)
    return data if isinstance(data, dict) else {}


def _text(value):
    return str(value).strip() if value else ''


def normalize_submission(data):
    return Submission(
        name=_text(data.get('name')),
        email=_text(data.get('email')),
        phone=_text(data.get('phone')),
        message=_text(data.get('message')),
        consent=bool(data.get('consent')),
    )


def is_valid_email(email):
    return EMAIL_RE.fullmatch(email) is not None


def count_links(message):
    return len(LINK_RE.findall(message))


def validate_submission(submission, max_links=MAX_LINKS):
    """Apply the rules in order and return the first Failure, or None."""
    if not (submission.name and submission.email and submission.message and submission.consent):
        return Failure('validation', MISSING_FIELDS)
    if not is_valid_email(submission.email):
        return Failure('validation', INVALID_EMAIL)
    if len(submission.message) < MIN_MESSAGE_LENGTH:
        return Failure('validation', MESSAGE_TOO_SHORT)
    if count_links(submission.message) > max_links:
        return Failure('validation', TOO_MANY_LINKS)
    return None


# --- EMAIL CONTENT ---
_HTML_ESCAPES = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
}


def escape_html(s):
    return re.sub(r'[&<>"\']', lambda m: _HTML_ESCAPES[m.group(0)], s or '')


def compose_mail(submission):
    phone = submission.phone or '-'
    consent = 'ja' if submission.consent else 'nein'
    subject = f'Neue BU-Anfrage von {submission.name}'
    text = (
        'Neue Anfrage über die Website:\n'
        '\n'
        f'Name:    {submission.name}\n'
        f'E-Mail:  {submission.email}\n'
        f'Telefon: {phone}\n'
        '\n'
        'Nachricht:\n'
        f'{submission.message}\n'
        '\n'
        f'Einwilligung Datenschutz: {consent}'
    )
    message_html = escape_html(submission.message).replace('\n', '<br>')
    html = (
        '<h2>Neue BU-Anfrage</h2>\n'
        f'<p><strong>Name:</strong> {escape_html(submission.name)}</p>\n'
        f'<p><strong>E-Mail:</strong> {escape_html(submission.email)}</p>\n'
        f'<p><strong>Telefon:</strong> {escape_html(phone)}</p>\n'
        f'<p><strong>Nachricht:</strong><br>{message_html}</p>\n'
        f'<p><strong>Einwilligung Datenschutz:</strong> {consent}</p>'
    )
    return ComposedMail(subject=subject, text=text, html=html)
