# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
"""Normalized message/domain shapes and the helpers that build them from provider payloads."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parseaddr, parsedate_to_datetime

from bs4 import BeautifulSoup

INTRO_LENGTH = 120
UNKNOWN_SENDER = 'Unknown'

_DATE_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M',
)


@dataclass
class Message:
    id: str
    subject: str = ''
    from_address: str = UNKNOWN_SENDER
    from_name: str = ''
    date: str = field(default_factory=lambda: now_iso())
    text: str = ''
    html: str = ''
    intro: str = ''
    seen: bool = False

    def summary(self):
        return {
            'id': self.id,
            'subject': self.subject,
            'from': {'address': self.from_address, 'name': self.from_name},
            'date': self.date,
            'intro': self.intro,
            'seen': self.seen,
        }

    def to_dict(self):
        data = self.summary()
        data['text'] = self.text
        data['html'] = self.html
        return data


@dataclass
class Domain:
    domain: str
    is_active: bool = True
    is_private: bool = False

    def to_dict(self):
        return {'domain': self.domain, 'isActive': self.is_active, 'isPrivate': self.is_private}


def now_iso():
    return datetime.now(timezone.utc).isoformat(timespec='seconds')


def to_iso(value):
    """Coerce the date/time representations providers use into an ISO-8601 UTC string.

    Unix timestamps (int, float or numeric strings), ISO strings, RFC 2822
    dates and ``YYYY-MM-DD HH:MM:SS`` are understood. Anything else falls back
    to the current time.
    """
    if value is None or value == '':
        return now_iso()
    if isinstance(value, bool):
        return now_iso()
    if isinstance(value, (int, float)):
        return _from_timestamp(value)
    text = str(value).strip()
    if re.fullmatch(r'\d+(\.\d+)?', text):
        return _from_timestamp(float(text))
    try:
        parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        parsed = None
    if parsed is None:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError):
            return now_iso()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).isoformat(timespec='seconds')


def _from_timestamp(value):
    # guerrillamail and friends occasionally send milliseconds
    if value > 1e11:
        value = value / 1000
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc).isoformat(timespec='seconds')
    except (OverflowError, OSError, ValueError):
        return now_iso()


def html_to_text(html):
    if not html:
        return ''
    soup = BeautifulSoup(html, 'html.parser')
    for tag in soup(['script', 'style']):
        tag.decompose()
    text = soup.get_text(separator='\n')
    lines = [line.strip() for line in text.splitlines()]
    return '\n'.join(line for line in lines if line)


def make_intro(text):
    collapsed = ' '.join(text.split())
    if len(collapsed) <= INTRO_LENGTH:
        return collapsed
    return collapsed[:INTRO_LENGTH].rstrip() + '...'


def split_sender(raw):
    """Return ``(address, name)`` from either a mail.tm style dict or a ``Name <addr>`` string."""
    if isinstance(raw, dict):
        address = (raw.get('address') or '').strip()
        name = (raw.get('name') or '').strip()
        return address or UNKNOWN_SENDER, name
    if not raw:
        return UNKNOWN_SENDER, ''
    name, address = parseaddr(str(raw))
    if not address:
        return str(raw).strip() or UNKNOWN_SENDER, ''
    return address, name


def build_message(message_id, subject=None, sender=None, date=None, text=None, html=None,
                  intro=None, seen=False):
    """Normalize one provider message; every absent field gets its default."""
    if isinstance(html, list):
        html = ''.join(part for part in html if part)
    html = html or ''
    text = text or ''
    if not text and html:
        text = html_to_text(html)
    from_address, from_name = split_sender(sender)
    return Message(
        id=str(message_id),
        subject=subject or '',
        from_address=from_address,
        from_name=from_name,
        date=to_iso(date),
        text=text,
        html=html,
        intro=intro or make_intro(text),
        seen=bool(seen),
    )


def newest_first(messages, limit):
    """Drop repeated ids, order newest first (stable for equal dates) and cap at ``limit``."""
    seen_ids = set()
    unique = []
    for message in messages:
        if message.id in seen_ids:
            continue
        seen_ids.add(message.id)
        unique.append(message)
    unique.sort(key=lambda m: m.date, reverse=True)
    return unique[:limit]
