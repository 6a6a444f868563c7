# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import logging
from urllib.parse import quote

from ..errors import ProviderError
from ..models import Domain, build_message
from .base import GeneratedAddress, ProviderAdapter, random_local_part
from .http import decode_json, send

logger = logging.getLogger(__name__)


def _members(payload):
    if isinstance(payload, dict):
        return payload.get('hydra:member', [])
    if isinstance(payload, list):
        return payload
    return []


def _message_path(message_id):
    return f"/messages/{quote(message_id, safe='')}"


class MailTmProvider(ProviderAdapter):
    """mail.tm: real accounts with a JWT used as bearer token."""

    name = 'mailtm'

    def __init__(self, base_url='https://api.mail.tm', timeout=8.0, http=None):
        super().__init__(timeout=timeout, http=http)
        self.base_url = base_url.rstrip('/')

    def _request(self, method, path, deadline, token=None, **kwargs):
        headers = {'Accept': 'application/json'}
        if token:
            headers['Authorization'] = f'Bearer {token}'
        url = f"{self.base_url}{path}"
        logger.debug("[mailtm] %s %s", method, url)
        return send(self.http, method, url, deadline, headers=headers, **kwargs)

    def _active_domains(self, deadline):
        payload = decode_json(self._request('GET', '/domains', deadline))
        return [d for d in _members(payload) if d.get('isActive', True)]

    def _generate(self):
        deadline = self.deadline()
        domains = self._active_domains(deadline)
        if not domains:
            raise ProviderError(ProviderError.UNAVAILABLE, 'no active domains')
        domain = domains[0]['domain']
        address = f"{random_local_part()}@{domain}"
        password = random_local_part(12) + 'Xy!'
        account = decode_json(self._request('POST', '/accounts', deadline,
                                            json={'address': address, 'password': password}))
        token_data = decode_json(self._request('POST', '/token', deadline,
                                               json={'address': address, 'password': password}))
        token = (token_data or {}).get('token')
        if not token:
            raise ProviderError(ProviderError.UNAVAILABLE, 'no token in /token response')
        return GeneratedAddress(
            address=address,
            credential={'token': token, 'account_id': (account or {}).get('id'), 'password': password},
        )

    def _normalize(self, item):
        return build_message(
            item['id'],
            subject=item.get('subject'),
            sender=item.get('from'),
            date=item.get('createdAt'),
            text=item.get('text'),
            html=item.get('html'),
            intro=item.get('intro'),
            seen=item.get('seen', False),
        )

    def _list_messages(self, credential):
        response = self._request('GET', '/messages?page=1', self.deadline(), token=credential['token'])
        return [self._normalize(item) for item in _members(decode_json(response))]

    def _read_message(self, credential, message_id):
        response = self._request('GET', _message_path(message_id), self.deadline(), token=credential['token'])
        item = decode_json(response)
        if not item:
            raise ProviderError(ProviderError.NOT_FOUND, message_id)
        return self._normalize(item)

    def _delete_message(self, credential, message_id):
        self._request('DELETE', _message_path(message_id), self.deadline(), token=credential['token'])
        return True

    def _list_domains(self):
        return [
            Domain(d['domain'], is_active=d.get('isActive', True), is_private=d.get('isPrivate', False))
            for d in self._active_domains(self.deadline())
        ]
