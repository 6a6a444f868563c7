# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import logging

from ..errors import ProviderError
from ..models import Domain, build_message
from .base import GeneratedAddress, ProviderAdapter
from .http import decode_body, decode_json, send

logger = logging.getLogger(__name__)


class OneSecMailProvider(ProviderAdapter):
    """1secmail: anonymous mailboxes addressed by login + domain. No deletion."""

    name = 'onesecmail'
    supports_delete = False
    base_url = 'https://www.1secmail.com/api/v1/'

    def _action(self, action, deadline, **params):
        logger.debug("[onesecmail] action=%s", action)
        return send(self.http, 'GET', self.base_url, deadline, params={'action': action, **params})

    def _generate(self):
        payload = decode_json(self._action('genRandomMailbox', self.deadline(), count=1))
        if not payload or '@' not in payload[0]:
            raise ProviderError(ProviderError.UNAVAILABLE, 'empty mailbox response')
        address = payload[0]
        login, domain = address.split('@', 1)
        return GeneratedAddress(address=address, credential={'login': login, 'domain': domain})

    def _list_messages(self, credential):
        payload = decode_json(self._action('getMessages', self.deadline(),
                                           login=credential['login'], domain=credential['domain']))
        return [
            build_message(item['id'], subject=item.get('subject'), sender=item.get('from'), date=item.get('date'))
            for item in payload or []
        ]

    def _read_message(self, credential, message_id):
        response = self._action('readMessage', self.deadline(), login=credential['login'],
                                domain=credential['domain'], id=message_id)
        # unknown ids come back as a 200 with a plain-text "Message not found"
        if decode_body(response).strip().lower().startswith('message not found'):
            raise ProviderError(ProviderError.NOT_FOUND, message_id)
        item = decode_json(response)
        if not item:
            raise ProviderError(ProviderError.NOT_FOUND, message_id)
        text, html = item.get('textBody') or '', item.get('htmlBody') or ''
        if not text and not html:
            text = item.get('body') or ''
        return build_message(
            item['id'],
            subject=item.get('subject'),
            sender=item.get('from'),
            date=item.get('date'),
            text=text,
            html=html,
        )

    def _list_domains(self):
        payload = decode_json(self._action('getDomainList', self.deadline()))
        return [Domain(name) for name in payload or []]
