# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import logging

from ..errors import ProviderError
from ..models import Domain, build_message
from .base import GeneratedAddress, ProviderAdapter
from .http import decode_json, send

logger = logging.getLogger(__name__)


class GuerrillaMailProvider(ProviderAdapter):
    """Guerrilla Mail: mailbox bound to a ``sid_token`` plus the PHPSESSID cookie."""

    name = 'guerrillamail'
    base_url = 'https://api.guerrillamail.com/ajax.php'
    domains = ('sharklasers.com', 'guerrillamail.com', 'guerrillamail.net', 'grr.la')

    def _call_api(self, function, deadline, credential=None, **params):
        params = {'f': function, **params}
        cookies = None
        if credential:
            params['sid_token'] = credential['sid_token']
            cookies = credential.get('cookies') or None
        logger.debug("[guerrillamail] f=%s", function)
        return send(self.http, 'GET', self.base_url, deadline, params=params, cookies=cookies,
                    headers={'Referer': 'https://www.guerrillamail.com/'})

    def _generate(self):
        response = self._call_api('get_email_address', self.deadline(), lang='en')
        data = decode_json(response) or {}
        address, sid_token = data.get('email_addr'), data.get('sid_token')
        if not address or not sid_token:
            raise ProviderError(ProviderError.UNAVAILABLE, 'missing email_addr/sid_token')
        return GeneratedAddress(
            address=address,
            credential={'sid_token': sid_token, 'cookies': dict(response.cookies)},
        )

    def _list_messages(self, credential):
        data = decode_json(self._call_api('get_email_list', self.deadline(), credential, offset=0)) or {}
        return [
            build_message(
                item['mail_id'],
                subject=item.get('mail_subject'),
                sender=item.get('mail_from'),
                date=item.get('mail_timestamp'),
                intro=item.get('mail_excerpt'),
                seen=str(item.get('mail_read', '0')) == '1',
            )
            for item in data.get('list', [])
        ]

    def _read_message(self, credential, message_id):
        item = decode_json(self._call_api('fetch_email', self.deadline(), credential, email_id=message_id))
        # unknown ids yield a literal ``false``
        if not item:
            raise ProviderError(ProviderError.NOT_FOUND, message_id)
        return build_message(
            item['mail_id'],
            subject=item.get('mail_subject'),
            sender=item.get('mail_from'),
            date=item.get('mail_timestamp'),
            html=item.get('mail_body'),
            intro=item.get('mail_excerpt'),
            seen=str(item.get('mail_read', '0')) == '1',
        )

    def _delete_message(self, credential, message_id):
        data = decode_json(self._call_api('del_email', self.deadline(), credential,
                                          **{'email_ids[]': message_id})) or {}
        deleted = [str(i) for i in data.get('deleted_ids', [])]
        if str(message_id) not in deleted:
            raise ProviderError(ProviderError.NOT_FOUND, message_id)
        return True

    def _list_domains(self):
        return [Domain(name) for name in self.domains]
