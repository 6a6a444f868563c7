# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import threading

from ..errors import ProviderError
from ..models import Domain, build_message
from .base import GeneratedAddress, ProviderAdapter, random_local_part

DEMO_DOMAIN = 'demo.tempmail.local'

WELCOME_HTML = (
    '<p>Every live mail provider is unreachable right now, so this inbox is a '
    '<b>demo mailbox</b>.</p><p>It cannot receive real mail. Generate a new '
    'address later to get a working one.</p>'
)


class DemoProvider(ProviderAdapter):
    """In-process mailbox used when every live provider has failed. Makes no network calls."""

    name = 'demo'

    def __init__(self, timeout=8.0):
        super().__init__(timeout=timeout, http=False)
        self._lock = threading.Lock()

    def _generate(self):
        address = f"{random_local_part()}@{DEMO_DOMAIN}"
        welcome = build_message(
            'welcome',
            subject='Welcome to your demo inbox',
            sender={'address': f'noreply@{DEMO_DOMAIN}', 'name': 'TempMail'},
            html=WELCOME_HTML,
        )
        return GeneratedAddress(address=address, credential={'mailbox': [welcome]})

    def _list_messages(self, credential):
        with self._lock:
            return list(credential['mailbox'])

    def _find(self, credential, message_id):
        for message in credential['mailbox']:
            if message.id == message_id:
                return message
        raise ProviderError(ProviderError.NOT_FOUND, message_id)

    def _read_message(self, credential, message_id):
        with self._lock:
            message = self._find(credential, message_id)
            message.seen = True
        return message

    def _delete_message(self, credential, message_id):
        with self._lock:
            credential['mailbox'].remove(self._find(credential, message_id))
        return True

    def _list_domains(self):
        return [Domain(DEMO_DOMAIN)]
