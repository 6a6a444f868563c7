# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import logging
import random
import string
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import ProviderError
from .http import Deadline, create_http_session

logger = logging.getLogger(__name__)


@dataclass
class ProviderResult:
    ok: bool
    data: Any = None
    error_kind: Optional[str] = None

    @classmethod
    def success(cls, data=None):
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, kind):
        return cls(ok=False, error_kind=kind)


@dataclass
class GeneratedAddress:
    address: str
    credential: Any

    @property
    def local_part(self):
        return self.address.split('@', 1)[0]

    @property
    def domain(self):
        return self.address.split('@', 1)[1] if '@' in self.address else ''


def random_local_part(length=10):
    return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))


class ProviderAdapter:
    """Common capability interface for every mail provider.

    Subclasses implement the underscored hooks and raise ``ProviderError``
    on failure; the public methods never raise, they return a
    :class:`ProviderResult` and log the failure.
    """

    name = 'base'
    supports_delete = True

    def __init__(self, timeout=8.0, http=None):
        self.timeout = timeout
        self.http = http if http is not None else create_http_session()

    def deadline(self):
        return Deadline(self.timeout)

    def generate(self):
        return self._call('generate', self._generate)

    def list_messages(self, credential):
        return self._call('list_messages', self._list_messages, credential)

    def read_message(self, credential, message_id):
        return self._call('read_message', self._read_message, credential, message_id)

    def delete_message(self, credential, message_id):
        if not self.supports_delete:
            return ProviderResult.failure(ProviderError.UNSUPPORTED)
        return self._call('delete_message', self._delete_message, credential, message_id)

    def list_domains(self):
        return self._call('list_domains', self._list_domains)

    def _call(self, operation, func, *args):
        try:
            return ProviderResult.success(func(*args))
        except ProviderError as e:
            logger.warning("[%s] %s failed: %s", self.name, operation, e)
            return ProviderResult.failure(e.kind)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            # provider changed its payload shape
            logger.warning("[%s] %s returned an unexpected payload: %r", self.name, operation, e)
            return ProviderResult.failure(ProviderError.UNAVAILABLE)

    def _generate(self):
        raise NotImplementedError

    def _list_messages(self, credential):
        raise NotImplementedError

    def _read_message(self, credential, message_id):
        raise NotImplementedError

    def _delete_message(self, credential, message_id):
        raise NotImplementedError

    def _list_domains(self):
        raise NotImplementedError
