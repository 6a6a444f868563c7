# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import json
import time

import pytest
import requests

from tempmail_proxy.api import create_app
from tempmail_proxy.config import Settings
from tempmail_proxy.errors import ProviderError
from tempmail_proxy.memory import MB, MemoryMonitor
from tempmail_proxy.models import build_message
from tempmail_proxy.providers.base import GeneratedAddress, ProviderAdapter
from tempmail_proxy.rotator import ProviderRotator
from tempmail_proxy.service import TempMailService
from tempmail_proxy.sessions import SessionStore


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=None, headers=None, cookies=None, url='https://fake'):
        self.status_code = status_code
        if text is None:
            text = '' if json_data is None else json.dumps(json_data)
        self.content = text.encode('utf-8')
        self.headers = headers or {}
        self.cookies = cookies or {}
        self.url = url
        self.closed = False

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def close(self):
        self.closed = True


class FakeHttp:
    """Stands in for the cloudscraper session; replays queued responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append({'method': method, 'url': url, 'timeout': timeout, **kwargs})
        if not self.responses:
            raise requests.ConnectionError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeProvider(ProviderAdapter):
    """Scriptable adapter with an in-memory mailbox."""

    def __init__(self, name, fail=False, messages=None, list_error=None, read_error=None, delay=0):
        super().__init__(timeout=5, http=False)
        self.name = name
        self.fail = fail
        self.messages = list(messages or [])
        self.list_error = list_error
        self.read_error = read_error
        self.delay = delay
        self.generate_calls = 0

    def _generate(self):
        self.generate_calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            raise ProviderError(ProviderError.UNAVAILABLE, 'scripted failure')
        return GeneratedAddress(address=f'user{self.generate_calls}@{self.name}.test', credential={'secret': 'x'})

    def _list_messages(self, credential):
        if self.list_error:
            raise ProviderError(self.list_error)
        return list(self.messages)

    def _read_message(self, credential, message_id):
        if self.read_error:
            raise ProviderError(self.read_error)
        for message in self.messages:
            if message.id == message_id:
                return message
        raise ProviderError(ProviderError.NOT_FOUND, message_id)

    def _delete_message(self, credential, message_id):
        self._read_message(credential, message_id)
        self.messages = [m for m in self.messages if m.id != message_id]
        return True

    def _list_domains(self):
        return []


class FakeMemory:
    def __init__(self, rss_mb=100.0):
        self.rss_mb = rss_mb
        self.reads = 0

    def __call__(self):
        self.reads += 1
        return int(self.rss_mb * MB), int(50 * MB), int(800 * MB), int(10 * MB)


def make_message(message_id, date, subject='Hello'):
    return build_message(message_id, subject=subject, sender='Alice <alice@example.com>', date=date, text='body text')


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory():
    return FakeMemory()


@pytest.fixture
def settings():
    return Settings(max_sessions=3, session_max_age=3600, emergency_max_age=600, max_messages=5)


@pytest.fixture
def provider():
    return FakeProvider('alpha')


@pytest.fixture
def service(settings, provider, clock, memory):
    rotator = ProviderRotator([provider], max_attempts=3)
    return TempMailService(
        settings,
        rotator,
        store=SessionStore(clock=clock),
        monitor=MemoryMonitor(settings.memory_threshold_mb, reader=memory),
        clock=clock,
    )


@pytest.fixture
def client(service):
    app = create_app(service)
    app.config['TESTING'] = True
    return app.test_client()
