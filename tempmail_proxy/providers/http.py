# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import gzip
import json
import time

import brotli
import cloudscraper
import requests
import zstandard as zstd
from cloudscraper.exceptions import CloudflareException

from ..errors import ProviderError

READ_CHUNK_SIZE = 16384

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36'

BROWSER_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'application/json, text/plain, */*',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept-Encoding': 'gzip, deflate, br, zstd',
    'Sec-Ch-Ua': '"Chromium";v="140", "Not=A?Brand";v="24", "Google Chrome";v="140"',
    'Sec-Ch-Ua-Mobile': '?0',
    'Sec-Ch-Ua-Platform': '"Windows"',
    'Sec-Fetch-Dest': 'empty',
    'Sec-Fetch-Mode': 'cors',
}


def create_http_session():
    scraper = cloudscraper.create_scraper()
    scraper.headers.update(BROWSER_HEADERS)
    return scraper


class Deadline:
    """Time budget shared by every outbound call of one adapter operation."""

    def __init__(self, seconds, clock=time.monotonic):
        self._clock = clock
        self._expires = clock() + seconds

    def remaining(self):
        left = self._expires - self._clock()
        if left <= 0:
            raise ProviderError(ProviderError.UNAVAILABLE, 'deadline exceeded')
        return left


def decode_body(response):
    """Return the response body as text, undoing gzip/br/zstd when the transport left it encoded."""
    content = response.content
    if not content:
        return ''
    encoding = (response.headers.get('content-encoding') or '').lower()
    try:
        if encoding == 'gzip':
            try:
                return gzip.decompress(content).decode('utf-8')
            except (OSError, EOFError):
                return content.decode('utf-8')
        if encoding == 'br':
            try:
                return brotli.decompress(content).decode('utf-8')
            except brotli.error:
                return content.decode('utf-8')
        if encoding == 'zstd':
            try:
                return zstd.ZstdDecompressor().decompress(content).decode('utf-8')
            except zstd.ZstdError:
                return content.decode('utf-8')
        return content.decode('utf-8')
    except UnicodeDecodeError:
        return content.decode('utf-8', errors='replace')


def decode_json(response):
    text = decode_body(response)
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ProviderError(ProviderError.UNAVAILABLE, f"invalid JSON from {response.url}: {e}") from e


def _read_body(response, url, deadline):
    """Download the body in chunks, giving up once ``deadline`` runs out."""
    chunks = []
    try:
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            chunks.append(chunk)
            deadline.remaining()
    except requests.RequestException as e:
        raise ProviderError(ProviderError.UNAVAILABLE, f"network error reading {url}: {e}") from e
    finally:
        response.close()
    # requests serves .content from _content once the stream is consumed
    response._content = b''.join(chunks)


def send(http, method, url, deadline, **kwargs):
    """Issue one request within ``deadline`` and map transport/HTTP failures to ``ProviderError``.

    The socket timeout only bounds each read, so the body is streamed and the
    deadline is checked between chunks to cap the whole download.
    """
    try:
        response = http.request(method, url, timeout=deadline.remaining(), stream=True, **kwargs)
    except requests.Timeout as e:
        raise ProviderError(ProviderError.UNAVAILABLE, f"timeout calling {url}") from e
    except requests.RequestException as e:
        raise ProviderError(ProviderError.UNAVAILABLE, f"network error calling {url}: {e}") from e
    except CloudflareException as e:
        raise ProviderError(ProviderError.UNAVAILABLE, f"cloudflare challenge calling {url}: {e}") from e
    status = response.status_code
    if status >= 400:
        response.close()
    if status in (401, 403):
        raise ProviderError(ProviderError.UNAUTHORIZED, f"{method} {url} -> {status}")
    if status == 404:
        raise ProviderError(ProviderError.NOT_FOUND, f"{method} {url} -> 404")
    if status >= 400:
        raise ProviderError(ProviderError.UNAVAILABLE, f"{method} {url} -> {status}")
    _read_body(response, url, deadline)
    return response
