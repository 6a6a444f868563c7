# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
"""Choice of provider for new sessions: round-robin or ordered fallback."""

import itertools
import logging
import threading

from .errors import UpstreamFailure

logger = logging.getLogger(__name__)

ROUND_ROBIN = 'round_robin'
FALLBACK = 'fallback'


class ProviderRotator:
    def __init__(self, providers, policy=FALLBACK, max_attempts=3, fallback_provider=None):
        if not providers and fallback_provider is None:
            raise ValueError("at least one provider is required")
        if policy not in (ROUND_ROBIN, FALLBACK):
            raise ValueError(f"unknown rotation policy {policy!r}")
        self.providers = list(providers)
        self.policy = policy
        self.max_attempts = max_attempts
        self.fallback_provider = fallback_provider
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def _next_index(self):
        with self._lock:
            return next(self._counter) % len(self.providers)

    def next_provider(self):
        return self.providers[self._next_index()]

    def candidates(self):
        """Live providers to try for one generate request, in order, bounded by ``max_attempts``."""
        if not self.providers:
            return []
        if self.policy == ROUND_ROBIN:
            start = self._next_index()
            ordered = self.providers[start:] + self.providers[:start]
        else:
            ordered = list(self.providers)
        return ordered[:self.max_attempts]

    def generate(self):
        """Return ``(adapter, GeneratedAddress)`` from the first provider that succeeds.

        Raises ``UpstreamFailure`` when every candidate failed and there is no
        demo fallback.
        """
        for adapter in self.candidates():
            result = adapter.generate()
            if result.ok:
                logger.info("Generated address via %s", adapter.name)
                return adapter, result.data
            logger.warning("Provider %s failed to generate (%s), trying next", adapter.name, result.error_kind)
        if self.fallback_provider is not None:
            result = self.fallback_provider.generate()
            if result.ok:
                logger.warning("All live providers failed, serving a demo mailbox")
                return self.fallback_provider, result.data
        raise UpstreamFailure()
