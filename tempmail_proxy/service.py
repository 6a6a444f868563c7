# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import logging
import threading
import time
from datetime import datetime, timezone

from .errors import (
    CapacityExceeded,
    NotFound,
    Overloaded,
    ProviderError,
    Unauthorized,
    UpstreamFailure,
    ValidationError,
)
from .memory import MemoryMonitor
from .models import newest_first
from .providers import DemoProvider, build_providers
from .rotator import ProviderRotator
from .sessions import Session, SessionStore, is_valid_session_id

logger = logging.getLogger(__name__)


def _iso(timestamp):
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat(timespec='seconds')


class TempMailService:
    """Owns the session store, the provider rotator and the memory monitor.

    One instance is built per application and handed to the Flask app; there
    is no module-level state.
    """

    def __init__(self, settings, rotator, store=None, monitor=None, clock=time.time):
        self.settings = settings
        self.rotator = rotator
        self.clock = clock
        self.store = store if store is not None else SessionStore(clock=clock)
        self.monitor = monitor if monitor is not None else MemoryMonitor(settings.memory_threshold_mb)
        self.started_at = clock()
        self._stop = threading.Event()
        self._cleanup_thread = None

    @classmethod
    def from_settings(cls, settings):
        fallback = DemoProvider(timeout=settings.provider_timeout) if settings.demo_fallback else None
        rotator = ProviderRotator(
            build_providers(settings),
            policy=settings.rotation_policy,
            max_attempts=settings.provider_max_attempts,
            fallback_provider=fallback,
        )
        return cls(settings, rotator)

    def generate(self):
        if self.monitor.is_high():
            logger.warning("Rejecting generate: memory above %sMB", self.settings.memory_threshold_mb)
            raise Overloaded()
        if not self.store.reserve(self.settings.max_sessions):
            self.store.evict_expired(self.settings.session_max_age)
            if not self.store.reserve(self.settings.max_sessions):
                logger.warning("Rejecting generate: %d sessions active", len(self.store))
                raise CapacityExceeded()

        start_time = self.clock()
        try:
            adapter, generated = self.rotator.generate()
        except Exception:
            self.store.release()
            raise
        session = Session(
            address=generated.address,
            local_part=generated.local_part,
            domain=generated.domain,
            provider=adapter.name,
            credential=generated.credential,
            adapter=adapter,
        )
        session_id = self.store.insert(session, reserved=True)
        logger.info("Session created on %s in %.2fs", adapter.name, self.clock() - start_time)
        return {
            'address': session.address,
            'token': session_id,
            'sessionId': session_id,
            'domain': session.domain,
            'provider': session.provider,
            'expiresAt': _iso(session.created_at + self.settings.session_max_age),
        }

    def resolve(self, token):
        if not token:
            raise ValidationError("Missing token parameter")
        if not is_valid_session_id(token):
            raise ValidationError("Malformed token")
        session = self.store.get(token)
        if session is None:
            raise NotFound("Invalid or expired token")
        if self._expired(session):
            self.store.evict_expired(self.settings.session_max_age)
            raise NotFound("Invalid or expired token")
        return session

    def _expired(self, session):
        return self.clock() - session.created_at > self.settings.session_max_age

    def check_messages(self, token):
        session = self.resolve(token)
        result = session.adapter.list_messages(session.credential)
        if not result.ok:
            logger.warning("Inbox check failed for %s session: %s", session.provider, result.error_kind)
            return []
        messages = newest_first(result.data, self.settings.max_messages)
        self.store.touch(session.id, message_count=len(messages))
        return [message.summary() for message in messages]

    def read_message(self, token, message_id):
        session = self.resolve(token)
        result = session.adapter.read_message(session.credential, message_id)
        if not result.ok:
            if result.error_kind == ProviderError.UNAUTHORIZED:
                raise Unauthorized()
            raise NotFound("Message not found")
        self.store.touch(session.id)
        return result.data.to_dict()

    def delete_message(self, token, message_id):
        session = self.resolve(token)
        result = session.adapter.delete_message(session.credential, message_id)
        if result.ok:
            self.store.touch(session.id)
            return {'success': True, 'deleted': True}
        if result.error_kind == ProviderError.UNSUPPORTED:
            return {
                'success': True,
                'deleted': False,
                'reason': f"{session.provider} does not support deleting messages",
            }
        if result.error_kind == ProviderError.UNAUTHORIZED:
            raise Unauthorized()
        if result.error_kind == ProviderError.NOT_FOUND:
            raise NotFound("Message not found")
        raise UpstreamFailure("Failed to delete message")

    def list_domains(self):
        adapters = list(self.rotator.providers)
        if self.rotator.fallback_provider is not None:
            adapters.append(self.rotator.fallback_provider)
        for adapter in adapters:
            result = adapter.list_domains()
            if result.ok and result.data:
                return [domain.to_dict() for domain in result.data]
        return []

    def status(self, token=None):
        valid = False
        if token and is_valid_session_id(token):
            session = self.store.get(token)
            valid = session is not None and not self._expired(session)
        return {
            'valid': valid,
            'timestamp': _iso(self.clock()),
            'activeSessions': len(self.store),
            'maxSessions': self.settings.max_sessions,
        }

    def memory(self):
        sample = self.monitor.sample()
        return {
            'memory': sample,
            'isHigh': self.monitor.is_high(sample),
            'threshold': self.monitor.threshold_mb,
            'activeSessions': len(self.store),
            'maxSessions': self.settings.max_sessions,
            'timestamp': _iso(self.clock()),
        }

    def health(self):
        data = self.memory()
        data['status'] = 'degraded' if data['isHigh'] else 'healthy'
        data['uptime'] = round(self.clock() - self.started_at, 2)
        return data

    def run_cleanup(self):
        removed = self.store.evict_expired(self.settings.session_max_age)
        if self.monitor.is_high():
            removed += self.store.evict_emergency(self.settings.emergency_max_age)
            if self.monitor.is_high():
                logger.warning("Memory still above %sMB after emergency eviction", self.settings.memory_threshold_mb)
        removed += self.store.evict_excess(self.settings.max_sessions)
        logger.debug("Cleanup done: %d removed, %d active", removed, len(self.store))
        return removed

    def _cleanup_loop(self):
        while not self._stop.wait(self.settings.cleanup_interval):
            try:
                self.run_cleanup()
            except Exception:
                logger.exception("Session cleanup failed")

    def start_cleanup(self):
        if self._cleanup_thread is not None and self._cleanup_thread.is_alive():
            return self._cleanup_thread
        self._stop.clear()
        self._cleanup_thread = threading.Thread(target=self._cleanup_loop, name='session-cleanup', daemon=True)
        self._cleanup_thread.start()
        return self._cleanup_thread

    def stop_cleanup(self, timeout=None):
        self._stop.set()
        if self._cleanup_thread is not None:
            self._cleanup_thread.join(timeout)
            self._cleanup_thread = None
