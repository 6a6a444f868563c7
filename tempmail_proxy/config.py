# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
"""Runtime settings read from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

KNOWN_PROVIDERS = ('mailtm', 'guerrillamail', 'onesecmail')
ROTATION_POLICIES = ('fallback', 'round_robin')

MIN_PROVIDER_TIMEOUT = 5.0
MAX_PROVIDER_TIMEOUT = 10.0


@dataclass
class Settings:
    host: str = '0.0.0.0'
    port: int = 5000
    memory_threshold_mb: float = 400.0
    max_sessions: int = 100
    session_max_age: int = 7200
    emergency_max_age: int = 1800
    cleanup_interval: int = 900
    max_messages: int = 50
    max_body_size: int = 10240
    provider_timeout: float = 8.0
    providers: tuple = field(default_factory=lambda: KNOWN_PROVIDERS)
    rotation_policy: str = 'fallback'
    provider_max_attempts: int = 3
    demo_fallback: bool = True
    mailtm_api: str = 'https://api.mail.tm'
    log_level: str = 'INFO'


def _get_int(env, name, default, minimum=0):
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _get_float(env, name, default):
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _get_bool(env, name, default):
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    lowered = raw.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _get_providers(env, name, default):
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    names = tuple(part.strip().lower() for part in raw.split(',') if part.strip())
    unknown = [n for n in names if n not in KNOWN_PROVIDERS]
    if unknown:
        raise ValueError(f"{name} contains unknown providers: {', '.join(unknown)}")
    if not names:
        raise ValueError(f"{name} must name at least one provider")
    # keep priority order, drop repeats
    return tuple(dict.fromkeys(names))


def load_settings(env=None, dotenv=True):
    """Build :class:`Settings` from ``env`` (defaults to ``os.environ``).

    Raises ``ValueError`` naming the offending variable when a value cannot
    be parsed.
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    defaults = Settings()
    policy = env.get('ROTATION_POLICY', defaults.rotation_policy).strip().lower()
    if policy not in ROTATION_POLICIES:
        raise ValueError(f"ROTATION_POLICY must be one of {', '.join(ROTATION_POLICIES)}, got {policy!r}")

    timeout = _get_float(env, 'PROVIDER_TIMEOUT', defaults.provider_timeout)
    timeout = min(max(timeout, MIN_PROVIDER_TIMEOUT), MAX_PROVIDER_TIMEOUT)

    return Settings(
        host=env.get('HOST', defaults.host),
        port=_get_int(env, 'PORT', defaults.port, minimum=1),
        memory_threshold_mb=_get_float(env, 'MEMORY_THRESHOLD_MB', defaults.memory_threshold_mb),
        max_sessions=_get_int(env, 'MAX_SESSIONS', defaults.max_sessions, minimum=1),
        session_max_age=_get_int(env, 'SESSION_MAX_AGE', defaults.session_max_age, minimum=1),
        emergency_max_age=_get_int(env, 'EMERGENCY_MAX_AGE', defaults.emergency_max_age, minimum=1),
        cleanup_interval=_get_int(env, 'CLEANUP_INTERVAL', defaults.cleanup_interval, minimum=1),
        max_messages=_get_int(env, 'MAX_MESSAGES', defaults.max_messages, minimum=1),
        max_body_size=_get_int(env, 'MAX_BODY_SIZE', defaults.max_body_size, minimum=1),
        provider_timeout=timeout,
        providers=_get_providers(env, 'PROVIDERS', defaults.providers),
        rotation_policy=policy,
        provider_max_attempts=_get_int(env, 'PROVIDER_MAX_ATTEMPTS', defaults.provider_max_attempts, minimum=1),
        demo_fallback=_get_bool(env, 'DEMO_FALLBACK', defaults.demo_fallback),
        mailtm_api=env.get('MAILTM_API', defaults.mailtm_api).rstrip('/'),
        log_level=env.get('LOG_LEVEL', defaults.log_level).upper(),
    )
