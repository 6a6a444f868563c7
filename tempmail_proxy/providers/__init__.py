# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
from .base import GeneratedAddress, ProviderAdapter, ProviderResult
from .demo import DemoProvider
from .guerrillamail import GuerrillaMailProvider
from .mailtm import MailTmProvider
from .onesecmail import OneSecMailProvider

__all__ = [
    'DemoProvider',
    'GeneratedAddress',
    'GuerrillaMailProvider',
    'MailTmProvider',
    'OneSecMailProvider',
    'ProviderAdapter',
    'ProviderResult',
    'build_providers',
]


def build_providers(settings):
    """Instantiate the live adapters named in ``settings.providers``, in priority order."""
    factories = {
        'mailtm': lambda: MailTmProvider(base_url=settings.mailtm_api, timeout=settings.provider_timeout),
        'guerrillamail': lambda: GuerrillaMailProvider(timeout=settings.provider_timeout),
        'onesecmail': lambda: OneSecMailProvider(timeout=settings.provider_timeout),
    }
    return [factories[name]() for name in settings.providers]
