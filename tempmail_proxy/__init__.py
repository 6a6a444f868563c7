# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
from .api import create_app
from .config import Settings, load_settings
from .service import TempMailService

__version__ = '1.0.0'

__all__ = ['Settings', 'TempMailService', 'create_app', 'load_settings']
