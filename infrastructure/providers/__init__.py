from .base import RateSource
from .frankfurter import FrankfurterProvider
from .registry import SourceRegistry

__all__ = ['RateSource', 'FrankfurterProvider', 'SourceRegistry']
