"""
Translation provider implementations.

Providers:
    - google: Google Translate (translate_a/single endpoint)
"""
from .base import TranslationProvider
from .google import GoogleTranslateProvider

__all__ = ['TranslationProvider', 'GoogleTranslateProvider']
