"""
DocTranslate: machine translation for markdown/text documents and JSON
description fields, with placeholder protection and glossary enforcement.
"""

__version__ = "1.0.0"
