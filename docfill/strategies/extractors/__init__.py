"""Concrete document text extractors."""

from docfill.strategies.extractors.word import WordTextExtractor

__all__ = [
    "WordTextExtractor",
]
