"""Adapters that turn external analyzer output into core Tokens.

WHY: The merge core only speaks Token. Analyzer output arrives as MeCab
text or JSON records in a dictionary-specific tag scheme; adapters bridge
that into the core's contiguous, normalised token sequences.

HOW: token_adapter parses each format and delegates tag normalisation to
the dictionary profiles in wordgroup.core.profiles.

RULES:
- Adapters are pure data transformations; callers open the files
- Malformed input raises AdapterError, unknown tags do not
"""

from wordgroup.adapters.token_adapter import (
    documents_from_mecab,
    tokens_from_mecab,
    tokens_from_records,
)

__all__ = ["documents_from_mecab", "tokens_from_mecab", "tokens_from_records"]
