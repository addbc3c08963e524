"""Tokenizer for shell command lines.

Splits a raw line like: set "hello world" 3
into tokens, treating double-quoted runs as a single token.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r'(?:[^\s"]+|"[^"]*")+')


class LineTokenizer:
    """Quote-aware tokenizer for command lines.

    A token is a maximal run of non-space, non-quote characters and
    double-quoted runs with no whitespace between them. Quotes are stripped
    from the resulting token, so:
        foo"bar baz"
    becomes the single token 'foobar baz'. There is no escape mechanism.
    """

    def __init__(self, pattern: re.Pattern = TOKEN_PATTERN):
        """Initialize tokenizer.

        Args:
            pattern: Compiled pattern matching one raw token
        """
        self.pattern = pattern

    def tokenize(self, line: str) -> Optional[List[str]]:
        """Tokenize a command line.

        Args:
            line: Raw input line (e.g., 'create "/1/0" 42')

        Returns:
            List of tokens, or None if the line has no tokens at all
        """
        groups = self.pattern.findall(line)
        if not groups:
            return None

        tokens = [self._remove_quotes(group) for group in groups]
        logger.debug(f"Tokenized {line!r} -> {tokens!r}")
        return tokens

    def _remove_quotes(self, item: str) -> str:
        """Strip every double quote from a raw token."""
        return item.replace('"', '')


def tokenize_line(line: str) -> Optional[List[str]]:
    """Tokenize a command line.

    Convenience function that creates a tokenizer and splits the line.

    Args:
        line: Raw input line

    Returns:
        List of tokens, or None for an empty or whitespace-only line

    Example:
        >>> tokenize_line('set "hello world" 3')
        ['set', 'hello world', '3']
    """
    tokenizer = LineTokenizer()
    return tokenizer.tokenize(line)
