"""Tokenizer for turning noisy release names into TMDB search tokens.

Scene-release names carry a lot of metadata (resolution, codec, source,
release group) next to the actual title.  The tokenizer splits a name
on the usual separators and drops every token that is known noise, so
that what remains is, front to back, the most to least specific part of
the title.
"""
import logging
import re

log = logging.getLogger(__name__)

# Characters a release name is split on
SEPARATORS = r'[ \-:@.]'

# Tokens dropped on a case-insensitive exact match
NOISE_TOKENS = frozenset({
    # Source
    'dvd', 'bluray', 'webrip', 'youtube', 'download', 'web', 'tv', 'tvrip',
    'pdtv', 'remux',
    # Quality
    'uhd', 'hd', '1080p', '1080i', '2160p', '10bit', '12bit', 'hdr',
    # Codec
    'x264', 'x265', 'h265', 'hevc', 'xvid',
    # Audio
    'dts', 'aac5', 'aac', 'ac3', 'atmos', 'td', 'ma',
    # Other common tags
    'internal', 'sample',
})

# Tokens dropped when one of these patterns matches the whole token
NOISE_PATTERNS = [
    # Season specifier (S01)
    re.compile(r's\d{2}', re.IGNORECASE),
]

# Bracketed tags, including the halves of a tag split on a space
_OPENING = ('[', '(', '{')
_CLOSING = (']', ')', '}')


def is_noise(token: str) -> bool:
    """Check whether a single token is release metadata rather than title."""
    if token.lower() in NOISE_TOKENS:
        return True
    if token.startswith(_OPENING) or token.endswith(_CLOSING):
        return True
    return any(pattern.fullmatch(token) for pattern in NOISE_PATTERNS)


def tokenize(name: str) -> list[str]:
    """
    Split a file or directory name into significant tokens.

    Args:
        name: Raw file or directory name

    Returns:
        Tokens in their original order, noise removed
    """
    tokens = [
        token for token in re.split(SEPARATORS, name)
        if token and not is_noise(token)
    ]
    log.debug("Tokens for %r: %s", name, tokens)
    return tokens


def search_tokens(file_name: str) -> list[str]:
    """Tokenize a file name and drop the trailing extension token."""
    return tokenize(file_name)[:-1]
