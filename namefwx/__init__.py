"""
NAMEFWX - Keyed, reversible obfuscation for file and directory names

This module provides easy-to-use functions for turning path segments into
filename-safe obfuscated strings and back again. The same name and key always
produce the same output, so obfuscated names can be looked up without
decoding every entry.
"""

from .main import *
from .cipher import NameCipher, NameEncryptionMode, derive_name_key
from .version import __version__
from .errors import (
    IntegrityError,
    InvalidIVCharacterError,
    NameCodecError,
    RepertoireConfigError,
    ShortInputError,
)

# ============================================================================
# SEGMENT FUNCTIONS (Name → Obfuscated Name)
# ============================================================================

def encode(text: str, key):
    """
    Obfuscate a single file or directory name.

    Args:
        text: Plain name (one path segment, no separators)
        key: Secret key (str or bytes)

    Returns:
        Two IV characters followed by the shuffled and shifted name

    Note:
        - Deterministic: same name + key → same output
        - Empty names stay empty
        - Characters outside the repertoire (emoji, control chars) pass through
          unchanged but may be moved
    """
    return namefwx.encode(text, key)


def decode(obfuscated: str, key, verify: bool | None = None):
    """
    Recover a name produced by encode().

    Args:
        obfuscated: Output of encode()
        key: The key used to encode
        verify: Re-encode and compare (defaults to $NAMEFWX_VERIFY, on)

    Raises:
        ShortInputError: fewer characters than the IV prefix
        InvalidIVCharacterError: IV prefix is not made of repertoire characters
        IntegrityError: wrong key or corrupted input (verify only)
    """
    return namefwx.decode(obfuscated, key, verify=verify)


# ============================================================================
# PATH FUNCTIONS
# ============================================================================

def encode_path(path: str, key, sep: str = "/"):
    """
    Obfuscate every segment of a path independently.

    Args:
        path: Plain path such as ``"docs/report.pdf"``
        key: Secret key (str or bytes)
        sep: Single-character separator that is not a repertoire member

    Returns:
        The path with each segment encoded and separators kept in place

    Note:
        - Empty segments (leading, trailing or doubled separators) stay empty
        - Changing one segment never changes the encoding of another
    """
    return namefwx.encode_path(path, key, sep=sep)


def decode_path(path: str, key, sep: str = "/", verify: bool | None = None):
    """
    Recover a path produced by encode_path().

    Args:
        path: Output of encode_path()
        key: The key used to encode
        sep: The separator used to encode
        verify: Re-encode and compare each segment (defaults to $NAMEFWX_VERIFY, on)

    Returns:
        The original path

    Raises:
        NameCodecError: the first segment that fails to decode
        ValueError: invalid separator
    """
    return namefwx.decode_path(path, key, sep=sep, verify=verify)


def encode_names(names, key, workers: int | None = None):
    """
    Obfuscate many names across a thread pool.

    Args:
        names: Iterable of plain names
        key: Secret key (str or bytes)
        workers: Thread count (defaults to $NAMEFWX_WORKERS, then the CPU count)

    Returns:
        List of encoded names in input order
    """
    return namefwx.encode_names(names, key, workers=workers)


def decode_names(names, key, workers: int | None = None, verify: bool | None = None):
    """
    Recover many names across a thread pool.

    Args:
        names: Iterable of encoded names
        key: The key used to encode
        workers: Thread count (defaults to $NAMEFWX_WORKERS, then the CPU count)
        verify: Re-encode and compare (defaults to $NAMEFWX_VERIFY, on)

    Returns:
        List of decoded names in input order

    Note:
        - The first failing name raises; no partial list is returned
    """
    return namefwx.decode_names(names, key, workers=workers, verify=verify)


def default_repertoire():
    """
    Shared character repertoire used when none is passed explicitly.

    Returns:
        Immutable Repertoire, built once per process

    Note:
        - Safe to call from many threads on first use
    """
    return namefwx.default_repertoire()
