"""
Exception types raised by the namefwx codec.

Every decode failure is a `NameCodecError` (a `ValueError`), so callers that
already guard filename handling with ``except ValueError`` keep working.
"""


class NameCodecError(ValueError):
    """Base class for obfuscated-name parse and verification failures."""


class ShortInputError(NameCodecError):
    """Raised when an obfuscated name is too short to carry its IV prefix."""

    def __init__(self, length: int, required: int):
        super().__init__(
            f"obfuscated string too short ({length} chars), cannot extract {required} IV characters"
        )
        self.length = length
        self.required = required


class InvalidIVCharacterError(NameCodecError):
    """Raised when an IV prefix character is outside the repertoire."""

    def __init__(self, char: str):
        super().__init__(f"IV character {char!r} (U+{ord(char):04X}) not in character set")
        self.char = char


class IntegrityError(NameCodecError):
    """Raised when the decoded name does not re-encode to its input (wrong key or corruption)."""


class RepertoireConfigError(RuntimeError):
    """Raised when a character repertoire would be empty."""
