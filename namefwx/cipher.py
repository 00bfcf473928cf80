"""
Filename cipher front-end for hosts that pick a name-encryption mode.

`NameCipher` turns a user password into a codec key once, then exposes the
per-segment and whole-path operations a storage layer needs. Only the
``custom`` obfuscation mode and the ``off`` pass-through are provided here;
other strategies belong to the host.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .main import namefwx

DEFAULT_SALT = b"namefwx.name.salt.v1"
KDF_SALT_MIN = 16
KEY_LEN = 32


class NameEncryptionMode(enum.Enum):
    OFF = "off"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: Union[str, "NameEncryptionMode"]) -> "NameEncryptionMode":
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        choices = ", ".join(mode.value for mode in cls)
        raise ValueError(f"Unknown file name encryption mode {name!r} (choose from: {choices})")


def derive_name_key(password: str, salt: Union[str, bytes] = b"", iterations: Optional[int] = None) -> str:
    """
    Stretch a password into the hex key string fed to the codec.

    An empty salt selects ``DEFAULT_SALT`` so two hosts configured with only a
    password agree on the key.
    """
    if not isinstance(password, str):
        raise TypeError(f"Unsupported password type: {type(password)!r}")
    if not password:
        raise ValueError("Password required for custom name obfuscation")
    salt_bytes = salt.encode("utf-8") if isinstance(salt, str) else bytes(salt)
    if not salt_bytes:
        salt_bytes = DEFAULT_SALT
    if len(salt_bytes) < KDF_SALT_MIN:
        raise ValueError(f"Name key salt must be at least {KDF_SALT_MIN} bytes")
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LEN,
        salt=salt_bytes,
        iterations=iterations or namefwx.KDF_ITERATIONS
    )
    return kdf.derive(password.encode("utf-8")).hex()


@dataclass(frozen=True)
class NameCipher:
    mode: NameEncryptionMode
    key: str = field(repr=False)
    sep: str = "/"
    verify: Optional[bool] = None

    @classmethod
    def create(
        cls,
        mode: Union[str, NameEncryptionMode],
        password: str = "",
        salt: Union[str, bytes] = b"",
        *,
        sep: str = "/",
        verify: Optional[bool] = None,
        iterations: Optional[int] = None
    ) -> "NameCipher":
        parsed = NameEncryptionMode.parse(mode)
        key = ""
        if parsed is NameEncryptionMode.CUSTOM:
            key = derive_name_key(password, salt, iterations)
        return cls(parsed, key, sep=sep, verify=verify)

    # ---------- Segments ---------------------------------------------------

    def obfuscate_segment(self, segment: str) -> str:
        if self.mode is NameEncryptionMode.OFF:
            return segment
        return namefwx.encode(segment, self.key)

    def deobfuscate_segment(self, segment: str) -> str:
        if self.mode is NameEncryptionMode.OFF:
            return segment
        return namefwx.decode(segment, self.key, verify=self.verify)

    # ---------- Paths ------------------------------------------------------

    def encrypt_file_name(self, name: str) -> str:
        if self.mode is NameEncryptionMode.OFF:
            return name
        return namefwx.encode_path(name, self.key, sep=self.sep)

    def decrypt_file_name(self, name: str) -> str:
        if self.mode is NameEncryptionMode.OFF:
            return name
        return namefwx.decode_path(name, self.key, sep=self.sep, verify=self.verify)

    # directory names use the same per-segment transform as file names
    encrypt_dir_name = encrypt_file_name
    decrypt_dir_name = decrypt_file_name
