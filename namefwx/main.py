# NAMEFWX OBFUSCATION ENGINE ->

import logging as _logging_module
import os as _os_module

from .errors import (
    IntegrityError,
    InvalidIVCharacterError,
    NameCodecError,
    RepertoireConfigError,
    ShortInputError,
)

logger = _logging_module.getLogger(__name__)
logger.addHandler(_logging_module.NullHandler())


class namefwx:
    import concurrent.futures
    import threading
    import typing
    import os
    from cryptography.hazmat.primitives import hashes

    @staticmethod
    def _env_int(name: str) -> "namefwx.typing.Optional[int]":
        value = _os_module.getenv(name)
        if not value:
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return None
        if parsed <= 0:
            return None
        return parsed

    @staticmethod
    def _env_flag(name: str, default: bool = True) -> bool:
        raw = _os_module.getenv(name)
        if raw is None or not raw.strip():
            return default
        return raw.strip().lower() not in ("0", "false", "no", "off")

    ENGINE_VERSION = "1.0.0"
    IV_LENGTH = 2
    IV_INFO = b'namefwx.iv.v1'
    PERM_INFO = b'namefwx.perm.v1'
    SHIFT_INFO = b'namefwx.shift.v1'
    UNIFIED_CLASS_TAG = b'U'
    ENABLE_VERIFY = _env_flag("NAMEFWX_VERIFY")
    _KDF_ITERS_ENV = _env_int("NAMEFWX_KDF_ITERS")
    KDF_ITERATIONS = _KDF_ITERS_ENV or 200_000
    DEFAULT_WORKERS = _env_int("NAMEFWX_WORKERS")
    _CPU_COUNT = max(1, os.cpu_count() or 1)
    _MASK64 = (1 << 64) - 1

    # Filename-safe ASCII punctuation; excludes / \ : * ? " < > | and '
    SAFE_PUNCTUATION = " !#$%&()+,-.;=@[]^_`{}~"
    DEFAULT_RANGES = (
        (ord('a'), ord('z')),
        (ord('A'), ord('Z')),
        (ord('0'), ord('9')),
        (0x4E00, 0x9FFF),  # CJK Unified Ideographs
        (0x3040, 0x309F),  # Hiragana
        (0x30A0, 0x30FF),  # Katakana
        (0xAC00, 0xD7A3),  # Hangul Syllables
    )

    class Repertoire:
        """
        Ordered, deduplicated set of characters an obfuscated name may contain.

        Code points are sorted ascending and numbered densely from zero, so the
        same construction rules always yield the same ordinals. Instances are
        never mutated after ``__init__``.
        """

        __slots__ = ("name", "class_tag", "_chars", "_index")

        def __init__(
            self,
            ranges: "namefwx.typing.Optional[namefwx.typing.Iterable[namefwx.typing.Tuple[int, int]]]" = None,
            extra: "namefwx.typing.Optional[str]" = None,
            *,
            name: str = "unified",
            class_tag: "namefwx.typing.Optional[bytes]" = None
        ):
            if ranges is None:
                ranges = namefwx.DEFAULT_RANGES
            if extra is None:
                extra = namefwx.SAFE_PUNCTUATION
            if class_tag is None:
                class_tag = namefwx.UNIFIED_CLASS_TAG
            points = set()
            for start, end in ranges:
                points.update(range(start, end + 1))
            points.update(ord(ch) for ch in extra)
            chars = tuple(
                chr(cp) for cp in sorted(points)
                if not namefwx.Repertoire._is_control(cp)
            )
            if not chars:
                raise RepertoireConfigError(
                    f"character repertoire '{name}' is empty, cannot encode or decode names"
                )
            object.__setattr__(self, "name", name)
            object.__setattr__(self, "class_tag", bytes(class_tag))
            object.__setattr__(self, "_chars", chars)
            object.__setattr__(self, "_index", {ch: i for i, ch in enumerate(chars)})
            logger.debug("built %s repertoire with %d characters", name, len(chars))

        @staticmethod
        def _is_control(cp: int) -> bool:
            if cp == 0x20:
                return False
            return cp < 0x20 or 0x7F <= cp <= 0x9F

        def __setattr__(self, key, value):
            raise AttributeError("Repertoire is immutable")

        def __len__(self) -> int:
            return len(self._chars)

        def __contains__(self, char) -> bool:
            return char in self._index

        def __iter__(self):
            return iter(self._chars)

        def __repr__(self) -> str:
            return f"Repertoire(name={self.name!r}, size={len(self._chars)})"

        @property
        def size(self) -> int:
            return len(self._chars)

        def index_of(self, char: str) -> "namefwx.typing.Optional[int]":
            return self._index.get(char)

        def char_at(self, index: int) -> str:
            if not 0 <= index < len(self._chars):
                raise IndexError(f"repertoire index {index} out of range [0, {len(self._chars)})")
            return self._chars[index]

    _DEFAULT_REPERTOIRE = None
    _REPERTOIRE_LOCK = threading.Lock()

    @staticmethod
    def default_repertoire() -> "namefwx.Repertoire":
        """Process-wide repertoire, built exactly once even under concurrent first use."""
        repertoire = namefwx._DEFAULT_REPERTOIRE
        if repertoire is None:
            with namefwx._REPERTOIRE_LOCK:
                repertoire = namefwx._DEFAULT_REPERTOIRE
                if repertoire is None:
                    repertoire = namefwx.Repertoire()
                    namefwx._DEFAULT_REPERTOIRE = repertoire
        return repertoire

    @staticmethod
    def _resolve_repertoire(repertoire) -> "namefwx.Repertoire":
        return namefwx.default_repertoire() if repertoire is None else repertoire

    # ------------------------------------------------------------------
    # Keyed digest
    # ------------------------------------------------------------------

    @staticmethod
    def _key_bytes(key) -> bytes:
        if isinstance(key, str):
            return key.encode('utf-8')
        if isinstance(key, (bytes, bytearray, memoryview)):
            return bytes(key)
        raise TypeError(f"Unsupported key type: {type(key)!r}")

    @staticmethod
    def _frame(part: bytes) -> bytes:
        return len(part).to_bytes(4, 'big') + part

    @staticmethod
    def _keyed_digest(key: bytes, info: bytes, *parts: bytes) -> bytes:
        """SHA-256 over the length-framed key, purpose tag and inputs."""
        h = namefwx.hashes.Hash(namefwx.hashes.SHA256())
        h.update(namefwx._frame(key))
        h.update(namefwx._frame(info))
        for part in parts:
            h.update(namefwx._frame(part))
        return h.finalize()

    @staticmethod
    def _digest_int(digest: bytes) -> int:
        return int.from_bytes(digest[:8], 'big')

    @staticmethod
    def _u64(value: int) -> bytes:
        return (value & namefwx._MASK64).to_bytes(8, 'big')

    # ------------------------------------------------------------------
    # IV
    # ------------------------------------------------------------------

    @staticmethod
    def iv_space(repertoire=None) -> int:
        return namefwx._resolve_repertoire(repertoire).size ** namefwx.IV_LENGTH

    @staticmethod
    def derive_iv(text: str, key, repertoire=None) -> int:
        repertoire = namefwx._resolve_repertoire(repertoire)
        digest = namefwx._keyed_digest(
            namefwx._key_bytes(key),
            namefwx.IV_INFO,
            text.encode('utf-8', 'surrogatepass')
        )
        return namefwx._digest_int(digest) % namefwx.iv_space(repertoire)

    @staticmethod
    def iv_to_chars(iv_numeric: int, repertoire=None) -> str:
        repertoire = namefwx._resolve_repertoire(repertoire)
        size = repertoire.size
        value = iv_numeric % namefwx.iv_space(repertoire)
        digits = []
        for _ in range(namefwx.IV_LENGTH):
            value, digit = divmod(value, size)
            digits.append(digit)
        return "".join(repertoire.char_at(d) for d in reversed(digits))

    @staticmethod
    def chars_to_iv(iv_chars: str, repertoire=None) -> int:
        repertoire = namefwx._resolve_repertoire(repertoire)
        iv_numeric = 0
        for ch in iv_chars:
            index = repertoire.index_of(ch)
            if index is None:
                raise InvalidIVCharacterError(ch)
            iv_numeric = iv_numeric * repertoire.size + index
        return iv_numeric

    # ------------------------------------------------------------------
    # Position permutation
    # ------------------------------------------------------------------

    @staticmethod
    def _splitmix64(state: int) -> "namefwx.typing.Tuple[int, int]":
        z = (state + 0x9E3779B97F4A7C15) & namefwx._MASK64
        x = z
        x = (x ^ (x >> 30)) * 0xBF58476D1CE4E5B9 & namefwx._MASK64
        x = (x ^ (x >> 27)) * 0x94D049BB133111EB & namefwx._MASK64
        x = x ^ (x >> 31)
        return z, x & namefwx._MASK64

    @staticmethod
    def _uniform_below(state: int, bound: int) -> "namefwx.typing.Tuple[int, int]":
        # reject the biased tail so every value in [0, bound) is equally likely
        limit = (1 << 64) - ((1 << 64) % bound)
        while True:
            state, rnd = namefwx._splitmix64(state)
            if rnd < limit:
                return state, rnd % bound

    @staticmethod
    def _permute_indices(count: int, seed: int) -> "list[int]":
        order = list(range(count))
        st = seed & namefwx._MASK64
        for i in range(count - 1, 0, -1):
            st, j = namefwx._uniform_below(st, i + 1)
            if j != i:
                order[i], order[j] = order[j], order[i]
        return order

    @staticmethod
    def permutation_maps(key, iv_numeric: int, length: int) -> "namefwx.typing.Tuple[list[int], list[int]]":
        """
        Position bijection for a name of ``length`` characters.

        Returns ``(forward, inverse)`` where ``forward[original] == shuffled``
        and ``inverse[shuffled] == original``.
        """
        if length == 0:
            return [], []
        seed = namefwx._digest_int(namefwx._keyed_digest(
            namefwx._key_bytes(key),
            namefwx.PERM_INFO,
            namefwx._u64(iv_numeric),
            namefwx._u64(length)
        ))
        forward = namefwx._permute_indices(length, seed)
        inverse = [0] * length
        for original_pos, new_pos in enumerate(forward):
            inverse[new_pos] = original_pos
        return forward, inverse

    # ------------------------------------------------------------------
    # Character substitution
    # ------------------------------------------------------------------

    @staticmethod
    def shift_amount(key, iv_numeric: int, position: int, length: int, repertoire=None) -> int:
        repertoire = namefwx._resolve_repertoire(repertoire)
        digest = namefwx._keyed_digest(
            namefwx._key_bytes(key),
            namefwx.SHIFT_INFO,
            namefwx._u64(iv_numeric),
            namefwx._u64(position),
            namefwx._u64(length),
            repertoire.class_tag
        )
        return namefwx._digest_int(digest) % repertoire.size

    @staticmethod
    def shift_forward(char: str, key, iv_numeric: int, position: int, length: int, repertoire=None) -> str:
        repertoire = namefwx._resolve_repertoire(repertoire)
        index = repertoire.index_of(char)
        if index is None:
            return char
        offset = namefwx.shift_amount(key, iv_numeric, position, length, repertoire)
        return repertoire.char_at((index + offset) % repertoire.size)

    @staticmethod
    def shift_backward(char: str, key, iv_numeric: int, position: int, length: int, repertoire=None) -> str:
        repertoire = namefwx._resolve_repertoire(repertoire)
        index = repertoire.index_of(char)
        if index is None:
            return char
        offset = namefwx.shift_amount(key, iv_numeric, position, length, repertoire)
        return repertoire.char_at((index - offset) % repertoire.size)

    # ------------------------------------------------------------------
    # Codec
    # ------------------------------------------------------------------

    @staticmethod
    def encode(text: str, key, *, repertoire=None) -> str:
        if not isinstance(text, str):
            raise TypeError(f"encode expects str, got {type(text)!r}")
        key_bytes = namefwx._key_bytes(key)
        if not text:
            return ""
        repertoire = namefwx._resolve_repertoire(repertoire)
        length = len(text)
        iv_numeric = namefwx.derive_iv(text, key_bytes, repertoire)
        forward, _ = namefwx.permutation_maps(key_bytes, iv_numeric, length)
        shuffled = [""] * length
        for original_pos, new_pos in enumerate(forward):
            shuffled[new_pos] = text[original_pos]
        body = "".join(
            namefwx.shift_forward(ch, key_bytes, iv_numeric, pos, length, repertoire)
            for pos, ch in enumerate(shuffled)
        )
        return namefwx.iv_to_chars(iv_numeric, repertoire) + body

    @staticmethod
    def decode(obfuscated: str, key, *, verify: "namefwx.typing.Optional[bool]" = None, repertoire=None) -> str:
        if not isinstance(obfuscated, str):
            raise TypeError(f"decode expects str, got {type(obfuscated)!r}")
        key_bytes = namefwx._key_bytes(key)
        if not obfuscated:
            return ""
        if len(obfuscated) < namefwx.IV_LENGTH:
            raise ShortInputError(len(obfuscated), namefwx.IV_LENGTH)
        repertoire = namefwx._resolve_repertoire(repertoire)
        iv_numeric = namefwx.chars_to_iv(obfuscated[:namefwx.IV_LENGTH], repertoire)
        body = obfuscated[namefwx.IV_LENGTH:]
        length = len(body)
        unshifted = [
            namefwx.shift_backward(ch, key_bytes, iv_numeric, pos, length, repertoire)
            for pos, ch in enumerate(body)
        ]
        _, inverse = namefwx.permutation_maps(key_bytes, iv_numeric, length)
        restored = [""] * length
        for new_pos, original_pos in enumerate(inverse):
            restored[original_pos] = unshifted[new_pos]
        plain = "".join(restored)
        if verify is None:
            verify = namefwx.ENABLE_VERIFY
        if verify and namefwx.encode(plain, key_bytes, repertoire=repertoire) != obfuscated:
            logger.warning("obfuscated name failed integrity check (%d chars)", len(obfuscated))
            raise IntegrityError("Name integrity check failed; incorrect key or corrupted name")
        return plain

    # ------------------------------------------------------------------
    # Path segments
    # ------------------------------------------------------------------

    @staticmethod
    def _check_separator(sep: str, repertoire) -> None:
        if not isinstance(sep, str) or len(sep) != 1:
            raise ValueError(f"Path separator must be a single character, got {sep!r}")
        if sep in repertoire:
            raise ValueError(f"Path separator {sep!r} is a repertoire member and could appear in encoded names")

    @staticmethod
    def encode_path(path: str, key, *, sep: str = "/", repertoire=None) -> str:
        repertoire = namefwx._resolve_repertoire(repertoire)
        namefwx._check_separator(sep, repertoire)
        return sep.join(
            namefwx.encode(segment, key, repertoire=repertoire)
            for segment in path.split(sep)
        )

    @staticmethod
    def decode_path(
        path: str,
        key,
        *,
        sep: str = "/",
        verify: "namefwx.typing.Optional[bool]" = None,
        repertoire=None
    ) -> str:
        repertoire = namefwx._resolve_repertoire(repertoire)
        namefwx._check_separator(sep, repertoire)
        segments = path.split(sep)
        out = []
        for position, segment in enumerate(segments):
            try:
                out.append(namefwx.decode(segment, key, verify=verify, repertoire=repertoire))
            except NameCodecError as exc:
                logger.warning("path segment %d of %d failed to decode: %s", position + 1, len(segments), exc)
                raise
        return sep.join(out)

    # ------------------------------------------------------------------
    # Batch helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _worker_count(requested: "namefwx.typing.Optional[int]", jobs: int) -> int:
        workers = requested or namefwx.DEFAULT_WORKERS or namefwx._CPU_COUNT
        return max(1, min(workers, jobs))

    @staticmethod
    def _fan_out(func, names: "list[str]", workers: "namefwx.typing.Optional[int]") -> "list[str]":
        worker_count = namefwx._worker_count(workers, len(names))
        if worker_count <= 1:
            return [func(name) for name in names]
        with namefwx.concurrent.futures.ThreadPoolExecutor(max_workers=worker_count) as pool:
            return list(pool.map(func, names))

    @staticmethod
    def encode_names(names, key, *, workers: "namefwx.typing.Optional[int]" = None, repertoire=None) -> "list[str]":
        names = list(names)
        repertoire = namefwx._resolve_repertoire(repertoire)
        key_bytes = namefwx._key_bytes(key)
        return namefwx._fan_out(
            lambda name: namefwx.encode(name, key_bytes, repertoire=repertoire),
            names,
            workers
        )

    @staticmethod
    def decode_names(
        names,
        key,
        *,
        workers: "namefwx.typing.Optional[int]" = None,
        verify: "namefwx.typing.Optional[bool]" = None,
        repertoire=None
    ) -> "list[str]":
        names = list(names)
        repertoire = namefwx._resolve_repertoire(repertoire)
        key_bytes = namefwx._key_bytes(key)
        return namefwx._fan_out(
            lambda name: namefwx.decode(name, key_bytes, verify=verify, repertoire=repertoire),
            names,
            workers
        )


def cli(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(prog="namefwx", description="NAMEFWX filename obfuscation toolkit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {namefwx.ENGINE_VERSION}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("encode", "Obfuscate one or more names or paths"),
        ("decode", "Recover one or more obfuscated names or paths"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "names",
            nargs='+',
            help="Names or slash-separated paths (put names starting with - after --)"
        )
        sub.add_argument(
            "-k", "--key",
            default=None,
            help="Obfuscation key (defaults to $NAMEFWX_KEY)"
        )
        sub.add_argument(
            "--sep",
            default="/",
            help="Path separator used to split names into segments"
        )
        sub.add_argument(
            "--segment",
            action="store_true",
            help="Treat each argument as a single segment; do not split on the separator"
        )
        if command == "decode":
            sub.add_argument(
                "--no-verify",
                dest="verify",
                action="store_false",
                help="Skip the re-encode integrity check"
            )
            sub.set_defaults(verify=None)

    args = parser.parse_args(argv)

    key = args.key if args.key is not None else _os_module.getenv("NAMEFWX_KEY")
    if not key:
        parser.error("a key is required (pass -k/--key or set NAMEFWX_KEY)")

    failures = 0
    for name in args.names:
        try:
            if args.command == "encode":
                if args.segment:
                    result = namefwx.encode(name, key)
                else:
                    result = namefwx.encode_path(name, key, sep=args.sep)
            else:
                if args.segment:
                    result = namefwx.decode(name, key, verify=args.verify)
                else:
                    result = namefwx.decode_path(name, key, sep=args.sep, verify=args.verify)
        except ValueError as exc:
            failures += 1
            print(f"{name}: FAIL! {exc}")
            continue
        print(result)

    return 0 if failures == 0 else 1


def main(argv=None) -> int:
    return cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
