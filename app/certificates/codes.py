"""Certificate code and hash generation.

Codes read ``<TAG>-<YEAR>-<epoch ms>`` for single issuance. Batch entries
append a random base-36 suffix so rows stamped in the same millisecond
still differ; duplicates inside one batch are drawn again.

Pure functions, no I/O.
"""

from __future__ import annotations

import hashlib
import secrets
import string
from dataclasses import dataclass
from datetime import datetime

from app.exceptions import CodeGenerationError

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase

# Redraws allowed per requested code before a batch gives up
_BATCH_ATTEMPTS_PER_CODE = 10


@dataclass(frozen=True)
class CodePair:
    certificate_code: str
    hash: str


def hash_code(certificate_code: str) -> str:
    """SHA-256 of the code, lowercase hex (64 chars)."""
    return hashlib.sha256(certificate_code.encode("utf-8")).hexdigest()


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def generate_code(now: datetime, *, program_tag: str, suffix_length: int = 0) -> str:
    millis = int(now.timestamp() * 1000)
    code = f"{program_tag}-{now.year}-{millis}"
    if suffix_length > 0:
        code = f"{code}-{_random_suffix(suffix_length)}"
    return code


def generate_pair(now: datetime, *, program_tag: str, suffix_length: int = 0) -> CodePair:
    code = generate_code(now, program_tag=program_tag, suffix_length=suffix_length)
    return CodePair(certificate_code=code, hash=hash_code(code))


def generate_batch(
    count: int,
    now: datetime,
    *,
    program_tag: str,
    suffix_length: int,
) -> list[CodePair]:
    """Return ``count`` pairs with pairwise-distinct codes, all stamped ``now``."""
    if suffix_length < 1:
        raise ValueError("Batch codes need a random suffix")

    pairs: list[CodePair] = []
    seen: set[str] = set()
    budget = count * _BATCH_ATTEMPTS_PER_CODE
    for _ in range(budget):
        if len(pairs) == count:
            break
        pair = generate_pair(now, program_tag=program_tag, suffix_length=suffix_length)
        if pair.certificate_code in seen:
            continue
        seen.add(pair.certificate_code)
        pairs.append(pair)

    if len(pairs) < count:
        raise CodeGenerationError(
            f"Could not generate {count} distinct certificate codes in {budget} attempts"
        )
    return pairs
