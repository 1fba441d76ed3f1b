import hashlib
import re
from datetime import datetime, timezone

import pytest

from app.certificates import codes
from app.certificates.codes import generate_batch, generate_code, generate_pair, hash_code
from app.exceptions import CodeGenerationError

NOW = datetime(2025, 3, 1, 12, 30, 15, 250000, tzinfo=timezone.utc)
NOW_MS = int(NOW.timestamp() * 1000)


def test_hash_is_sha256_hex() -> None:
    assert hash_code("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_single_code_has_tag_year_and_millis() -> None:
    assert generate_code(NOW, program_tag="SINARI") == f"SINARI-2025-{NOW_MS}"


def test_year_follows_issuance_time() -> None:
    later = datetime(2027, 1, 2, tzinfo=timezone.utc)
    assert generate_code(later, program_tag="SINARI").startswith("SINARI-2027-")


def test_pair_hash_matches_code() -> None:
    pair = generate_pair(NOW, program_tag="SINARI")
    assert pair.hash == hashlib.sha256(pair.certificate_code.encode()).hexdigest()
    assert len(pair.hash) == 64


def test_suffix_uses_lowercase_base36() -> None:
    code = generate_code(NOW, program_tag="SINARI", suffix_length=6)
    assert re.fullmatch(rf"SINARI-2025-{NOW_MS}-[0-9a-z]{{6}}", code)


def test_batch_in_same_millisecond_is_distinct() -> None:
    pairs = generate_batch(1000, NOW, program_tag="SINARI", suffix_length=6)
    assert len(pairs) == 1000
    assert len({p.certificate_code for p in pairs}) == 1000
    assert all(p.hash == hash_code(p.certificate_code) for p in pairs)


def test_batch_redraws_colliding_suffix(monkeypatch: pytest.MonkeyPatch) -> None:
    suffixes = iter(["aaa", "aaa", "bbb"])
    monkeypatch.setattr(codes, "_random_suffix", lambda length: next(suffixes))

    pairs = generate_batch(2, NOW, program_tag="SINARI", suffix_length=3)

    assert [p.certificate_code.rsplit("-", 1)[1] for p in pairs] == ["aaa", "bbb"]


def test_batch_gives_up_when_suffixes_keep_colliding(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(codes, "_random_suffix", lambda length: "same")

    with pytest.raises(CodeGenerationError):
        generate_batch(2, NOW, program_tag="SINARI", suffix_length=4)


def test_batch_requires_suffix() -> None:
    with pytest.raises(ValueError):
        generate_batch(3, NOW, program_tag="SINARI", suffix_length=0)
