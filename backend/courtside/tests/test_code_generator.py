"""
Tests for join-code generation.
"""
import re
import pytest
from courtside.core.errors import ExhaustionError
from courtside.services import code_generator
from courtside.services.code_generator import (
    CODE_ALPHABET, CODE_LENGTH, generate_code, generate_unique_code
)

CODE_PATTERN = re.compile(r"^[A-Z2-9]{4}-[A-Z2-9]{4}$")


def test_alphabet_has_no_ambiguous_characters():
    """0/O and 1/I are excluded, leaving 32 distinct symbols."""
    assert len(CODE_ALPHABET) == 32
    assert len(set(CODE_ALPHABET)) == 32
    for ch in "0O1I":
        assert ch not in CODE_ALPHABET


def test_generated_code_format():
    """Codes are XXXX-XXXX drawn only from the alphabet."""
    for _ in range(200):
        code = generate_code()
        assert len(code) == CODE_LENGTH == 9
        assert CODE_PATTERN.match(code)
        assert all(ch in CODE_ALPHABET for ch in code.replace("-", ""))


def test_unique_code_never_repeats_a_stored_code():
    """Each new code is checked against everything generated before it."""
    store = set()
    for _ in range(100):
        code = generate_unique_code(store.__contains__)
        assert code not in store
        store.add(code)
    assert len(store) == 100


def test_unique_code_retries_after_collision(monkeypatch):
    """A colliding candidate is skipped and the next free one returned."""
    candidates = iter(["AAAA-AAAA", "AAAA-AAAA", "BBBB-BBBB"])
    monkeypatch.setattr(code_generator, "generate_code", lambda alphabet=CODE_ALPHABET: next(candidates))

    assert generate_unique_code({"AAAA-AAAA"}.__contains__) == "BBBB-BBBB"


def test_exhausted_code_space_raises():
    """With a one-symbol alphabet the only possible code is taken."""
    checked = []

    def exists(code):
        checked.append(code)
        return code == "AAAA-AAAA"

    with pytest.raises(ExhaustionError):
        generate_unique_code(exists, alphabet="A")

    assert len(checked) == 20
    assert set(checked) == {"AAAA-AAAA"}


def test_max_attempts_is_respected():
    """The attempt limit can be lowered per call."""
    calls = []

    def always_taken(code):
        calls.append(code)
        return True

    with pytest.raises(ExhaustionError):
        generate_unique_code(always_taken, max_attempts=3)
    assert len(calls) == 3
