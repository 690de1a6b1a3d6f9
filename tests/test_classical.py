import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cipherchain.cipher.classical import (
    decrypt_repeating_key,
    decrypt_running_key,
    encrypt_repeating_key,
    encrypt_running_key,
    normalize_text,
)
from cipherchain.errors import ConfigError


def test_normalize_text_keeps_uppercase_letters_only():
    assert normalize_text("Hello, World! 123") == "HELLOWORLD"
    assert normalize_text("") == ""
    assert normalize_text("42 !?") == ""


# ---------------------------------------------------------------------------
# Repeating key
# ---------------------------------------------------------------------------

def test_repeating_key_known_vector():
    assert encrypt_repeating_key("ATTACKATDAWN", "LEMON") == "LXFOPVEFRNHR"
    assert decrypt_repeating_key("LXFOPVEFRNHR", "LEMON") == "ATTACKATDAWN"


def test_repeating_key_normalizes_text_and_key():
    assert encrypt_repeating_key("attack at dawn!", "le-mon") == "LXFOPVEFRNHR"


def test_repeating_key_single_letter_is_a_shift():
    assert encrypt_repeating_key("XYZ", "D") == "ABC"


# ---------------------------------------------------------------------------
# Running key
# ---------------------------------------------------------------------------

def test_running_key_known_vector():
    assert encrypt_running_key("ATTACKATDAWN", "QUEENLY") == "QNXEPVYTWTWP"
    assert decrypt_running_key("QNXEPVYTWTWP", "QUEENLY") == "ATTACKATDAWN"


def test_running_key_extends_stream_with_plaintext():
    # Key "B" then plaintext "AA": stream is "BA", so the second letter is unshifted.
    assert encrypt_running_key("AA", "B") == "BA"
    assert decrypt_running_key("BA", "B") == "AA"


def test_running_key_differs_from_repeating_key_past_key_length():
    text, key = "HELLOWORLD", "KEY"
    run = encrypt_running_key(text, key)
    rep = encrypt_repeating_key(text, key)
    assert run[:3] == rep[:3]
    assert run != rep


# ---------------------------------------------------------------------------
# Round-trips and edge cases
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("encrypt,decrypt", [
    (encrypt_repeating_key, decrypt_repeating_key),
    (encrypt_running_key, decrypt_running_key),
])
@pytest.mark.parametrize("text,key", [
    ("The quick brown fox jumps over the lazy dog", "CIPHER"),
    ("Z", "A"),
    ("mixed CASE with 123 digits", "secret"),
    ("short", "averyveryverylongkeyindeed"),
])
def test_roundtrip_returns_normalized_plaintext(encrypt, decrypt, text, key):
    ct = encrypt(text, key)
    assert ct.isalpha() and ct.isupper()
    assert decrypt(ct, key) == normalize_text(text)


@pytest.mark.parametrize("fn", [
    encrypt_repeating_key,
    decrypt_repeating_key,
    encrypt_running_key,
    decrypt_running_key,
])
def test_empty_text_short_circuits_before_key_check(fn):
    assert fn("", "") == ""
    assert fn("123 !!", "") == ""


@pytest.mark.parametrize("fn", [
    encrypt_repeating_key,
    decrypt_repeating_key,
    encrypt_running_key,
    decrypt_running_key,
])
@pytest.mark.parametrize("key", ["", "1234", "  --  "])
def test_key_without_letters_is_rejected(fn, key):
    with pytest.raises(ConfigError):
        fn("HELLO", key)


def test_running_key_short_key_vector():
    assert encrypt_running_key("ATTACKATDAWN", "KEY") == "KXRAVDAVNAPQ"
    assert decrypt_running_key("KXRAVDAVNAPQ", "KEY") == "ATTACKATDAWN"
