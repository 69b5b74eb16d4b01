import hashlib
import hmac

import pytest

from meetings.webhooks import compute_signature, verify_signature

SECRET = "whsec-test"
BODY = b'{"meetingId":"m1","eventType":"Transcription completed"}'


def _sign(body=BODY, secret=SECRET):
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def test_compute_signature_is_hmac_sha256_hex():
    assert compute_signature(SECRET, BODY) == _sign()


@pytest.mark.parametrize("signature", [_sign(), "sha256=" + _sign(), "SHA256=" + _sign()])
def test_valid_signature_verifies(signature):
    assert verify_signature(SECRET, BODY, signature) is True


def test_every_single_byte_body_mutation_fails():
    signature = _sign()
    for i in range(len(BODY)):
        mutated = BODY[:i] + bytes([BODY[i] ^ 0x01]) + BODY[i + 1:]
        assert verify_signature(SECRET, mutated, signature) is False


def test_every_single_char_signature_mutation_fails():
    signature = _sign()
    for i, char in enumerate(signature):
        replacement = "0" if char != "0" else "1"
        mutated = signature[:i] + replacement + signature[i + 1:]
        assert verify_signature(SECRET, BODY, mutated) is False


@pytest.mark.parametrize("signature", ["not-hex!", "zz" * 32, "sha256=", "", None, "é" * 64, _sign()[:-1]])
def test_malformed_signatures_are_rejected_without_raising(signature):
    assert verify_signature(SECRET, BODY, signature) is False


def test_wrong_secret_fails():
    assert verify_signature("other", BODY, _sign()) is False
