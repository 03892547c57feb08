"""Tests for the ed25519/SHA-256 derivation primitives."""

import hashlib

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solido_sdk import Ed25519Sha256Backend
from solido_sdk.program.curve import is_on_ed25519_curve


@pytest.fixture
def backend():
    return Ed25519Sha256Backend()


class TestIsOnCurve:
    def test_identity_encoding_is_on_curve(self, backend):
        # y = 1 is the neutral element
        assert backend.is_on_curve((1).to_bytes(32, "little"))

    def test_zero_encoding_is_on_curve(self, backend):
        assert backend.is_on_curve(bytes(32))

    def test_keypair_pubkeys_are_on_curve(self, backend):
        for _ in range(8):
            assert backend.is_on_curve(bytes(Keypair().pubkey()))

    def test_program_derived_addresses_are_off_curve(self, backend):
        program_id = Pubkey.new_unique()
        for i in range(8):
            pda, _ = Pubkey.find_program_address([bytes([i])], program_id)
            assert not backend.is_on_curve(bytes(pda))

    def test_hash_outputs_land_on_and_off_curve(self, backend):
        results = {
            backend.is_on_curve(hashlib.sha256(i.to_bytes(2, "little")).digest())
            for i in range(64)
        }
        assert results == {True, False}

    def test_sign_bit_is_ignored(self, backend):
        point = bytes(Keypair().pubkey())
        flipped = point[:31] + bytes([point[31] ^ 0x80])
        assert backend.is_on_curve(flipped)

    def test_non_canonical_y_is_reduced(self, backend):
        # p + 1 encodes y = 1 once reduced mod p
        p_plus_one = (2**255 - 19 + 1).to_bytes(32, "little")
        assert backend.is_on_curve(p_plus_one)

    def test_accepts_bytearray(self):
        assert is_on_ed25519_curve(bytearray(bytes(Keypair().pubkey())))

    @pytest.mark.parametrize("size", [0, 31, 33])
    def test_rejects_wrong_length(self, backend, size):
        with pytest.raises(ValueError):
            backend.is_on_curve(bytes(size))


class TestEd25519Sha256Backend:
    def test_hash_is_sha256(self, backend):
        data = b"ProgramDerivedAddress"
        assert backend.hash(data) == hashlib.sha256(data).digest()

    def test_hash_is_32_bytes(self, backend):
        assert len(backend.hash(b"")) == 32
