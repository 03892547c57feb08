"""Tests for PDA derivation functions."""

import struct

import pytest
from solders.pubkey import Pubkey

from solido_sdk import (
    AddressDeriver,
    DerivationExhaustedError,
    FieldOverflowError,
    InvalidSeedError,
    create_program_address,
    find_program_address,
    get_associated_token_address,
    get_mint_authority_pda,
    get_reserve_account_pda,
    get_rewards_withdraw_authority_pda,
    get_stake_authority_pda,
    get_validator_stake_account_pda,
    get_validator_unstake_account_pda,
)
from solido_sdk.program.constants import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_PROGRAM_ID
from solido_sdk.program.curve import is_on_ed25519_curve


class TestFindProgramAddress:
    def test_derives_valid_pda(self):
        pda, bump = find_program_address([b"reserve_account"], Pubkey.new_unique())

        assert isinstance(pda, Pubkey)
        assert isinstance(bump, int)
        assert 0 <= bump <= 255

    def test_consistent_derivation(self):
        program_id = Pubkey.new_unique()
        seeds = [bytes(Pubkey.new_unique()), b"mint_authority"]

        pda1, bump1 = find_program_address(seeds, program_id)
        pda2, bump2 = find_program_address(seeds, program_id)

        assert pda1 == pda2
        assert bump1 == bump2

    @pytest.mark.parametrize(
        "seeds",
        [
            [],
            [b""],
            [b"reserve_account"],
            [bytes(32), b"stake_authority"],
            [b"\xff" * 32] * 15,
        ],
    )
    def test_matches_solders_reference(self, seeds):
        program_id = Pubkey.new_unique()
        assert find_program_address(seeds, program_id) == Pubkey.find_program_address(
            seeds, program_id
        )

    def test_matches_solders_for_many_programs(self):
        for _ in range(16):
            program_id = Pubkey.new_unique()
            seeds = [bytes(Pubkey.new_unique()), b"reserve_account"]
            assert find_program_address(seeds, program_id) == Pubkey.find_program_address(
                seeds, program_id
            )

    def test_result_is_off_curve(self):
        for _ in range(16):
            pda, _ = find_program_address([bytes(Pubkey.new_unique())], Pubkey.new_unique())
            assert not is_on_ed25519_curve(bytes(pda))
            assert not pda.is_on_curve()

    def test_bump_is_first_off_curve_candidate(self, counting_backend):
        program_id = Pubkey.new_unique()
        seeds = [b"mint_authority"]
        deriver = AddressDeriver(counting_backend)

        _, bump = deriver.derive(program_id, seeds)

        # One hash per rejected bump plus the accepted one
        assert counting_backend.hash_calls == 256 - bump
        for higher in range(255, bump, -1):
            with pytest.raises(InvalidSeedError):
                create_program_address(seeds + [bytes([higher])], program_id)

    def test_accepts_pubkey_seeds(self):
        program_id = Pubkey.new_unique()
        instance = Pubkey.new_unique()

        assert find_program_address([instance, b"x"], program_id) == find_program_address(
            [bytes(instance), b"x"], program_id
        )

    def test_different_program_ids_produce_different_pdas(self):
        pda1, _ = find_program_address([b"seed"], Pubkey.new_unique())
        pda2, _ = find_program_address([b"seed"], Pubkey.new_unique())
        assert pda1 != pda2


class TestSeedValidation:
    def test_seed_longer_than_32_bytes_rejected_before_hashing(self, counting_backend):
        deriver = AddressDeriver(counting_backend)

        with pytest.raises(InvalidSeedError):
            deriver.derive(Pubkey.new_unique(), [b"a" * 33])

        assert counting_backend.hash_calls == 0
        assert counting_backend.curve_checks == 0

    def test_32_byte_seed_accepted(self):
        find_program_address([b"a" * 32], Pubkey.new_unique())

    def test_too_many_seeds_rejected(self, counting_backend):
        deriver = AddressDeriver(counting_backend)

        # 16 seeds leave no room for the bump
        with pytest.raises(InvalidSeedError):
            deriver.derive(Pubkey.new_unique(), [b"s"] * 16)

        assert counting_backend.hash_calls == 0

    def test_non_bytes_seed_rejected(self):
        with pytest.raises(InvalidSeedError):
            find_program_address(["reserve_account"], Pubkey.new_unique())

    def test_bare_bytes_instead_of_list_rejected(self):
        with pytest.raises(InvalidSeedError):
            find_program_address(b"reserve_account", Pubkey.new_unique())


class TestDerivationExhausted:
    def test_raises_when_every_bump_is_on_curve(self, exhausted_backend):
        deriver = AddressDeriver(exhausted_backend)

        with pytest.raises(DerivationExhaustedError):
            deriver.derive(Pubkey.new_unique(), [b"seed"])

        assert exhausted_backend.hash_calls == 256

    def test_error_carries_program_id(self, exhausted_backend):
        program_id = Pubkey.new_unique()
        with pytest.raises(DerivationExhaustedError) as exc_info:
            AddressDeriver(exhausted_backend).derive(program_id, [])
        assert exc_info.value.program_id == str(program_id)


class TestCreateProgramAddress:
    def test_matches_solders_reference(self):
        program_id = Pubkey.new_unique()
        seeds = [b"reserve_account"]
        _, bump = Pubkey.find_program_address(seeds, program_id)

        assert create_program_address(
            seeds + [bytes([bump])], program_id
        ) == Pubkey.create_program_address(seeds + [bytes([bump])], program_id)

    def test_roundtrips_with_find(self):
        program_id = Pubkey.new_unique()
        seeds = [bytes(Pubkey.new_unique()), b"stake_authority"]
        pda, bump = find_program_address(seeds, program_id)

        assert create_program_address(seeds + [bytes([bump])], program_id) == pda

    def test_on_curve_result_rejected(self, exhausted_backend):
        with pytest.raises(InvalidSeedError):
            AddressDeriver(exhausted_backend).create_program_address(
                [b"seed", bytes([255])], Pubkey.new_unique()
            )

    def test_sixteen_seeds_allowed_with_bump(self):
        program_id = Pubkey.new_unique()
        seeds = [b"s"] * 15
        pda, bump = find_program_address(seeds, program_id)
        assert create_program_address(seeds + [bytes([bump])], program_id) == pda

    def test_seventeen_seeds_rejected(self):
        with pytest.raises(InvalidSeedError):
            create_program_address([b"s"] * 17, Pubkey.new_unique())


class TestCache:
    def test_cached_derivation_skips_hashing(self, counting_backend):
        deriver = AddressDeriver(counting_backend, cache=True)
        program_id = Pubkey.new_unique()

        first = deriver.derive(program_id, [b"reserve_account"])
        calls = counting_backend.hash_calls
        second = deriver.derive(program_id, [b"reserve_account"])

        assert first == second
        assert counting_backend.hash_calls == calls

    def test_uncached_derivation_hashes_again(self, counting_backend):
        deriver = AddressDeriver(counting_backend)
        program_id = Pubkey.new_unique()

        deriver.derive(program_id, [b"reserve_account"])
        calls = counting_backend.hash_calls
        deriver.derive(program_id, [b"reserve_account"])

        assert counting_backend.hash_calls == 2 * calls

    def test_cache_keys_on_program_id(self, counting_backend):
        deriver = AddressDeriver(counting_backend, cache=True)

        pda1, _ = deriver.derive(Pubkey.new_unique(), [b"seed"])
        pda2, _ = deriver.derive(Pubkey.new_unique(), [b"seed"])

        assert pda1 != pda2


class TestAuthorityPdas:
    @pytest.mark.parametrize(
        "helper, seed",
        [
            (get_reserve_account_pda, b"reserve_account"),
            (get_mint_authority_pda, b"mint_authority"),
            (get_stake_authority_pda, b"stake_authority"),
            (get_rewards_withdraw_authority_pda, b"rewards_withdraw_authority"),
        ],
    )
    def test_seeds_are_instance_and_role(self, program_addresses, helper, seed):
        expected = Pubkey.find_program_address(
            [bytes(program_addresses.solido_instance_id), seed],
            program_addresses.program_id,
        )
        assert helper(program_addresses) == expected

    def test_reserve_and_mint_authority_differ(self, program_addresses):
        reserve, _ = get_reserve_account_pda(program_addresses)
        mint_authority, _ = get_mint_authority_pda(program_addresses)
        assert reserve != mint_authority


class TestValidatorAccountPdas:
    def test_stake_account_seeds(self, program_addresses):
        vote = Pubkey.new_unique()
        expected = Pubkey.find_program_address(
            [
                bytes(program_addresses.solido_instance_id),
                bytes(vote),
                b"validator_stake_account",
                struct.pack("<Q", 7),
            ],
            program_addresses.program_id,
        )
        assert get_validator_stake_account_pda(program_addresses, vote, 7) == expected

    def test_unstake_account_differs_from_stake_account(self, program_addresses):
        vote = Pubkey.new_unique()
        stake, _ = get_validator_stake_account_pda(program_addresses, vote, 0)
        unstake, _ = get_validator_unstake_account_pda(program_addresses, vote, 0)
        assert stake != unstake

    def test_consecutive_seeds_produce_different_pdas(self, program_addresses):
        vote = Pubkey.new_unique()
        pda0, _ = get_validator_stake_account_pda(program_addresses, vote, 0)
        pda1, _ = get_validator_stake_account_pda(program_addresses, vote, 1)
        assert pda0 != pda1

    def test_seed_overflow(self, program_addresses):
        with pytest.raises(FieldOverflowError):
            get_validator_stake_account_pda(program_addresses, Pubkey.new_unique(), 2**64)


class TestAssociatedTokenAddress:
    def test_matches_solders_reference(self):
        owner = Pubkey.new_unique()
        mint = Pubkey.new_unique()
        expected, _ = Pubkey.find_program_address(
            [bytes(owner), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
            ASSOCIATED_TOKEN_PROGRAM_ID,
        )
        assert get_associated_token_address(owner, mint) == expected

    def test_different_owners(self):
        mint = Pubkey.new_unique()
        assert get_associated_token_address(
            Pubkey.new_unique(), mint
        ) != get_associated_token_address(Pubkey.new_unique(), mint)
