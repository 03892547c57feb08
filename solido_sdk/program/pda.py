"""PDA (Program Derived Address) derivation for the Solido SDK."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from solders.pubkey import Pubkey

from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MAX_SEED_LEN,
    MAX_SEEDS,
    PDA_MARKER,
    SEED_MINT_AUTHORITY,
    SEED_RESERVE_ACCOUNT,
    SEED_REWARDS_WITHDRAW_AUTHORITY,
    SEED_STAKE_AUTHORITY,
    SEED_VALIDATOR_STAKE_ACCOUNT,
    SEED_VALIDATOR_UNSTAKE_ACCOUNT,
    TOKEN_PROGRAM_ID,
)
from .curve import CryptoBackend, Ed25519Sha256Backend
from .errors import (
    DerivationExhaustedError,
    InvalidFieldError,
    InvalidSeedError,
    MissingAccountError,
)
from .types import DerivedAddress, InstructionKind, ProgramAddresses
from .utils import encode_u64

logger = logging.getLogger(__name__)

Seed = Union[bytes, bytearray, memoryview, Pubkey]


def _normalize_seeds(seeds: Iterable[Seed], max_count: int) -> List[bytes]:
    """Validate seeds and convert them to bytes, without hashing anything."""
    seeds = list(seeds)
    if len(seeds) > max_count:
        raise InvalidSeedError(f"too many seeds: {len(seeds)} (maximum {max_count})")

    normalized = []
    for i, seed in enumerate(seeds):
        if isinstance(seed, Pubkey):
            seed = bytes(seed)
        elif isinstance(seed, (bytes, bytearray, memoryview)):
            seed = bytes(seed)
        else:
            raise InvalidSeedError(
                f"seed {i} has type {type(seed).__name__}, expected bytes"
            )
        if len(seed) > MAX_SEED_LEN:
            raise InvalidSeedError(
                f"seed {i} is {len(seed)} bytes (maximum {MAX_SEED_LEN})"
            )
        normalized.append(seed)
    return normalized


class AddressDeriver:
    """Derives program addresses using an injected crypto backend.

    Derivation is a pure function of (program_id, seeds), so results may be
    memoised for the lifetime of the deriver with ``cache=True``.
    """

    def __init__(self, backend: Optional[CryptoBackend] = None, cache: bool = False):
        self.backend = backend if backend is not None else Ed25519Sha256Backend()
        self._cache: Optional[Dict[Tuple[bytes, Tuple[bytes, ...]], DerivedAddress]] = (
            {} if cache else None
        )

    def _hash_address(self, seeds: List[bytes], program_id: Pubkey) -> bytes:
        return self.backend.hash(b"".join(seeds) + bytes(program_id) + PDA_MARKER)

    def create_program_address(self, seeds: Sequence[Seed], program_id: Pubkey) -> Pubkey:
        """Compute the address for seeds that already include the bump.

        Raises:
            InvalidSeedError: If the seeds are invalid or the result is on the curve
        """
        normalized = _normalize_seeds(seeds, MAX_SEEDS)
        candidate = self._hash_address(normalized, program_id)
        if self.backend.is_on_curve(candidate):
            raise InvalidSeedError("derived address lies on the ed25519 curve")
        return Pubkey.from_bytes(candidate)

    def derive(self, program_id: Pubkey, seeds: Sequence[Seed]) -> DerivedAddress:
        """Find the off-curve address and bump for the given seeds.

        Bumps are tried from 255 down to 0; the first candidate that is not
        an ed25519 point wins.

        Raises:
            InvalidSeedError: If a seed is longer than 32 bytes, not bytes-like,
                or there are too many seeds to leave room for the bump
            DerivationExhaustedError: If no bump yields an off-curve address
        """
        normalized = _normalize_seeds(seeds, MAX_SEEDS - 1)

        key = (bytes(program_id), tuple(normalized))
        if self._cache is not None and key in self._cache:
            return self._cache[key]

        for bump in range(255, -1, -1):
            candidate = self._hash_address(normalized + [bytes([bump])], program_id)
            if self.backend.is_on_curve(candidate):
                continue
            result = DerivedAddress(Pubkey.from_bytes(candidate), bump)
            logger.debug(f"Derived {result.address} (bump {bump}) for program {program_id}")
            if self._cache is not None:
                self._cache[key] = result
            return result

        raise DerivationExhaustedError(str(program_id))


_default_deriver = AddressDeriver()


def find_program_address(
    seeds: Sequence[Seed],
    program_id: Pubkey,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive a PDA and its bump seed (same argument order as solders)."""
    return (deriver or _default_deriver).derive(program_id, seeds)


def create_program_address(
    seeds: Sequence[Seed],
    program_id: Pubkey,
    deriver: Optional[AddressDeriver] = None,
) -> Pubkey:
    """Compute a PDA from seeds that already end with the bump byte."""
    return (deriver or _default_deriver).create_program_address(seeds, program_id)


# ============================================================================
# ROLE HELPERS
# ============================================================================


def get_authority_pda(
    program_addresses: ProgramAddresses,
    seed: bytes,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive an authority PDA of a Solido instance.

    Seeds: [solido_instance_id, seed]
    """
    return find_program_address(
        [bytes(program_addresses.solido_instance_id), seed],
        program_addresses.program_id,
        deriver,
    )


def get_reserve_account_pda(
    program_addresses: ProgramAddresses,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive the SOL reserve account. Seeds: [instance, "reserve_account"]"""
    return get_authority_pda(program_addresses, SEED_RESERVE_ACCOUNT, deriver)


def get_mint_authority_pda(
    program_addresses: ProgramAddresses,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive the stSOL mint authority. Seeds: [instance, "mint_authority"]"""
    return get_authority_pda(program_addresses, SEED_MINT_AUTHORITY, deriver)


def get_stake_authority_pda(
    program_addresses: ProgramAddresses,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive the stake authority. Seeds: [instance, "stake_authority"]"""
    return get_authority_pda(program_addresses, SEED_STAKE_AUTHORITY, deriver)


def get_rewards_withdraw_authority_pda(
    program_addresses: ProgramAddresses,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive the vote-account rewards withdraw authority."""
    return get_authority_pda(program_addresses, SEED_REWARDS_WITHDRAW_AUTHORITY, deriver)


def _validator_account_pda(
    program_addresses: ProgramAddresses,
    validator_vote_account: Pubkey,
    kind_seed: bytes,
    seed: int,
    deriver: Optional[AddressDeriver],
) -> DerivedAddress:
    return find_program_address(
        [
            bytes(program_addresses.solido_instance_id),
            bytes(validator_vote_account),
            kind_seed,
            encode_u64(seed, "stake_seed"),
        ],
        program_addresses.program_id,
        deriver,
    )


def get_validator_stake_account_pda(
    program_addresses: ProgramAddresses,
    validator_vote_account: Pubkey,
    seed: int,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive a validator's stake account.

    Seeds: [instance, vote_account, "validator_stake_account", seed (u64 LE)]
    """
    return _validator_account_pda(
        program_addresses, validator_vote_account, SEED_VALIDATOR_STAKE_ACCOUNT, seed, deriver
    )


def get_validator_unstake_account_pda(
    program_addresses: ProgramAddresses,
    validator_vote_account: Pubkey,
    seed: int,
    deriver: Optional[AddressDeriver] = None,
) -> DerivedAddress:
    """Derive a validator's unstake account.

    Seeds: [instance, vote_account, "validator_unstake_account", seed (u64 LE)]
    """
    return _validator_account_pda(
        program_addresses, validator_vote_account, SEED_VALIDATOR_UNSTAKE_ACCOUNT, seed, deriver
    )


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    deriver: Optional[AddressDeriver] = None,
) -> Pubkey:
    """Derive the associated token account address for a wallet and mint."""
    seeds = [
        bytes(owner),
        bytes(token_program_id),
        bytes(mint),
    ]
    pda, _ = find_program_address(seeds, ASSOCIATED_TOKEN_PROGRAM_ID, deriver)
    return pda


# ============================================================================
# DERIVED ACCOUNTS PER INSTRUCTION
# ============================================================================


@dataclass(frozen=True)
class AccountSeed:
    """Seed part taken from the bytes of another account of the instruction."""

    role: str


@dataclass(frozen=True)
class U64Seed:
    """Seed part taken from an integer argument, encoded as u64 LE."""

    arg: str
    offset: int = 0


SeedPart = Union[bytes, AccountSeed, U64Seed]


@dataclass(frozen=True)
class DerivedAccount:
    """An account of an instruction whose address is a PDA of the program."""

    role: str
    seeds: Tuple[SeedPart, ...]


_INSTANCE = AccountSeed("solido")


def _authority(role: str, seed: bytes) -> DerivedAccount:
    return DerivedAccount(role, (_INSTANCE, seed))


def _stake_account(role: str, arg: str, offset: int = 0) -> DerivedAccount:
    return DerivedAccount(
        role,
        (
            _INSTANCE,
            AccountSeed("validator_vote_account"),
            SEED_VALIDATOR_STAKE_ACCOUNT,
            U64Seed(arg, offset),
        ),
    )


DERIVED_ACCOUNTS: Dict[InstructionKind, Tuple[DerivedAccount, ...]] = {
    InstructionKind.DEPOSIT: (
        _authority("reserve_account", SEED_RESERVE_ACCOUNT),
        _authority("mint_authority", SEED_MINT_AUTHORITY),
    ),
    InstructionKind.WITHDRAW: (
        _authority("stake_authority", SEED_STAKE_AUTHORITY),
        _stake_account("source_stake_account", "stake_seed"),
    ),
    InstructionKind.MERGE_STAKE: (
        _authority("stake_authority", SEED_STAKE_AUTHORITY),
        _stake_account("from_stake", "stake_seed_begin"),
        _stake_account("to_stake", "stake_seed_begin", offset=1),
    ),
}


def seed_arguments(kind: InstructionKind) -> Set[str]:
    """Names of the integer arguments consumed by the kind's PDA seeds."""
    return {
        part.arg
        for derived in DERIVED_ACCOUNTS.get(kind, ())
        for part in derived.seeds
        if isinstance(part, U64Seed)
    }


def resolve_derived_accounts(
    kind: InstructionKind,
    program_id: Pubkey,
    accounts: Mapping[str, Pubkey],
    args: Mapping[str, int],
    deriver: Optional[AddressDeriver] = None,
) -> Dict[str, DerivedAddress]:
    """Derive every PDA the instruction kind needs.

    Rules are resolved in table order, so later rules may use earlier
    results as seeds.

    Raises:
        MissingAccountError: If a seed refers to an account that is not known
        InvalidFieldError: If a seed refers to a missing argument
    """
    known: Dict[str, Pubkey] = dict(accounts)
    resolved: Dict[str, DerivedAddress] = {}

    for derived in DERIVED_ACCOUNTS.get(kind, ()):
        seeds: List[bytes] = []
        for part in derived.seeds:
            if isinstance(part, AccountSeed):
                if part.role not in known:
                    raise MissingAccountError(kind.name, [part.role])
                seeds.append(bytes(known[part.role]))
            elif isinstance(part, U64Seed):
                if part.arg not in args:
                    raise InvalidFieldError(f"missing argument {part.arg!r} for {kind.name}")
                value = args[part.arg]
                if not isinstance(value, int) or isinstance(value, bool):
                    raise InvalidFieldError(
                        f"{part.arg} must be an int, got {type(value).__name__}"
                    )
                seeds.append(encode_u64(value + part.offset, part.arg))
            else:
                seeds.append(part)

        result = find_program_address(seeds, program_id, deriver)
        resolved[derived.role] = result
        known[derived.role] = result.address

    return resolved
