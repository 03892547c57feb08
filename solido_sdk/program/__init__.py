"""On-chain program interaction module for Solido.

This module provides instruction encoding, program address derivation and
instruction builders for the Solido liquid staking program on Solana.
"""

from .accounts import ACCOUNT_TABLES, STATIC_ACCOUNTS, build_account_metas
from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MAX_SEED_LEN,
    MAX_SEEDS,
    PDA_MARKER,
    PROGRAM_ID,
    SEED_MINT_AUTHORITY,
    SEED_RESERVE_ACCOUNT,
    SEED_REWARDS_WITHDRAW_AUTHORITY,
    SEED_STAKE_AUTHORITY,
    SEED_VALIDATOR_STAKE_ACCOUNT,
    SEED_VALIDATOR_UNSTAKE_ACCOUNT,
    SOLIDO_INSTANCE_ID,
    ST_SOL_MINT,
    STAKE_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    SYSVAR_CLOCK_ID,
    SYSVAR_STAKE_HISTORY_ID,
    TOKEN_PROGRAM_ID,
)
from .curve import CryptoBackend, Ed25519Sha256Backend, is_on_ed25519_curve
from .errors import (
    ConfigError,
    DerivationExhaustedError,
    FieldOverflowError,
    InvalidFieldError,
    InvalidSeedError,
    MalformedPayloadError,
    MissingAccountError,
    SolidoError,
    UnsupportedInstructionError,
)
from .instructions import (
    assemble_instruction,
    build_add_maintainer_instruction,
    build_add_validator_instruction,
    build_change_criteria_instruction,
    build_change_reward_distribution_instruction,
    build_deactivate_if_violates_instruction,
    build_deactivate_validator_instruction,
    build_deposit_instruction,
    build_merge_stake_instruction,
    build_remove_maintainer_instruction,
    build_remove_validator_instruction,
    build_withdraw_instruction,
)
from .layout import (
    LAYOUTS,
    InstructionLayout,
    decode_instruction_data,
    encode_instruction_data,
)
from .pda import (
    DERIVED_ACCOUNTS,
    AddressDeriver,
    create_program_address,
    find_program_address,
    get_associated_token_address,
    get_authority_pda,
    get_mint_authority_pda,
    get_reserve_account_pda,
    get_rewards_withdraw_authority_pda,
    get_stake_authority_pda,
    get_validator_stake_account_pda,
    get_validator_unstake_account_pda,
)
from .types import (
    AccountRole,
    Criteria,
    DerivedAddress,
    InstructionKind,
    ProgramAddresses,
    RewardDistribution,
)

__all__ = [
    # Types
    "AccountRole",
    "Criteria",
    "DerivedAddress",
    "InstructionKind",
    "ProgramAddresses",
    "RewardDistribution",
    # Constants
    "PROGRAM_ID",
    "SOLIDO_INSTANCE_ID",
    "ST_SOL_MINT",
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    "STAKE_PROGRAM_ID",
    "SYSVAR_CLOCK_ID",
    "SYSVAR_STAKE_HISTORY_ID",
    "SEED_RESERVE_ACCOUNT",
    "SEED_MINT_AUTHORITY",
    "SEED_STAKE_AUTHORITY",
    "SEED_REWARDS_WITHDRAW_AUTHORITY",
    "SEED_VALIDATOR_STAKE_ACCOUNT",
    "SEED_VALIDATOR_UNSTAKE_ACCOUNT",
    "PDA_MARKER",
    "MAX_SEED_LEN",
    "MAX_SEEDS",
    # Errors
    "SolidoError",
    "InvalidSeedError",
    "DerivationExhaustedError",
    "FieldOverflowError",
    "MalformedPayloadError",
    "MissingAccountError",
    "InvalidFieldError",
    "UnsupportedInstructionError",
    "ConfigError",
    # Crypto
    "CryptoBackend",
    "Ed25519Sha256Backend",
    "is_on_ed25519_curve",
    # Layout Codec
    "LAYOUTS",
    "InstructionLayout",
    "encode_instruction_data",
    "decode_instruction_data",
    # PDA Functions
    "DERIVED_ACCOUNTS",
    "AddressDeriver",
    "find_program_address",
    "create_program_address",
    "get_authority_pda",
    "get_reserve_account_pda",
    "get_mint_authority_pda",
    "get_stake_authority_pda",
    "get_rewards_withdraw_authority_pda",
    "get_validator_stake_account_pda",
    "get_validator_unstake_account_pda",
    "get_associated_token_address",
    # Accounts
    "ACCOUNT_TABLES",
    "STATIC_ACCOUNTS",
    "build_account_metas",
    # Instruction Builders
    "assemble_instruction",
    "build_deposit_instruction",
    "build_withdraw_instruction",
    "build_change_reward_distribution_instruction",
    "build_add_validator_instruction",
    "build_remove_validator_instruction",
    "build_deactivate_validator_instruction",
    "build_deactivate_if_violates_instruction",
    "build_add_maintainer_instruction",
    "build_remove_maintainer_instruction",
    "build_merge_stake_instruction",
    "build_change_criteria_instruction",
]
