"""Solido SDK - Python SDK for the Solido liquid staking program on Solana.

The `program` module encodes instructions, derives program addresses and
assembles `solders` instructions ready to be added to a transaction.
Signing and submission are left to the caller.

Example:
    from solido_sdk import ProgramAddresses, build_deposit_instruction

    ix = build_deposit_instruction(
        sender=wallet.pubkey(),
        amount=1_000_000_000,
        program_addresses=ProgramAddresses.mainnet(),
    )
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

from . import program

# ============================================================================
# CONVENIENCE RE-EXPORTS FROM PROGRAM MODULE
# ============================================================================

from .program import (
    # Types
    AccountRole,
    Criteria,
    DerivedAddress,
    InstructionKind,
    ProgramAddresses,
    RewardDistribution,
    # Constants
    PROGRAM_ID,
    SOLIDO_INSTANCE_ID,
    ST_SOL_MINT,
    TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    STAKE_PROGRAM_ID,
    # Errors
    SolidoError,
    InvalidSeedError,
    DerivationExhaustedError,
    FieldOverflowError,
    MalformedPayloadError,
    MissingAccountError,
    InvalidFieldError,
    UnsupportedInstructionError,
    ConfigError,
    # Crypto
    CryptoBackend,
    Ed25519Sha256Backend,
    # Layout Codec
    encode_instruction_data,
    decode_instruction_data,
    # PDA Functions
    AddressDeriver,
    find_program_address,
    create_program_address,
    get_associated_token_address,
    get_mint_authority_pda,
    get_reserve_account_pda,
    get_stake_authority_pda,
    get_rewards_withdraw_authority_pda,
    get_validator_stake_account_pda,
    get_validator_unstake_account_pda,
    # Accounts
    build_account_metas,
    # Instruction Builders
    assemble_instruction,
    build_deposit_instruction,
    build_withdraw_instruction,
    build_change_reward_distribution_instruction,
    build_add_validator_instruction,
    build_remove_validator_instruction,
    build_deactivate_validator_instruction,
    build_deactivate_if_violates_instruction,
    build_add_maintainer_instruction,
    build_remove_maintainer_instruction,
    build_merge_stake_instruction,
    build_change_criteria_instruction,
)

__all__ = [
    # Version
    "__version__",
    # Modules
    "program",
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
    "SYSTEM_PROGRAM_ID",
    "STAKE_PROGRAM_ID",
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
    # Layout Codec
    "encode_instruction_data",
    "decode_instruction_data",
    # PDA Functions
    "AddressDeriver",
    "find_program_address",
    "create_program_address",
    "get_associated_token_address",
    "get_mint_authority_pda",
    "get_reserve_account_pda",
    "get_stake_authority_pda",
    "get_rewards_withdraw_authority_pda",
    "get_validator_stake_account_pda",
    "get_validator_unstake_account_pda",
    # Accounts
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
