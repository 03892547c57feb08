"""Constants for the Solido program module."""

from solders.pubkey import Pubkey

# ============================================================================
# PROGRAM IDS
# ============================================================================

# Mainnet deployment
PROGRAM_ID = Pubkey.from_string("CrX7kMhLC3cSsXJdT7JDgqrRVWGnUpX3gfEfxxU2NVLi")
SOLIDO_INSTANCE_ID = Pubkey.from_string("49Yi1TKkNyYjPAFdR9LBvoHcUjuPX4Df5T5yv39w2XTn")
ST_SOL_MINT = Pubkey.from_string("7dHbWXmci3dT8UFYWYZweBLXgycu7Y3iL6trKn1Y7ARj")

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")
STAKE_PROGRAM_ID = Pubkey.from_string("Stake11111111111111111111111111111111111111")
SYSVAR_CLOCK_ID = Pubkey.from_string("SysvarC1ock11111111111111111111111111111111")
SYSVAR_STAKE_HISTORY_ID = Pubkey.from_string("SysvarStakeHistory1111111111111111111111111")

# ============================================================================
# PDA SEEDS
# ============================================================================

SEED_RESERVE_ACCOUNT = b"reserve_account"
SEED_MINT_AUTHORITY = b"mint_authority"
SEED_STAKE_AUTHORITY = b"stake_authority"
SEED_REWARDS_WITHDRAW_AUTHORITY = b"rewards_withdraw_authority"
SEED_VALIDATOR_STAKE_ACCOUNT = b"validator_stake_account"
SEED_VALIDATOR_UNSTAKE_ACCOUNT = b"validator_unstake_account"

# ============================================================================
# DERIVATION LIMITS
# ============================================================================

# Appended to every PDA hash input; must match the runtime exactly
PDA_MARKER = b"ProgramDerivedAddress"

MAX_SEED_LEN = 32
# Includes the bump seed
MAX_SEEDS = 16

# ============================================================================
# INSTRUCTION DISCRIMINANTS
# ============================================================================

# Only DEPOSIT is confirmed against the deposit client. The remaining values
# follow the reconstructed SolidoInstruction variant order and are unverified
# against the deployed program.
INSTRUCTION_DEPOSIT = 1
INSTRUCTION_CHANGE_REWARD_DISTRIBUTION = 7
INSTRUCTION_ADD_VALIDATOR = 16
INSTRUCTION_REMOVE_VALIDATOR = 17
INSTRUCTION_DEACTIVATE_VALIDATOR = 18
INSTRUCTION_ADD_MAINTAINER = 19
INSTRUCTION_REMOVE_MAINTAINER = 20
INSTRUCTION_MERGE_STAKE = 21
INSTRUCTION_CHANGE_CRITERIA = 22
INSTRUCTION_WITHDRAW = 23
INSTRUCTION_DEACTIVATE_IF_VIOLATES = 24

# ============================================================================
# ENVIRONMENT
# ============================================================================

ENV_PROGRAM_ID = "SOLIDO_PROGRAM_ID"
ENV_INSTANCE_ID = "SOLIDO_INSTANCE_ID"
ENV_ST_SOL_MINT = "SOLIDO_ST_SOL_MINT"
ENV_VALIDATOR_LIST = "SOLIDO_VALIDATOR_LIST"
ENV_MAINTAINER_LIST = "SOLIDO_MAINTAINER_LIST"
ENV_VALIDATOR_PERF_LIST = "SOLIDO_VALIDATOR_PERF_LIST"
