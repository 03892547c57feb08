"""Instruction builders for the Solido SDK.

``assemble_instruction`` turns an instruction kind, the deployment
addresses and caller inputs into a ``solders`` instruction. The
``build_*_instruction`` functions are typed wrappers around it.

Discriminants in the ``Data:`` lines below come from ``constants``; only
the deposit one is confirmed against the deployed program.
"""

import logging
from typing import Dict, Mapping, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from .accounts import build_account_metas, get_account_table, program_accounts
from .errors import InvalidFieldError
from .layout import get_layout
from .pda import (
    AddressDeriver,
    get_associated_token_address,
    resolve_derived_accounts,
    seed_arguments,
)
from .types import Criteria, InstructionKind, ProgramAddresses, RewardDistribution

logger = logging.getLogger(__name__)


def assemble_instruction(
    kind: InstructionKind,
    program_addresses: ProgramAddresses,
    accounts: Optional[Mapping[str, Pubkey]] = None,
    args: Optional[Mapping[str, int]] = None,
    deriver: Optional[AddressDeriver] = None,
) -> Instruction:
    """Assemble a complete instruction.

    Args:
        kind: Instruction variant to build
        program_addresses: Deployment the instruction targets
        accounts: Caller-supplied accounts, keyed by role name
        args: Payload fields and integer seed arguments
        deriver: Address deriver to use (defaults to SHA-256/ed25519)

    Any error from encoding, derivation or account resolution propagates
    unchanged; nothing is returned on failure.
    """
    layout = get_layout(kind)
    get_account_table(kind)
    accounts = dict(accounts or {})
    args = dict(args or {})

    unexpected = set(args) - set(layout.field_names) - seed_arguments(kind)
    if unexpected:
        raise InvalidFieldError(
            f"unexpected arguments for {kind.name}: {', '.join(sorted(unexpected))}"
        )

    data = layout.encode({name: args[name] for name in layout.field_names if name in args})

    known = {**accounts, **program_accounts(program_addresses)}
    derived = resolve_derived_accounts(
        kind, program_addresses.program_id, known, args, deriver
    )

    metas = build_account_metas(kind, program_addresses, accounts, derived)
    logger.debug(
        f"Assembled {kind.name} instruction: {len(metas)} accounts, {len(data)} bytes"
    )
    return Instruction(program_id=program_addresses.program_id, accounts=metas, data=data)


def _accounts(**roles: Optional[Pubkey]) -> Dict[str, Pubkey]:
    return {role: key for role, key in roles.items() if key is not None}


def build_deposit_instruction(
    sender: Pubkey,
    amount: int,
    program_addresses: ProgramAddresses,
    recipient: Optional[Pubkey] = None,
    deriver: Optional[AddressDeriver] = None,
) -> Instruction:
    """Build the deposit instruction (SOL in, stSOL out).

    The recipient defaults to the sender's associated stSOL account.

    Accounts:
    0. solido (writable)
    1. sender (signer, writable)
    2. recipient stSOL account (writable)
    3. st_sol_mint (writable)
    4. reserve_account (writable, PDA)
    5. mint_authority (PDA)
    6. token_program
    7. system_program

    Data: [1, amount (u64)]
    """
    if recipient is None:
        recipient = get_associated_token_address(
            sender, program_addresses.st_sol_mint, deriver=deriver
        )
    return assemble_instruction(
        InstructionKind.DEPOSIT,
        program_addresses,
        accounts={"sender": sender, "recipient": recipient},
        args={"amount": amount},
        deriver=deriver,
    )


def build_withdraw_instruction(
    st_sol_account_owner: Pubkey,
    st_sol_account: Pubkey,
    validator_vote_account: Pubkey,
    destination_stake_account: Pubkey,
    amount: int,
    validator_index: int,
    stake_seed: int,
    program_addresses: ProgramAddresses,
    validator_list: Optional[Pubkey] = None,
    deriver: Optional[AddressDeriver] = None,
) -> Instruction:
    """Build the withdraw instruction (stSOL in, stake account out).

    ``stake_seed`` selects the validator stake account to split from,
    normally the first seed of the validator's stake accounts.
    ``destination_stake_account`` must be a fresh keypair that signs.

    The account order is reconstructed and unverified against the
    deployed program.

    Data: [23, amount (u64), validator_index (u32)]
    """
    return assemble_instruction(
        InstructionKind.WITHDRAW,
        program_addresses,
        accounts=_accounts(
            st_sol_account_owner=st_sol_account_owner,
            st_sol_account=st_sol_account,
            validator_vote_account=validator_vote_account,
            destination_stake_account=destination_stake_account,
            validator_list=validator_list,
        ),
        args={
            "amount": amount,
            "validator_index": validator_index,
            "stake_seed": stake_seed,
        },
        deriver=deriver,
    )


def build_change_reward_distribution_instruction(
    manager: Pubkey,
    treasury_account: Pubkey,
    developer_account: Pubkey,
    reward_distribution: RewardDistribution,
    program_addresses: ProgramAddresses,
) -> Instruction:
    """Build the change_reward_distribution instruction.

    Data: [7, treasury_fee (u32), developer_fee (u32), st_sol_appreciation (u32)]
    """
    return assemble_instruction(
        InstructionKind.CHANGE_REWARD_DISTRIBUTION,
        program_addresses,
        accounts={
            "manager": manager,
            "treasury_account": treasury_account,
            "developer_account": developer_account,
        },
        args={
            "treasury_fee": reward_distribution.treasury_fee,
            "developer_fee": reward_distribution.developer_fee,
            "st_sol_appreciation": reward_distribution.st_sol_appreciation,
        },
    )


def build_add_validator_instruction(
    manager: Pubkey,
    validator_vote_account: Pubkey,
    program_addresses: ProgramAddresses,
    validator_list: Optional[Pubkey] = None,
) -> Instruction:
    """Build the add_validator instruction."""
    return assemble_instruction(
        InstructionKind.ADD_VALIDATOR,
        program_addresses,
        accounts=_accounts(
            manager=manager,
            validator_vote_account=validator_vote_account,
            validator_list=validator_list,
        ),
    )


def build_remove_validator_instruction(
    validator_vote_account: Pubkey,
    validator_index: int,
    program_addresses: ProgramAddresses,
    validator_list: Optional[Pubkey] = None,
) -> Instruction:
    """Build the remove_validator instruction. Callable by anyone."""
    return assemble_instruction(
        InstructionKind.REMOVE_VALIDATOR,
        program_addresses,
        accounts=_accounts(
            validator_vote_account_to_remove=validator_vote_account,
            validator_list=validator_list,
        ),
        args={"validator_index": validator_index},
    )


def build_deactivate_validator_instruction(
    manager: Pubkey,
    validator_vote_account: Pubkey,
    validator_index: int,
    program_addresses: ProgramAddresses,
    validator_list: Optional[Pubkey] = None,
) -> Instruction:
    """Build the deactivate_validator instruction."""
    return assemble_instruction(
        InstructionKind.DEACTIVATE_VALIDATOR,
        program_addresses,
        accounts=_accounts(
            manager=manager,
            validator_vote_account_to_deactivate=validator_vote_account,
            validator_list=validator_list,
        ),
        args={"validator_index": validator_index},
    )


def build_deactivate_if_violates_instruction(
    validator_vote_account: Pubkey,
    program_addresses: ProgramAddresses,
    validator_list: Optional[Pubkey] = None,
    validator_perf_list: Optional[Pubkey] = None,
) -> Instruction:
    """Build the deactivate_if_violates instruction. Callable by anyone."""
    return assemble_instruction(
        InstructionKind.DEACTIVATE_IF_VIOLATES,
        program_addresses,
        accounts=_accounts(
            validator_vote_account_to_deactivate=validator_vote_account,
            validator_list=validator_list,
            validator_perf_list=validator_perf_list,
        ),
    )


def build_add_maintainer_instruction(
    manager: Pubkey,
    maintainer: Pubkey,
    program_addresses: ProgramAddresses,
    maintainer_list: Optional[Pubkey] = None,
) -> Instruction:
    """Build the add_maintainer instruction."""
    return assemble_instruction(
        InstructionKind.ADD_MAINTAINER,
        program_addresses,
        accounts=_accounts(
            manager=manager,
            maintainer=maintainer,
            maintainer_list=maintainer_list,
        ),
    )


def build_remove_maintainer_instruction(
    manager: Pubkey,
    maintainer: Pubkey,
    maintainer_index: int,
    program_addresses: ProgramAddresses,
    maintainer_list: Optional[Pubkey] = None,
) -> Instruction:
    """Build the remove_maintainer instruction."""
    return assemble_instruction(
        InstructionKind.REMOVE_MAINTAINER,
        program_addresses,
        accounts=_accounts(
            manager=manager,
            maintainer=maintainer,
            maintainer_list=maintainer_list,
        ),
        args={"maintainer_index": maintainer_index},
    )


def build_merge_stake_instruction(
    validator_vote_account: Pubkey,
    validator_index: int,
    stake_seed_begin: int,
    program_addresses: ProgramAddresses,
    validator_list: Optional[Pubkey] = None,
    deriver: Optional[AddressDeriver] = None,
) -> Instruction:
    """Build the merge_stake instruction.

    Merges the stake account at ``stake_seed_begin`` into the one at
    ``stake_seed_begin + 1``. Callable by anyone.

    Accounts:
    0. solido (writable)
    1. validator_vote_account
    2. from_stake (writable, PDA)
    3. to_stake (writable, PDA)
    4. stake_authority (PDA)
    5. validator_list (writable)
    6. sysvar_clock
    7. stake_history
    8. stake_program
    """
    return assemble_instruction(
        InstructionKind.MERGE_STAKE,
        program_addresses,
        accounts=_accounts(
            validator_vote_account=validator_vote_account,
            validator_list=validator_list,
        ),
        args={"validator_index": validator_index, "stake_seed_begin": stake_seed_begin},
        deriver=deriver,
    )


def build_change_criteria_instruction(
    manager: Pubkey,
    criteria: Criteria,
    program_addresses: ProgramAddresses,
) -> Instruction:
    """Build the change_criteria instruction.

    Data: [22, max_commission (u8), min_block_production_rate (u64),
    min_vote_success_rate (u64), min_uptime (u64)]

    Raises:
        InvalidFieldError: If max_commission is not an int or is above
            100 percent
    """
    max_commission = criteria.max_commission
    if not isinstance(max_commission, int) or isinstance(max_commission, bool):
        raise InvalidFieldError(
            f"max_commission must be an int, got {type(max_commission).__name__}"
        )
    # Rejected on-chain as ValidationCommissionOutOfBounds
    if max_commission > 100:
        raise InvalidFieldError(
            f"max_commission must be at most 100, got {max_commission}"
        )
    return assemble_instruction(
        InstructionKind.CHANGE_CRITERIA,
        program_addresses,
        accounts={"manager": manager},
        args={
            "max_commission": criteria.max_commission,
            "min_block_production_rate": criteria.min_block_production_rate,
            "min_vote_success_rate": criteria.min_vote_success_rate,
            "min_uptime": criteria.min_uptime,
        },
    )
