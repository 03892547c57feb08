"""Account ordering tables for Solido instructions.

The on-chain program reads accounts by position, so each instruction kind
has a fixed table of roles. Roles are filled from well-known program ids,
the deployment's ``ProgramAddresses``, derived PDAs and caller accounts.
"""

from typing import Dict, List, Mapping, Optional, Tuple

from solders.instruction import AccountMeta
from solders.pubkey import Pubkey

from .constants import (
    STAKE_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    SYSVAR_CLOCK_ID,
    SYSVAR_STAKE_HISTORY_ID,
    TOKEN_PROGRAM_ID,
)
from .errors import InvalidFieldError, MissingAccountError, UnsupportedInstructionError
from .types import AccountRole, DerivedAddress, InstructionKind, ProgramAddresses

STATIC_ACCOUNTS: Dict[str, Pubkey] = {
    "token_program": TOKEN_PROGRAM_ID,
    "system_program": SYSTEM_PROGRAM_ID,
    "stake_program": STAKE_PROGRAM_ID,
    "sysvar_clock": SYSVAR_CLOCK_ID,
    "stake_history": SYSVAR_STAKE_HISTORY_ID,
}

_SOLIDO = AccountRole("solido", is_writable=True)
_MANAGER = AccountRole("manager", is_signer=True)
_VALIDATOR_LIST = AccountRole("validator_list", is_writable=True)
_MAINTAINER_LIST = AccountRole("maintainer_list", is_writable=True)

ACCOUNT_TABLES: Dict[InstructionKind, Tuple[AccountRole, ...]] = {
    InstructionKind.DEPOSIT: (
        _SOLIDO,
        AccountRole("sender", is_signer=True, is_writable=True),
        AccountRole("recipient", is_writable=True),
        AccountRole("st_sol_mint", is_writable=True),
        AccountRole("reserve_account", is_writable=True),
        AccountRole("mint_authority"),
        AccountRole("token_program"),
        AccountRole("system_program"),
    ),
    InstructionKind.WITHDRAW: (
        _SOLIDO,
        AccountRole("st_sol_account_owner", is_signer=True),
        AccountRole("st_sol_account", is_writable=True),
        AccountRole("st_sol_mint", is_writable=True),
        AccountRole("validator_vote_account"),
        AccountRole("source_stake_account", is_writable=True),
        AccountRole("destination_stake_account", is_signer=True, is_writable=True),
        AccountRole("stake_authority"),
        _VALIDATOR_LIST,
        AccountRole("token_program"),
        AccountRole("stake_program"),
        AccountRole("system_program"),
        AccountRole("sysvar_clock"),
    ),
    InstructionKind.CHANGE_REWARD_DISTRIBUTION: (
        _SOLIDO,
        _MANAGER,
        AccountRole("treasury_account"),
        AccountRole("developer_account"),
    ),
    InstructionKind.ADD_VALIDATOR: (
        _SOLIDO,
        _MANAGER,
        AccountRole("validator_vote_account"),
        _VALIDATOR_LIST,
    ),
    InstructionKind.REMOVE_VALIDATOR: (
        _SOLIDO,
        AccountRole("validator_vote_account_to_remove"),
        _VALIDATOR_LIST,
    ),
    InstructionKind.DEACTIVATE_VALIDATOR: (
        _SOLIDO,
        _MANAGER,
        AccountRole("validator_vote_account_to_deactivate"),
        _VALIDATOR_LIST,
    ),
    InstructionKind.ADD_MAINTAINER: (
        _SOLIDO,
        _MANAGER,
        AccountRole("maintainer"),
        _MAINTAINER_LIST,
    ),
    InstructionKind.REMOVE_MAINTAINER: (
        _SOLIDO,
        _MANAGER,
        AccountRole("maintainer"),
        _MAINTAINER_LIST,
    ),
    InstructionKind.MERGE_STAKE: (
        _SOLIDO,
        AccountRole("validator_vote_account"),
        AccountRole("from_stake", is_writable=True),
        AccountRole("to_stake", is_writable=True),
        AccountRole("stake_authority"),
        _VALIDATOR_LIST,
        AccountRole("sysvar_clock"),
        AccountRole("stake_history"),
        AccountRole("stake_program"),
    ),
    InstructionKind.CHANGE_CRITERIA: (
        _SOLIDO,
        _MANAGER,
    ),
    InstructionKind.DEACTIVATE_IF_VIOLATES: (
        _SOLIDO,
        AccountRole("validator_vote_account_to_deactivate"),
        _VALIDATOR_LIST,
        AccountRole("validator_perf_list"),
    ),
}


def program_accounts(program_addresses: ProgramAddresses) -> Dict[str, Pubkey]:
    """Roles filled by the deployment itself."""
    accounts = {
        "solido": program_addresses.solido_instance_id,
        "st_sol_mint": program_addresses.st_sol_mint,
    }
    optional = {
        "validator_list": program_addresses.validator_list,
        "maintainer_list": program_addresses.maintainer_list,
        "validator_perf_list": program_addresses.validator_perf_list,
    }
    accounts.update({role: key for role, key in optional.items() if key is not None})
    return accounts


def get_account_table(kind: InstructionKind) -> Tuple[AccountRole, ...]:
    """Ordered account roles of an instruction kind."""
    try:
        return ACCOUNT_TABLES[kind]
    except (KeyError, TypeError):
        raise UnsupportedInstructionError(kind) from None


def build_account_metas(
    kind: InstructionKind,
    program_addresses: ProgramAddresses,
    caller_accounts: Optional[Mapping[str, Pubkey]] = None,
    derived_accounts: Optional[Mapping[str, DerivedAddress]] = None,
) -> List[AccountMeta]:
    """Build the ordered account list of an instruction.

    Caller accounts may only fill roles that the SDK cannot resolve itself,
    except for the deployment's list accounts, which callers may override.

    Raises:
        MissingAccountError: If any role of the table cannot be filled
        InvalidFieldError: If a caller account is unknown to the kind or
            would replace a derived or fixed address
    """
    table = get_account_table(kind)
    caller_accounts = dict(caller_accounts or {})
    derived_accounts = dict(derived_accounts or {})

    deployment = program_accounts(program_addresses)
    fixed = {
        "solido": deployment["solido"],
        "st_sol_mint": deployment["st_sol_mint"],
        **STATIC_ACCOUNTS,
        **{role: d.address for role, d in derived_accounts.items()},
    }

    roles = {role.name for role in table}
    unexpected = set(caller_accounts) - roles
    if unexpected:
        raise InvalidFieldError(
            f"unexpected accounts for {kind.name}: {', '.join(sorted(unexpected))}"
        )
    overriding = set(caller_accounts) & set(fixed)
    if overriding:
        raise InvalidFieldError(
            f"accounts resolved by the SDK cannot be supplied: {', '.join(sorted(overriding))}"
        )

    resolved = {**deployment, **fixed, **caller_accounts}
    missing = [role.name for role in table if role.name not in resolved]
    if missing:
        raise MissingAccountError(kind.name, missing)

    return [
        AccountMeta(
            pubkey=resolved[role.name],
            is_signer=role.is_signer,
            is_writable=role.is_writable,
        )
        for role in table
    ]
