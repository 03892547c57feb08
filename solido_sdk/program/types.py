"""Type definitions for the Solido SDK."""

import logging
import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping, NamedTuple, Optional

from solders.pubkey import Pubkey

from .constants import (
    ENV_INSTANCE_ID,
    ENV_MAINTAINER_LIST,
    ENV_PROGRAM_ID,
    ENV_ST_SOL_MINT,
    ENV_VALIDATOR_LIST,
    ENV_VALIDATOR_PERF_LIST,
    INSTRUCTION_ADD_MAINTAINER,
    INSTRUCTION_ADD_VALIDATOR,
    INSTRUCTION_CHANGE_CRITERIA,
    INSTRUCTION_CHANGE_REWARD_DISTRIBUTION,
    INSTRUCTION_DEACTIVATE_IF_VIOLATES,
    INSTRUCTION_DEACTIVATE_VALIDATOR,
    INSTRUCTION_DEPOSIT,
    INSTRUCTION_MERGE_STAKE,
    INSTRUCTION_REMOVE_MAINTAINER,
    INSTRUCTION_REMOVE_VALIDATOR,
    INSTRUCTION_WITHDRAW,
    PROGRAM_ID,
    SOLIDO_INSTANCE_ID,
    ST_SOL_MINT,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)


class InstructionKind(IntEnum):
    """Solido instruction variants, valued by their discriminant byte."""

    DEPOSIT = INSTRUCTION_DEPOSIT
    CHANGE_REWARD_DISTRIBUTION = INSTRUCTION_CHANGE_REWARD_DISTRIBUTION
    ADD_VALIDATOR = INSTRUCTION_ADD_VALIDATOR
    REMOVE_VALIDATOR = INSTRUCTION_REMOVE_VALIDATOR
    DEACTIVATE_VALIDATOR = INSTRUCTION_DEACTIVATE_VALIDATOR
    ADD_MAINTAINER = INSTRUCTION_ADD_MAINTAINER
    REMOVE_MAINTAINER = INSTRUCTION_REMOVE_MAINTAINER
    MERGE_STAKE = INSTRUCTION_MERGE_STAKE
    CHANGE_CRITERIA = INSTRUCTION_CHANGE_CRITERIA
    WITHDRAW = INSTRUCTION_WITHDRAW
    DEACTIVATE_IF_VIOLATES = INSTRUCTION_DEACTIVATE_IF_VIOLATES


class DerivedAddress(NamedTuple):
    """A program derived address and the bump seed that produced it."""

    address: Pubkey
    bump: int


class AccountRole(NamedTuple):
    """One position in an instruction's account list."""

    name: str
    is_signer: bool = False
    is_writable: bool = False


@dataclass(frozen=True)
class ProgramAddresses:
    """Addresses identifying one Solido deployment.

    The list accounts are only needed by instructions that touch the
    validator or maintainer lists.
    """

    program_id: Pubkey
    solido_instance_id: Pubkey
    st_sol_mint: Pubkey
    validator_list: Optional[Pubkey] = None
    maintainer_list: Optional[Pubkey] = None
    validator_perf_list: Optional[Pubkey] = None

    @classmethod
    def mainnet(cls) -> "ProgramAddresses":
        """Addresses of the mainnet deployment."""
        return cls(
            program_id=PROGRAM_ID,
            solido_instance_id=SOLIDO_INSTANCE_ID,
            st_sol_mint=ST_SOL_MINT,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Optional[str]]) -> "ProgramAddresses":
        """Create from a dictionary of base58 address strings.

        Required keys: program_id, solido_instance_id, st_sol_mint.
        Optional keys: validator_list, maintainer_list, validator_perf_list.

        Raises:
            ConfigError: If a required key is missing or an address is invalid
        """
        return cls(
            program_id=_parse_pubkey(data, "program_id", required=True),
            solido_instance_id=_parse_pubkey(data, "solido_instance_id", required=True),
            st_sol_mint=_parse_pubkey(data, "st_sol_mint", required=True),
            validator_list=_parse_pubkey(data, "validator_list"),
            maintainer_list=_parse_pubkey(data, "maintainer_list"),
            validator_perf_list=_parse_pubkey(data, "validator_perf_list"),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProgramAddresses":
        """Load addresses from SOLIDO_* environment variables."""
        if environ is None:
            environ = os.environ
        addresses = cls.from_dict(
            {
                "program_id": environ.get(ENV_PROGRAM_ID),
                "solido_instance_id": environ.get(ENV_INSTANCE_ID),
                "st_sol_mint": environ.get(ENV_ST_SOL_MINT),
                "validator_list": environ.get(ENV_VALIDATOR_LIST),
                "maintainer_list": environ.get(ENV_MAINTAINER_LIST),
                "validator_perf_list": environ.get(ENV_VALIDATOR_PERF_LIST),
            }
        )
        logger.info(
            f"Loaded Solido deployment from environment: "
            f"program={addresses.program_id} instance={addresses.solido_instance_id}"
        )
        return addresses


def _parse_pubkey(
    data: Mapping[str, Optional[str]], key: str, required: bool = False
) -> Optional[Pubkey]:
    value = data.get(key)
    if not value:
        if required:
            raise ConfigError(f"missing {key}")
        return None
    try:
        return Pubkey.from_string(value)
    except ValueError as e:
        raise ConfigError(f"{key} is not a valid address: {value!r} ({e})")


@dataclass
class RewardDistribution:
    """Relative shares of staking rewards."""

    treasury_fee: int
    developer_fee: int
    st_sol_appreciation: int


@dataclass
class Criteria:
    """Validator curation thresholds."""

    max_commission: int  # percent
    min_block_production_rate: int
    min_vote_success_rate: int
    min_uptime: int
