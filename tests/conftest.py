"""Pytest configuration and shared fixtures."""

import pytest
from solders.pubkey import Pubkey

from solido_sdk import Ed25519Sha256Backend, ProgramAddresses


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (run offline)")


class CountingBackend(Ed25519Sha256Backend):
    """Default primitives that record how often they are used."""

    def __init__(self):
        self.hash_calls = 0
        self.curve_checks = 0

    def hash(self, data: bytes) -> bytes:
        self.hash_calls += 1
        return super().hash(data)

    def is_on_curve(self, point: bytes) -> bool:
        self.curve_checks += 1
        return super().is_on_curve(point)


class AlwaysOnCurveBackend(CountingBackend):
    """Backend under which every candidate address is a curve point."""

    def is_on_curve(self, point: bytes) -> bool:
        self.curve_checks += 1
        return True


@pytest.fixture
def program_addresses():
    return ProgramAddresses(
        program_id=Pubkey.new_unique(),
        solido_instance_id=Pubkey.new_unique(),
        st_sol_mint=Pubkey.new_unique(),
        validator_list=Pubkey.new_unique(),
        maintainer_list=Pubkey.new_unique(),
        validator_perf_list=Pubkey.new_unique(),
    )


@pytest.fixture
def bare_program_addresses():
    """Deployment without any list accounts configured."""
    return ProgramAddresses(
        program_id=Pubkey.new_unique(),
        solido_instance_id=Pubkey.new_unique(),
        st_sol_mint=Pubkey.new_unique(),
    )


@pytest.fixture
def counting_backend():
    return CountingBackend()


@pytest.fixture
def exhausted_backend():
    return AlwaysOnCurveBackend()
