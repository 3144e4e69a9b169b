"""The chain extension the multisig contract queries, and an in-memory test double."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Curve = int
Coin = int
GlobalValidatorSetId = int
ValidatorSetIndex = int
Key = bytes
AccountId = bytes

_TEST_VALIDATOR_COUNT = 5
_TEST_GLOBAL_VALIDATOR_SET_ID = 1
_TEST_VALIDATOR_SETS = 1
_TEST_VALIDATOR_SET = 0
_TEST_SHARES_PER_VALIDATOR = 1


class SeraiExtension(ABC):
    """What the chain tells a contract about its validators."""

    @abstractmethod
    def global_validator_set_id(self) -> GlobalValidatorSetId:
        """The ID of the current global validator set."""

    @abstractmethod
    def validator_sets(self) -> int:
        """How many validator sets are active within the global validator set."""

    @abstractmethod
    def validator_set_shares(self, validator_set: ValidatorSetIndex) -> int:
        """How many key shares the validator set uses."""

    @abstractmethod
    def active_validator(
        self, account: AccountId
    ) -> Optional[Tuple[ValidatorSetIndex, int]]:
        """The account's validator set and share count, if it is an active validator."""


def test_validators() -> List[AccountId]:
    """The accounts the test extension treats as validators."""
    return [bytes([n]) * 32 for n in range(1, _TEST_VALIDATOR_COUNT + 1)]


test_validators.__test__ = False  # type: ignore[attr-defined]


@dataclass
class TestExtension(SeraiExtension):
    """One validator set of fixed validators, each holding one key share."""

    __test__ = False

    validators: List[AccountId] = field(default_factory=test_validators)

    def global_validator_set_id(self) -> GlobalValidatorSetId:
        # Non-zero, so fresh contract storage never matches it
        return _TEST_GLOBAL_VALIDATOR_SET_ID

    def validator_sets(self) -> int:
        return _TEST_VALIDATOR_SETS

    def validator_set_shares(self, validator_set: ValidatorSetIndex) -> int:
        return len(self.validators) * _TEST_SHARES_PER_VALIDATOR

    def active_validator(
        self, account: AccountId
    ) -> Optional[Tuple[ValidatorSetIndex, int]]:
        if bytes(account) in self.validators:
            return _TEST_VALIDATOR_SET, _TEST_SHARES_PER_VALIDATOR
        return None