"""A contract tracking each validator set's multisig keys, agreed on by vote."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from .extension import (
    AccountId,
    Curve,
    GlobalValidatorSetId,
    Key,
    SeraiExtension,
    TestExtension,
    ValidatorSetIndex,
)
from .scale import blake2x256, encode_keys

KeysHash = bytes

_MAX_CURVES = 256
_TOPIC_LEN = 32


def _topic(prefix: bytes, value: bytes) -> bytes:
    encoded = prefix + value
    if len(encoded) < _TOPIC_LEN:
        return encoded.ljust(_TOPIC_LEN, b"\x00")
    return blake2x256(encoded)


class MultisigError(Exception):
    """Raised when a contract call fails; `kind` says which check failed."""

    NON_EXISTENT_VALIDATOR_SET = "non_existent_validator_set"
    NON_EXISTENT_KEY = "non_existent_key"
    NON_EXISTENT_CURVE = "non_existent_curve"
    NOT_VALIDATOR = "not_validator"
    ALREADY_GENERATED_KEYS = "already_generated_keys"
    ALREADY_VOTED = "already_voted"

    def __init__(self, kind: str):
        super().__init__(kind.replace("_", " "))
        self.kind = kind


@dataclass(frozen=True)
class Vote:
    """A validator voted for a set of keys; keys are only carried by the first vote."""

    validator: AccountId
    global_validator_set: GlobalValidatorSetId
    validator_set: ValidatorSetIndex
    hash: KeysHash
    keys: Optional[List[Optional[Key]]] = None

    def topics(self) -> List[bytes]:
        return [
            _topic(b"", b"Multisig::Vote"),
            _topic(b"Multisig::Vote::validator", bytes(self.validator)),
            _topic(
                b"Multisig::Vote::global_validator_set",
                self.global_validator_set.to_bytes(4, "little"),
            ),
            _topic(b"Multisig::Vote::validator_set", bytes([self.validator_set])),
            _topic(b"Multisig::Vote::hash", bytes(self.hash)),
        ]


@dataclass(frozen=True)
class KeyGen:
    """A validator set's keys were voted in by all of its shares."""

    global_validator_set: GlobalValidatorSetId
    validator_set: ValidatorSetIndex
    hash: KeysHash

    def topics(self) -> List[bytes]:
        return [
            _topic(b"", b"Multisig::KeyGen"),
            _topic(
                b"Multisig::KeyGen::global_validator_set",
                self.global_validator_set.to_bytes(4, "little"),
            ),
            _topic(b"Multisig::KeyGen::validator_set", bytes([self.validator_set])),
            _topic(b"Multisig::KeyGen::hash", bytes(self.hash)),
        ]


Event = Union[Vote, KeyGen]


@dataclass
class Environment:
    """The calling account, the chain extension and the events emitted so far."""

    extension: SeraiExtension = field(default_factory=TestExtension)
    caller: AccountId = bytes(32)
    events: List[Event] = field(default_factory=list)

    def emit_event(self, event: Event) -> None:
        self.events.append(event)


class Multisig:
    """The current multisig keys of every validator set."""

    def __init__(self, env: Optional[Environment] = None):
        self.env = env if env is not None else Environment()
        self._updated_at: Dict[ValidatorSetIndex, GlobalValidatorSetId] = {}
        self._keys: Dict[Tuple[ValidatorSetIndex, Curve], Key] = {}
        self._voted: Set[Tuple[AccountId, KeysHash]] = set()
        # Keyed by the global set too, so bonds moved to a new account cannot vote twice
        self._votes: Dict[Tuple[GlobalValidatorSetId, ValidatorSetIndex, KeysHash], int] = {}

    def updated_at(self, validator_set: ValidatorSetIndex) -> GlobalValidatorSetId:
        """The global validator set ID under which this set last updated its keys."""
        try:
            return self._updated_at[validator_set]
        except KeyError:
            raise MultisigError(MultisigError.NON_EXISTENT_VALIDATOR_SET) from None

    def key(self, validator_set: ValidatorSetIndex, curve: Curve) -> Key:
        """The key in use by a validator set for a curve."""
        try:
            return self._keys[(validator_set, curve)]
        except KeyError:
            raise MultisigError(MultisigError.NON_EXISTENT_KEY) from None

    def vote(self, keys: Sequence[Optional[Key]]) -> None:
        """Vote, as the caller, for one optional key per curve."""
        keys = [None if key is None else bytes(key) for key in keys]
        if len(keys) > _MAX_CURVES:
            raise MultisigError(MultisigError.NON_EXISTENT_CURVE)

        extension = self.env.extension
        validator = bytes(self.env.caller)
        active = extension.active_validator(validator)
        if active is None:
            raise MultisigError(MultisigError.NOT_VALIDATOR)
        validator_set, shares = active

        # Only the first keys voted in under a global validator set count
        global_validator_set = extension.global_validator_set_id()
        if self._updated_at.get(validator_set) == global_validator_set:
            raise MultisigError(MultisigError.ALREADY_GENERATED_KEYS)

        keys_hash = blake2x256(encode_keys(keys))
        if (validator, keys_hash) in self._voted:
            raise MultisigError(MultisigError.ALREADY_VOTED)
        self._voted.add((validator, keys_hash))

        tally_key = (global_validator_set, validator_set, keys_hash)
        previous = self._votes.get(tally_key)
        self.env.emit_event(
            Vote(
                validator=validator,
                global_validator_set=global_validator_set,
                validator_set=validator_set,
                hash=keys_hash,
                keys=list(keys) if previous is None else None,
            )
        )
        votes = shares if previous is None else previous + shares
        self._votes[tally_key] = votes

        if votes == extension.validator_set_shares(validator_set):
            self._updated_at[validator_set] = global_validator_set
            for curve, key in enumerate(keys):
                if key is not None:
                    self._keys[(validator_set, curve)] = key
            self.env.emit_event(KeyGen(global_validator_set, validator_set, keys_hash))