"""Monero primitives, CLSAG, RingCT, transactions and wallet scanning, with a multisig key-voting model."""

__version__ = "0.1.0"