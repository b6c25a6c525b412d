"""lnchannel: unsigned transactions and scripts for a two-party payment channel.

The package derives the keys a commitment transaction pays to
(revocation, delayed and HTLC keys, following BOLT #3), builds the
witness scripts for the funding, to_local and offered-HTLC outputs, and
assembles the unsigned funding, refund, commitment, HTLC-commitment and
HTLC-timeout transactions.  Outputs are always sorted the same way, so
both channel parties produce byte-identical transactions to sign.

Signing, broadcasting and fee calculation are left to the caller.
"""
from .errors import ChannelTxError, InvalidPoint, InvalidScalar, InvalidDelay, InvalidScriptEncoding, AmountOverflow
from .keys import point_from_bytes, point_from_hex, point_to_bytes, pubkey_of, privkey_expand, scalar_from_bytes, revocation_pubkey, revocation_privkey, derive_pubkey, derive_privkey, per_commitment_secret
from .keyset import KeySet, CommitmentKeys
from .script import funding_redeemscript, to_local_script, offered_htlc_script, p2wsh, p2wpkh, output_address
from .ordering import sort_outputs, is_ordered
from .tx import build_output, build_transaction, with_sequence, MAX_MONEY, SEQUENCE_FINAL
from .factory import ChannelTxFactory

__all__ = [
    "ChannelTxError",
    "InvalidPoint",
    "InvalidScalar",
    "InvalidDelay",
    "InvalidScriptEncoding",
    "AmountOverflow",
    "point_from_bytes",
    "point_from_hex",
    "point_to_bytes",
    "pubkey_of",
    "privkey_expand",
    "scalar_from_bytes",
    "revocation_pubkey",
    "revocation_privkey",
    "derive_pubkey",
    "derive_privkey",
    "per_commitment_secret",
    "KeySet",
    "CommitmentKeys",
    "funding_redeemscript",
    "to_local_script",
    "offered_htlc_script",
    "p2wsh",
    "p2wpkh",
    "output_address",
    "sort_outputs",
    "is_ordered",
    "build_output",
    "build_transaction",
    "with_sequence",
    "MAX_MONEY",
    "SEQUENCE_FINAL",
    "ChannelTxFactory",
]
