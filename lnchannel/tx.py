"""Unsigned transaction assembly.

Nothing here reorders anything: callers hand over outputs already sorted
by lnchannel.ordering.sort_outputs, and inputs in the order they want.
"""
from typing import Iterable, List, Union

from bitcoin.core import (COIN, CMutableTransaction, CMutableTxIn, CTxIn, CTxInWitness, CTxOut,
                          CTxWitness)
from bitcoin.core.script import CScript

from .errors import AmountOverflow, InvalidDelay
from .ordering import is_ordered

MAX_MONEY = 21000000 * COIN
MAX_LOCKTIME = 0xffffffff

# nSequence which disables both nLockTime and relative locktime.
SEQUENCE_FINAL = 0xffffffff

TxInLike = Union[CTxIn, CMutableTxIn]


def check_amount(amount: int) -> int:
    """Satoshi amounts are capped at MAX_MONEY (21M BTC), not 2^64-1.

    Anything above that is rejected with AmountOverflow even though it
    would fit the 64-bit nValue field.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise AmountOverflow("amount {!r} is not an integer".format(amount))
    if not 0 <= amount <= MAX_MONEY:
        raise AmountOverflow("amount {} outside 0-{}".format(amount, MAX_MONEY))
    return amount


def check_total(amounts: Iterable[int]) -> int:
    total = sum(check_amount(a) for a in amounts)
    if total > MAX_MONEY:
        raise AmountOverflow("outputs total {} exceeds {}".format(total, MAX_MONEY))
    return total


def build_output(amount: int, script_pubkey: CScript) -> CTxOut:
    return CTxOut(check_amount(amount), script_pubkey)


def with_sequence(txin: TxInLike, sequence: int) -> CTxIn:
    """Same outpoint, different nSequence; @txin is left unchanged"""
    return CTxIn(txin.prevout, nSequence=sequence)


def build_transaction(version: int,
                      locktime: int,
                      txins: List[TxInLike],
                      txouts: List[CTxOut]) -> CMutableTransaction:
    if not 0 <= locktime <= MAX_LOCKTIME:
        raise InvalidDelay("locktime {} outside 0-{}".format(locktime, MAX_LOCKTIME))
    assert is_ordered(txouts), "outputs must be sorted before assembly"

    # Unsigned: no scriptSig, and an empty witness per input.
    vin = [CTxIn(txin.prevout, nSequence=txin.nSequence) for txin in txins]
    return CMutableTransaction(vin=vin,
                               vout=list(txouts),
                               nLockTime=locktime,
                               nVersion=version,
                               witness=CTxWitness([CTxInWitness() for _ in vin]))
