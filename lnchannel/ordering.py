# BIP69 output ordering, shared by every transaction we build.
from typing import Iterable, List, Tuple

from bitcoin.core import CTxOut


def output_sort_key(txout: CTxOut) -> Tuple[int, bytes]:
    # BOLT #3:
    # ## Transaction Input and Output Ordering
    #
    # Lexicographic ordering: see
    # [BIP69](https://github.com/bitcoin/bips/blob/master/bip-0069.mediawiki).
    return txout.nValue, bytes(txout.scriptPubKey)


def sort_outputs(txouts: Iterable[CTxOut]) -> List[CTxOut]:
    """Amount first, then scriptPubKey bytes; both ascending"""
    return sorted(txouts, key=output_sort_key)


def is_ordered(txouts: List[CTxOut]) -> bool:
    keys = [output_sort_key(txout) for txout in txouts]
    return keys == sorted(keys)
