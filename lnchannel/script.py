"""Witness script templates for channel outputs, and their output wrappers.

A template is written as a flat list of items (opcodes, small integers
and push-data bytes) which is checked against the consensus push and
script size limits before python-bitcoinlib encodes it.
"""
from hashlib import sha256
from typing import List, Union

import bitcoin.core.script as script
from bitcoin.core import Hash160
from bitcoin.core.script import CScript
from bitcoin.wallet import CBitcoinAddress, CBitcoinAddressError

from .errors import InvalidDelay, InvalidScriptEncoding
from .keys import PointLike, ensure_point

ScriptItem = Union[script.CScriptOp, int, bytes]

# BIP68/BIP112: the relative locktime is a 16-bit block count.
MAX_TO_SELF_DELAY = 0xffff


def check_delay(to_self_delay: int) -> int:
    if isinstance(to_self_delay, bool) or not isinstance(to_self_delay, int):
        raise InvalidDelay("to_self_delay {!r} is not an integer".format(to_self_delay))
    if not 0 <= to_self_delay <= MAX_TO_SELF_DELAY:
        raise InvalidDelay("to_self_delay {} outside 0-{}".format(to_self_delay, MAX_TO_SELF_DELAY))
    return to_self_delay


def compose(items: List[ScriptItem]) -> CScript:
    """Encode these items as a script, enforcing push and size limits"""
    for item in items:
        if isinstance(item, (bytes, bytearray)) and len(item) > script.MAX_SCRIPT_ELEMENT_SIZE:
            raise InvalidScriptEncoding("push of {} bytes exceeds {}".format(len(item),
                                                                              script.MAX_SCRIPT_ELEMENT_SIZE))
    s = CScript(items)
    if len(s) > script.MAX_SCRIPT_SIZE:
        raise InvalidScriptEncoding("script of {} bytes exceeds {}".format(len(s), script.MAX_SCRIPT_SIZE))
    return s


def key_push(pubkey: PointLike) -> bytes:
    """Compressed SEC encoding, as every channel script pushes it"""
    return ensure_point(pubkey).format()


def funding_redeemscript(pubkey_a: PointLike, pubkey_b: PointLike, sort_keys: bool = False) -> CScript:
    """2-of-2 multisig over the two funding keys.

    Keys are pushed in the order given.  BOLT #3 wants the
    lexicographically lesser compressed key first; pass sort_keys=True
    to get that, otherwise both sides must agree on the order out of band.
    """
    keys = [key_push(pubkey_a), key_push(pubkey_b)]
    if sort_keys:
        keys.sort()
    return compose([script.OP_2]
                   + keys
                   + [script.OP_2,
                      script.OP_CHECKMULTISIG])


def to_local_script(revocation_pubkey: PointLike,
                    delayed_pubkey: PointLike,
                    to_self_delay: int) -> CScript:
    # BOLT #3:
    # #### `to_local` Output
    #
    # This output sends funds back to the owner of this commitment
    # transaction and thus must be timelocked using
    # `OP_CHECKSEQUENCEVERIFY`. It can be claimed, without delay, by the
    # other party if they know the revocation private key.
    #
    #     OP_IF
    #         # Penalty transaction
    #         <revocationpubkey>
    #     OP_ELSE
    #         `to_self_delay`
    #         OP_CHECKSEQUENCEVERIFY
    #         OP_DROP
    #         <local_delayedpubkey>
    #     OP_ENDIF
    #     OP_CHECKSIG
    return compose([script.OP_IF,
                    key_push(revocation_pubkey),
                    script.OP_ELSE,
                    check_delay(to_self_delay),
                    script.OP_CHECKSEQUENCEVERIFY,
                    script.OP_DROP,
                    key_push(delayed_pubkey),
                    script.OP_ENDIF,
                    script.OP_CHECKSIG])


def offered_htlc_script(revocation_pubkey: PointLike,
                        remote_htlc_pubkey: PointLike,
                        local_htlc_pubkey: PointLike,
                        payment_hash160: bytes,
                        option_anchor_outputs: bool = False) -> CScript:
    """Script for an HTLC offered by the commitment holder.

    @payment_hash160 is RIPEMD160(payment_hash), i.e. HASH160 of the preimage.
    """
    if not isinstance(payment_hash160, (bytes, bytearray)):
        raise InvalidScriptEncoding("payment_hash160 must be bytes, not {}".format(type(payment_hash160).__name__))
    if len(payment_hash160) != 20:
        raise InvalidScriptEncoding("payment_hash160 must be 20 bytes, not {}".format(len(payment_hash160)))

    # BOLT #3:
    # # To remote node with revocation key
    # OP_DUP OP_HASH160 <RIPEMD160(SHA256(revocationpubkey))> OP_EQUAL
    # OP_IF
    #     OP_CHECKSIG
    # OP_ELSE
    #     <remote_htlcpubkey> OP_SWAP OP_SIZE 32 OP_EQUAL
    #     OP_NOTIF
    #         # To local node via HTLC-timeout transaction (timelocked).
    #         OP_DROP 2 OP_SWAP <local_htlcpubkey> 2 OP_CHECKMULTISIG
    #     OP_ELSE
    #         # To remote node with preimage.
    #         OP_HASH160 <RIPEMD160(payment_hash)> OP_EQUALVERIFY
    #         OP_CHECKSIG
    #     OP_ENDIF
    #     1 OP_CHECKSEQUENCEVERIFY OP_DROP   (option_anchor_outputs only)
    # OP_ENDIF
    if option_anchor_outputs:
        csvcheck = [1, script.OP_CHECKSEQUENCEVERIFY, script.OP_DROP]
    else:
        csvcheck = []
    return compose([script.OP_DUP,
                    script.OP_HASH160,
                    Hash160(key_push(revocation_pubkey)),
                    script.OP_EQUAL,
                    script.OP_IF,
                    script.OP_CHECKSIG,
                    script.OP_ELSE,
                    key_push(remote_htlc_pubkey),
                    script.OP_SWAP,
                    script.OP_SIZE,
                    32,
                    script.OP_EQUAL,
                    script.OP_NOTIF,
                    script.OP_DROP,
                    2,
                    script.OP_SWAP,
                    key_push(local_htlc_pubkey),
                    2,
                    script.OP_CHECKMULTISIG,
                    script.OP_ELSE,
                    script.OP_HASH160,
                    bytes(payment_hash160),
                    script.OP_EQUALVERIFY,
                    script.OP_CHECKSIG,
                    script.OP_ENDIF]
                   + csvcheck
                   + [script.OP_ENDIF])


def p2wsh(redeemscript: CScript) -> CScript:
    """Version-0 witness script-hash output for this redeemscript"""
    return CScript([script.OP_0, sha256(redeemscript).digest()])


def p2wpkh(pubkey: PointLike) -> CScript:
    return CScript([script.OP_0, Hash160(key_push(pubkey))])


def output_address(script_pubkey: CScript) -> str:
    """Address for this output script, under the selected bitcoin params"""
    try:
        return str(CBitcoinAddress.from_scriptPubKey(script_pubkey))
    except CBitcoinAddressError as e:
        raise InvalidScriptEncoding("{} has no address form: {}".format(script_pubkey.hex(), e))
