# Support for the unsigned transactions of a channel's lifetime.
import logging
from typing import List

from bitcoin.core import CMutableTransaction, CTxOut

from .keys import PointLike
from .ordering import sort_outputs
from .script import funding_redeemscript, offered_htlc_script, p2wpkh, p2wsh, to_local_script
from .tx import SEQUENCE_FINAL, TxInLike, build_output, build_transaction, check_total, with_sequence


class ChannelTxFactory(object):
    """Builds the funding, refund, commitment and HTLC transactions.

    Every output list goes through the same BIP69 sort, so two parties
    building from the same keys and amounts get byte-identical
    transactions no matter which way round they pass their arguments.
    Nothing is signed; every input carries an empty witness.
    """
    def __init__(self,
                 sort_funding_keys: bool = False,
                 option_anchor_outputs: bool = False,
                 version: int = 2):
        self.sort_funding_keys = sort_funding_keys
        self.option_anchor_outputs = option_anchor_outputs
        self.version = version
        self.logger = logging.getLogger(__name__)

    def _finish(self,
                name: str,
                txins: List[TxInLike],
                txouts: List[CTxOut],
                locktime: int = 0) -> CMutableTransaction:
        check_total(txout.nValue for txout in txouts)
        tx = build_transaction(self.version, locktime, txins, sort_outputs(txouts))
        self.logger.debug("{} tx {}: {} in, {} out, locktime {}".format(name,
                                                                       tx.GetTxid()[::-1].hex(),
                                                                       len(tx.vin),
                                                                       len(tx.vout),
                                                                       tx.nLockTime))
        return tx

    def funding_tx(self,
                   txins: List[TxInLike],
                   pubkey_a: PointLike,
                   pubkey_b: PointLike,
                   amount: int) -> CMutableTransaction:
        # BOLT #3:
        # ## Funding Transaction Output
        #
        # * The funding output script is a P2WSH to: `2 <pubkey1> <pubkey2> 2
        #  OP_CHECKMULTISIG`
        redeemscript = funding_redeemscript(pubkey_a, pubkey_b, sort_keys=self.sort_funding_keys)
        self.logger.debug("funding redeemscript = {}".format(redeemscript.hex()))
        return self._finish('funding', txins, [build_output(amount, p2wsh(redeemscript))])

    def refund_tx(self,
                  funding_txin: TxInLike,
                  pubkey_a: PointLike,
                  pubkey_b: PointLike,
                  amount_a: int,
                  amount_b: int) -> CMutableTransaction:
        """Spend the funding output straight back to both parties"""
        txouts = [build_output(amount_a, p2wpkh(pubkey_a)),
                  build_output(amount_b, p2wpkh(pubkey_b))]
        return self._finish('refund', [funding_txin], txouts)

    def commitment_tx(self,
                      funding_txin: TxInLike,
                      revocation_pubkey: PointLike,
                      delayed_pubkey: PointLike,
                      remote_pubkey: PointLike,
                      to_self_delay: int,
                      local_amount: int,
                      remote_amount: int) -> CMutableTransaction:
        to_local = to_local_script(revocation_pubkey, delayed_pubkey, to_self_delay)
        self.logger.debug("to_local redeemscript = {}".format(to_local.hex()))
        txouts = [build_output(local_amount, p2wsh(to_local)),
                  build_output(remote_amount, p2wpkh(remote_pubkey))]
        return self._finish('commitment', [funding_txin], txouts)

    def htlc_commitment_tx(self,
                           funding_txin: TxInLike,
                           revocation_pubkey: PointLike,
                           remote_htlc_pubkey: PointLike,
                           local_htlc_pubkey: PointLike,
                           delayed_pubkey: PointLike,
                           remote_pubkey: PointLike,
                           to_self_delay: int,
                           payment_hash160: bytes,
                           htlc_amount: int,
                           local_amount: int,
                           remote_amount: int) -> CMutableTransaction:
        """Commitment carrying one HTLC offered by the holder"""
        to_local = to_local_script(revocation_pubkey, delayed_pubkey, to_self_delay)
        htlc_script = offered_htlc_script(revocation_pubkey,
                                          remote_htlc_pubkey,
                                          local_htlc_pubkey,
                                          payment_hash160,
                                          option_anchor_outputs=self.option_anchor_outputs)
        self.logger.debug("to_local redeemscript = {}".format(to_local.hex()))
        self.logger.debug("offered htlc redeemscript = {}".format(htlc_script.hex()))
        txouts = [build_output(local_amount, p2wsh(to_local)),
                  build_output(remote_amount, p2wpkh(remote_pubkey)),
                  build_output(htlc_amount, p2wsh(htlc_script))]
        return self._finish('htlc commitment', [funding_txin], txouts)

    def htlc_timeout_sequence(self) -> int:
        # BOLT #3:
        # * `txin[0]` sequence: `0` (set to `1` for `option_anchor_outputs`)
        if self.option_anchor_outputs:
            return 1
        return 0

    def htlc_timeout_tx(self,
                        htlc_txin: TxInLike,
                        revocation_pubkey: PointLike,
                        delayed_pubkey: PointLike,
                        to_self_delay: int,
                        cltv_expiry: int,
                        amount: int) -> CMutableTransaction:
        """Spend an offered HTLC output back to ourselves once it times out.

        The transaction is timelocked to @cltv_expiry.  nLockTime is
        ignored when every input is final, so an input passed with
        nSequence 0xffffffff is rebuilt with the HTLC-timeout sequence;
        any other sequence is kept as given.
        """
        if htlc_txin.nSequence == SEQUENCE_FINAL:
            sequence = self.htlc_timeout_sequence()
            self.logger.info("htlc-timeout input {} is final: using nSequence {} so locktime {} applies"
                             .format(htlc_txin.prevout, sequence, cltv_expiry))
            htlc_txin = with_sequence(htlc_txin, sequence)

        # BOLT #3:
        # The witness script for the output is:
        # OP_IF
        #     # Penalty transaction
        #     <revocationpubkey>
        # OP_ELSE
        #     `to_self_delay`
        #     OP_CHECKSEQUENCEVERIFY
        #     OP_DROP
        #     <local_delayedpubkey>
        # OP_ENDIF
        # OP_CHECKSIG
        to_local = to_local_script(revocation_pubkey, delayed_pubkey, to_self_delay)
        self.logger.debug("htlc-timeout redeemscript = {}".format(to_local.hex()))

        # BOLT #3:
        # * locktime: `0` for HTLC-success, `cltv_expiry` for HTLC-timeout
        return self._finish('htlc-timeout',
                            [htlc_txin],
                            [build_output(amount, p2wsh(to_local))],
                            locktime=cltv_expiry)
