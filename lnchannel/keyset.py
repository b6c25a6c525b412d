# Basepoint secrets held by one side of a channel.
from typing import Optional

import coincurve

from .keys import (derive_pubkey, per_commitment_secret, privkey_expand, pubkey_of, scalar_from_bytes,
                   revocation_pubkey, SHACHAIN_MAX_INDEX)


class KeySet(object):
    def __init__(self,
                 revocation_base_secret: Optional[str],
                 payment_base_secret: str,
                 htlc_base_secret: str,
                 delayed_payment_base_secret: Optional[str],
                 shachain_seed: Optional[str]):
        """One side's basepoint secrets (hex, may be truncated) and shachain seed.

        The revocation base secret, delayed base secret and seed may be
        None when only the counterparty's view is being built.
        """
        self.revocation_base_secret = privkey_expand(revocation_base_secret) if revocation_base_secret else None
        self.payment_base_secret = privkey_expand(payment_base_secret)
        self.htlc_base_secret = privkey_expand(htlc_base_secret)
        self.delayed_payment_base_secret = privkey_expand(delayed_payment_base_secret) if delayed_payment_base_secret else None
        self.shachain_seed = bytes.fromhex(shachain_seed) if shachain_seed else None
        # Lets tests pin the per-commitment secret to a published vector.
        self.per_commit_secret_override: Optional[coincurve.PrivateKey] = None

    def raw_revocation_basepoint(self) -> coincurve.PublicKey:
        assert self.revocation_base_secret
        return pubkey_of(self.revocation_base_secret)

    def raw_payment_basepoint(self) -> coincurve.PublicKey:
        return pubkey_of(self.payment_base_secret)

    def raw_htlc_basepoint(self) -> coincurve.PublicKey:
        return pubkey_of(self.htlc_base_secret)

    def raw_delayed_payment_basepoint(self) -> coincurve.PublicKey:
        assert self.delayed_payment_base_secret
        return pubkey_of(self.delayed_payment_base_secret)

    def raw_per_commit_secret(self, commitnum: int) -> coincurve.PrivateKey:
        if self.per_commit_secret_override is not None:
            return self.per_commit_secret_override
        assert self.shachain_seed
        # BOLT #3:
        # the first secret used MUST be index 281474976710655, and then the
        # index decremented.
        secret = per_commitment_secret(self.shachain_seed, SHACHAIN_MAX_INDEX - commitnum)
        return scalar_from_bytes(secret)

    def raw_per_commit_point(self, commitnum: int) -> coincurve.PublicKey:
        return pubkey_of(self.raw_per_commit_secret(commitnum))

    def per_commit_point(self, commitnum: int) -> str:
        return self.raw_per_commit_point(commitnum).format().hex()


class CommitmentKeys(object):
    """The public keys that appear in the holder's commitment transaction"""
    def __init__(self,
                 revocation_pubkey: coincurve.PublicKey,
                 delayed_pubkey: coincurve.PublicKey,
                 local_htlc_pubkey: coincurve.PublicKey,
                 remote_htlc_pubkey: coincurve.PublicKey,
                 remote_pubkey: coincurve.PublicKey):
        self.revocation_pubkey = revocation_pubkey
        self.delayed_pubkey = delayed_pubkey
        self.local_htlc_pubkey = local_htlc_pubkey
        self.remote_htlc_pubkey = remote_htlc_pubkey
        self.remote_pubkey = remote_pubkey

    @classmethod
    def derive(cls,
               holder: KeySet,
               counterparty: KeySet,
               commitnum: int,
               option_static_remotekey: bool = False) -> 'CommitmentKeys':
        """Keys for @holder's commitment number @commitnum.

        The holder's per-commitment point tweaks every key; the
        revocation key mixes it with the counterparty's revocation
        basepoint so only the counterparty can later spend with it.
        """
        per_commit_point = holder.raw_per_commit_point(commitnum)

        # BOLT #3: If `option_static_remotekey` is negotiated the
        # `remotepubkey` is simply the remote node's `payment_basepoint`,
        # otherwise it is calculated as above using the remote node's
        # `payment_basepoint`.
        if option_static_remotekey:
            remote_pubkey = counterparty.raw_payment_basepoint()
        else:
            remote_pubkey = derive_pubkey(counterparty.raw_payment_basepoint(), per_commit_point)

        return cls(revocation_pubkey=revocation_pubkey(counterparty.raw_revocation_basepoint(), per_commit_point),
                   delayed_pubkey=derive_pubkey(holder.raw_delayed_payment_basepoint(), per_commit_point),
                   local_htlc_pubkey=derive_pubkey(holder.raw_htlc_basepoint(), per_commit_point),
                   remote_htlc_pubkey=derive_pubkey(counterparty.raw_htlc_basepoint(), per_commit_point),
                   remote_pubkey=remote_pubkey)
