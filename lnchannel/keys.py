"""Key derivation for channel commitments.

Everything here works on a single public point type, coincurve.PublicKey,
and a single secret type, coincurve.PrivateKey.  Raw bytes and hex strings
are only accepted at the edges, through the conversion helpers below, so
the x-only/uncompressed/compressed variants never leak into the rest of
the package.
"""
from hashlib import sha256
from typing import Union

import coincurve

from .errors import InvalidPoint, InvalidScalar

PointLike = Union[coincurve.PublicKey, bytes, str]

# BOLT #3: per-commitment secrets are generated over a 48-bit index space.
SHACHAIN_BITS = 48
SHACHAIN_MAX_INDEX = (1 << SHACHAIN_BITS) - 1


def point_from_bytes(data: bytes) -> coincurve.PublicKey:
    """Parse a serialized (compressed or uncompressed) SEC point"""
    try:
        return coincurve.PublicKey(bytes(data))
    except (ValueError, TypeError) as e:
        raise InvalidPoint("{!r} is not a valid point: {}".format(data, e))


def point_from_hex(val: str) -> coincurve.PublicKey:
    try:
        data = bytes.fromhex(val)
    except ValueError as e:
        raise InvalidPoint("{} is not valid hex: {}".format(val, e))
    return point_from_bytes(data)


def ensure_point(point: PointLike) -> coincurve.PublicKey:
    if isinstance(point, coincurve.PublicKey):
        return point
    if isinstance(point, str):
        return point_from_hex(point)
    return point_from_bytes(point)


def point_to_bytes(point: coincurve.PublicKey, compressed: bool = True) -> bytes:
    return point.format(compressed=compressed)


def scalar_from_bytes(data: bytes) -> coincurve.PrivateKey:
    try:
        return coincurve.PrivateKey(bytes(data))
    except (ValueError, TypeError) as e:
        raise InvalidScalar("invalid secret: {}".format(e))


def privkey_expand(secret: str) -> coincurve.PrivateKey:
    # Privkey can be truncated, since we use tiny values a lot.
    try:
        data = bytes.fromhex(secret)
    except ValueError as e:
        raise InvalidScalar("{} is not valid hex: {}".format(secret, e))
    return scalar_from_bytes(data.rjust(32, bytes(1)))


def pubkey_of(secret: coincurve.PrivateKey) -> coincurve.PublicKey:
    """Return the public point corresponding to this secret"""
    return coincurve.PublicKey.from_secret(secret.secret)


def hash_points(first: coincurve.PublicKey, second: coincurve.PublicKey) -> bytes:
    """SHA256 over the concatenation of two compressed points, in this order"""
    return sha256(first.format() + second.format()).digest()


def _tweak_point(point: coincurve.PublicKey, tweak: bytes) -> coincurve.PublicKey:
    try:
        return point.multiply(tweak)
    except ValueError as e:
        raise InvalidPoint("cannot multiply {} by tweak: {}".format(point.format().hex(), e))


def _tweak_secret(secret: coincurve.PrivateKey, tweak: bytes) -> coincurve.PrivateKey:
    try:
        return secret.multiply(tweak, update=False)
    except ValueError as e:
        raise InvalidScalar("cannot multiply secret by tweak: {}".format(e))


def revocation_pubkey(revocation_basepoint: PointLike,
                      per_commitment_point: PointLike) -> coincurve.PublicKey:
    """Derive the revocation pubkey the holder's commitment pays to.

    The result is the same whichever way round the two points are passed:
    each point is scaled by the hash that starts with itself.
    """
    basepoint = ensure_point(revocation_basepoint)
    per_commit_point = ensure_point(per_commitment_point)

    # BOLT #3:
    #     revocationpubkey = revocation_basepoint * SHA256(revocation_basepoint || per_commitment_point)
    #       + per_commitment_point * SHA256(per_commitment_point || revocation_basepoint)
    revocation_tweak = hash_points(basepoint, per_commit_point)
    per_commit_tweak = hash_points(per_commit_point, basepoint)

    try:
        return coincurve.PublicKey.combine_keys([_tweak_point(basepoint, revocation_tweak),
                                                 _tweak_point(per_commit_point, per_commit_tweak)])
    except ValueError as e:
        raise InvalidPoint("revocation pubkey is the point at infinity: {}".format(e))


def revocation_privkey(per_commitment_secret: coincurve.PrivateKey,
                       revocation_base_secret: coincurve.PrivateKey) -> coincurve.PrivateKey:
    """Derive the revocation privkey once the per-commitment secret is revealed.

    pubkey_of() of the result equals revocation_pubkey() of the two
    corresponding public points.  A zero tweak or zero sum is not guarded
    against beyond what libsecp256k1 rejects.
    """
    revocation_basepoint = pubkey_of(revocation_base_secret)
    per_commitment_point = pubkey_of(per_commitment_secret)

    # BOLT #3:
    #    revocationprivkey = revocation_basepoint_secret * SHA256(revocation_basepoint || per_commitment_point)
    #      + per_commitment_secret * SHA256(per_commitment_point || revocation_basepoint)
    revocation_tweak = hash_points(revocation_basepoint, per_commitment_point)
    val = _tweak_secret(revocation_base_secret, revocation_tweak)

    per_commit_tweak = hash_points(per_commitment_point, revocation_basepoint)
    val2 = _tweak_secret(per_commitment_secret, per_commit_tweak)

    try:
        return val.add(val2.secret, update=False)
    except ValueError as e:
        raise InvalidScalar("revocation privkey is zero: {}".format(e))


def derive_pubkey(basepoint: PointLike, per_commitment_point: PointLike) -> coincurve.PublicKey:
    # BOLT #3:
    #     pubkey = basepoint + SHA256(per_commitment_point || basepoint) * G
    base = ensure_point(basepoint)
    tweak = hash_points(ensure_point(per_commitment_point), base)
    try:
        return base.add(tweak)
    except ValueError as e:
        raise InvalidPoint("cannot tweak {}: {}".format(base.format().hex(), e))


def derive_privkey(basepoint_secret: coincurve.PrivateKey,
                   per_commitment_point: PointLike) -> coincurve.PrivateKey:
    # BOLT #3:
    #    privkey = basepoint_secret + SHA256(per_commitment_point || basepoint)
    tweak = hash_points(ensure_point(per_commitment_point), pubkey_of(basepoint_secret))
    try:
        return basepoint_secret.add(tweak, update=False)
    except ValueError as e:
        raise InvalidScalar("cannot tweak secret: {}".format(e))


def per_commitment_secret(seed: bytes, index: int) -> bytes:
    """Generate the shachain element for @index from a 32-byte @seed"""
    if len(seed) != 32:
        raise InvalidScalar("shachain seed must be 32 bytes, not {}".format(len(seed)))
    if not 0 <= index <= SHACHAIN_MAX_INDEX:
        raise InvalidScalar("shachain index {} out of range".format(index))

    # BOLT #3:
    #    generate_from_seed(seed, I):
    #        P = seed
    #        for B in 47 down to 0:
    #            if B set in I:
    #                flip(B) in P
    #                P = SHA256(P)
    #        return P
    p = bytearray(seed)
    for b in range(SHACHAIN_BITS - 1, -1, -1):
        if index & (1 << b):
            p[b // 8] ^= 1 << (b % 8)
            p = bytearray(sha256(p).digest())
    return bytes(p)
