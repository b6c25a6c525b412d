from bitcoin.core import COutPoint, CTransaction, CTxIn

from lnchannel import KeySet, point_from_hex, privkey_expand

# BOLT #3 Appendix C (commitment and HTLC transaction test vectors).
funding_txid = '8984484a580b825b9972d7adb15050b3ab624ccd731946b3eeddb92f4e7ef6be'
local_funding_privkey = '30ff4956bbdd3222d44cc5e8a1261dab1e07957bdac5ae88fe3261ef321f3749'
remote_funding_privkey = '1552dfba4f6cf29a62a0af13c8d6981d36d0ef8d61ba10fb0fe90da7634d7e13'
local_funding_pubkey = point_from_hex('023da092f6980e58d2c037173180e9a465476026ee50f96695963e8efe436f54eb')
remote_funding_pubkey = point_from_hex('030e9f7b623d2ccc7c9bd44d66d5ce21ce504c0acf6385a132cec6d3c39fa711c1')
funding_wscript = '5221023da092f6980e58d2c037173180e9a465476026ee50f96695963e8efe436f54eb21030e9f7b623d2ccc7c9bd44d66d5ce21ce504c0acf6385a132cec6d3c39fa711c152ae'

localpubkey = point_from_hex('030d417a46946384f88d5f3337267c5e579765875dc4daca813e21734b140639e7')
remotepubkey = point_from_hex('0394854aa6eab5b2a8122cc726e9dded053a2184d88256816826d6231c068d4a5b')
local_delayedpubkey = point_from_hex('03fd5960528dc152014952efdb702a88f71e3c1653b2314431701ec77e57fde83c')
local_revocation_pubkey = point_from_hex('0212a140cd0c6539d07cd08dfe09984dec3251ea808b892efeac3ede9402bf2b19')
local_delay = 144
to_local_wscript = '63210212a140cd0c6539d07cd08dfe09984dec3251ea808b892efeac3ede9402bf2b1967029000b2752103fd5960528dc152014952efdb702a88f71e3c1653b2314431701ec77e57fde83c68ac'

# BOLT #3:
# name: simple commitment tx with no HTLCs
# to_local amount 6989140, to_remote amount 3000000
simple_commit_tx = '02000000000101bef67e4e2fb9ddeeb3461973cd4c62abb35050b1add772995b820b584a488489000000000038b02b8002c0c62d0000000000160014ccf1af2f2aabee14bb40fa3851ab2301de84311054a56a00000000002200204adb4e2f00643db396dd120d4e7dc17625f5f2c11a40d857accc862d6b7dd80e0400473044022051b75c73198c6deee1a875871c3961832909acd297c6b908d59e3319e5185a46022055c419379c5051a78d00dbbce11b5b664a0c22815fbcc6fcef6b1937c383693901483045022100f51d2e566a70ba740fc5d8c0f07b9b93d2ed741c3c0860c613173de7d39e7968022041376d520e9c0e1ad52248ddf4b22e12be8763007df977253ef45a4ca3bdb7c001475221023da092f6980e58d2c037173180e9a465476026ee50f96695963e8efe436f54eb21030e9f7b623d2ccc7c9bd44d66d5ce21ce504c0acf6385a132cec6d3c39fa711c152ae3e195220'

# BOLT #3:
# name: commitment tx with all five HTLCs untrimmed (minimum feerate)
# to_local_msat: 6988000000
# to_remote_msat: 3000000000
five_htlc_commit_tx = '02000000000101bef67e4e2fb9ddeeb3461973cd4c62abb35050b1add772995b820b584a488489000000000038b02b8007e80300000000000022002052bfef0479d7b293c27e0f1eb294bea154c63a3294ef092c19af51409bce0e2ad007000000000000220020403d394747cae42e98ff01734ad5c08f82ba123d3d9a620abda88989651e2ab5d007000000000000220020748eba944fedc8827f6b06bc44678f93c0f9e6078b35c6331ed31e75f8ce0c2db80b000000000000220020c20b5d1f8584fd90443e7b7b720136174fa4b9333c261d04dbbd012635c0f419a00f0000000000002200208c48d15160397c9731df9bc3b236656efb6665fbfe92b4a6878e88a499f741c4c0c62d0000000000160014ccf1af2f2aabee14bb40fa3851ab2301de843110e0a06a00000000002200204adb4e2f00643db396dd120d4e7dc17625f5f2c11a40d857accc862d6b7dd80e04004730440220275b0c325a5e9355650dc30c0eccfbc7efb23987c24b556b9dfdd40effca18d202206caceb2c067836c51f296740c7ae807ffcbfbf1dd3a0d56b6de9a5b247985f060147304402204fd4928835db1ccdfc40f5c78ce9bd65249b16348df81f0c44328dcdefc97d630220194d3869c38bc732dd87d13d2958015e2fc16829e74cd4377f84d215c0b7060601475221023da092f6980e58d2c037173180e9a465476026ee50f96695963e8efe436f54eb21030e9f7b623d2ccc7c9bd44d66d5ce21ce504c0acf6385a132cec6d3c39fa711c152ae3e195220'


def revhex(h: str) -> str:
    return bytes(reversed(bytes.fromhex(h))).hex()


def deserialize(tx: str) -> CTransaction:
    return CTransaction.deserialize(bytes.fromhex(tx))


def funding_txin(sequence: int = 0xffffffff) -> CTxIn:
    # The BOLT txid is displayed reversed, as bitcoind does.
    return CTxIn(COutPoint(bytes.fromhex(revhex(funding_txid)), 0), nSequence=sequence)


def dummy_txin(n: int = 0, sequence: int = 0xffffffff) -> CTxIn:
    return CTxIn(COutPoint(bytes([n + 1]) * 32, n), nSequence=sequence)


def bolt3_keysets() -> tuple:
    """Local and remote keysets of the BOLT #3 commitment vectors"""
    # BOLT #3:
    # INTERNAL: local_payment_basepoint_secret: 111111111111111111111111111111111111111111111111111111111111111101
    # INTERNAL: local_delayed_payment_basepoint_secret: 333333333333333333333333333333333333333333333333333333333333333301
    local = KeySet(revocation_base_secret=None,
                   payment_base_secret='11' * 32,
                   htlc_base_secret='11' * 32,
                   delayed_payment_base_secret='33' * 32,
                   shachain_seed=None)
    # BOLT #3:
    # INTERNAL: remote_revocation_basepoint_secret: 222222222222222222222222222222222222222222222222222222222222222201
    # INTERNAL: remote_payment_basepoint_secret: 444444444444444444444444444444444444444444444444444444444444444401
    remote = KeySet(revocation_base_secret='22' * 32,
                    payment_base_secret='44' * 32,
                    htlc_base_secret='44' * 32,
                    delayed_payment_base_secret=None,
                    shachain_seed=None)
    # BOLT #3:
    # x_local_per_commitment_secret: 1f1e1d1c1b1a191817161514131211100f0e0d0c0b0a0908070605040302010001
    local.per_commit_secret_override = privkey_expand('1f1e1d1c1b1a191817161514131211100f0e0d0c0b0a09080706050403020100')
    return local, remote
