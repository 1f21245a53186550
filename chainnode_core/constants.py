# chainnode_core/constants.py

# Peer identity: algorithm and size are fixed; 2048 bits trades identity strength
# against startup CPU cost.
PEER_KEY_ALGORITHM = "rsa"
DEFAULT_PEER_KEY_BITS = 2048
PEER_KEY_ALIAS = "self"
RSA_PUBLIC_EXPONENT = 65537

# Wallet keys
SECP256K1 = "secp256k1"
SUPPORTED_KEY_TYPES = (SECP256K1,)

# Address encoding
NETWORK_TESTNET = "t"
NETWORK_MAINNET = "f"
DEFAULT_NETWORK = NETWORK_TESTNET
PROTOCOL_SECP256K1 = 1
ADDRESS_PAYLOAD_LEN = 20
ADDRESS_CHECKSUM_LEN = 4

# Datastore namespaces
BLOCKS_PREFIX = "/blocks/"
CHAIN_HEAD_KEY = "/chain/heaviestTipSet"
GENESIS_KEY = "/consensus/genesisCid"
KEYSTORE_PREFIX = "/keystore/"
WALLET_PREFIX = "/wallet/"

# Repo layout
CONFIG_FILENAME = "config.json"
DATASTORE_FILENAME = "chain.db"
KEYSTORE_FILENAME = "keystore.db"
WALLET_FILENAME = "wallet.db"
