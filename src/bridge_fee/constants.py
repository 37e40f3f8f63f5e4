"""Fee oracle protocol and fee payload constants."""

# Fixed-point precision of the effective rates expected by the fee handler
FEE_DECIMALS = 18

UINT256_MAX = 2**256 - 1
DOMAIN_ID_MAX = 2**8 - 1

WORD_SIZE = 32
SIGNATURE_LENGTH = 65  # r (32) + s (32) + v (1)

ORACLE_UNAVAILABLE_MESSAGE = "Error fetching fee from fee oracle"
EMPTY_ORACLE_RESPONSE_MESSAGE = "Empty response data from fee oracle service"

QUOTE_FIELDS = (
    "baseEffectiveRate",
    "tokenEffectiveRate",
    "dstGasPrice",
    "signature",
    "fromDomainID",
    "toDomainID",
    "resourceID",
    "msgGasLimit",
    "dataTimestamp",
    "signatureTimestamp",
    "expirationTimestamp",
)

# Packed fee data layout, in order. Must match the on-chain decoder.
FEE_DATA_LAYOUT = (
    ("baseEffectiveRate", "uint256"),
    ("tokenEffectiveRate", "uint256"),
    ("dstGasPrice", "uint256"),
    ("expirationTimestamp", "uint256"),
    ("fromDomainID", "uint256"),
    ("toDomainID", "uint256"),
    ("resourceID", "bytes32"),
    ("msgGasLimit", "uint256"),
    ("signature", "bytes"),
    ("tokenAmount", "uint256"),
)

# Fee data sent to the basic fee handler, which ignores it
BASIC_FEE_DATA = b"\x00"
