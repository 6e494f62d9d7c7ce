# Fixed endpoint, contract and ABI for the addValidator re-join call.

RPC_URL = "https://ethereum-sepolia-rpc.publicnode.com"
CONTRACT_ADDRESS = "0x3743c7Bf782260824f62e759677d7C63FfE42c52"
EXPLORER_TX_URL = "https://sepolia.etherscan.io/tx/{tx_hash}"

# Gas
FALLBACK_GAS_LIMIT = 2_000_000
GAS_BUFFER_PERCENT = 120
DEFAULT_PRIORITY_FEE_WEI = 1_000_000_000  # 1 gwei

# Receipt polling
RECEIPT_TIMEOUT_SECONDS = 600
RECEIPT_POLL_INTERVAL_SECONDS = 3.0

# Argument order: _attester, _merkleProof, _params, _publicKeyG1, _publicKeyG2, _signature
G1_POINT_COMPONENTS = [
    {"internalType": "uint256", "name": "x", "type": "uint256"},
    {"internalType": "uint256", "name": "y", "type": "uint256"},
]

G2_POINT_COMPONENTS = [
    {"internalType": "uint256", "name": "x0", "type": "uint256"},
    {"internalType": "uint256", "name": "x1", "type": "uint256"},
    {"internalType": "uint256", "name": "y0", "type": "uint256"},
    {"internalType": "uint256", "name": "y1", "type": "uint256"},
]

PROOF_VERIFICATION_PARAMS_COMPONENTS = [
    {"internalType": "bytes32", "name": "vkeyHash", "type": "bytes32"},
    {"internalType": "bytes", "name": "proof", "type": "bytes"},
    {"internalType": "bytes32[]", "name": "publicInputs", "type": "bytes32[]"},
    {"internalType": "bytes", "name": "committedInputs", "type": "bytes"},
    {"internalType": "uint256[]", "name": "committedInputCounts", "type": "uint256[]"},
    {"internalType": "uint256", "name": "validityPeriodInSeconds", "type": "uint256"},
    {"internalType": "string", "name": "domain", "type": "string"},
    {"internalType": "string", "name": "scope", "type": "string"},
    {"internalType": "bool", "name": "devMode", "type": "bool"},
]

ADD_VALIDATOR_ABI = {
    "inputs": [
        {"internalType": "address", "name": "_attester", "type": "address"},
        {"internalType": "bytes32[]", "name": "_merkleProof", "type": "bytes32[]"},
        {
            "components": PROOF_VERIFICATION_PARAMS_COMPONENTS,
            "internalType": "struct ProofVerificationParams",
            "name": "_params",
            "type": "tuple",
        },
        {
            "components": G1_POINT_COMPONENTS,
            "internalType": "struct G1Point",
            "name": "_publicKeyG1",
            "type": "tuple",
        },
        {
            "components": G2_POINT_COMPONENTS,
            "internalType": "struct G2Point",
            "name": "_publicKeyG2",
            "type": "tuple",
        },
        {
            "components": G1_POINT_COMPONENTS,
            "internalType": "struct G1Point",
            "name": "_signature",
            "type": "tuple",
        },
    ],
    "name": "addValidator",
    "outputs": [],
    "stateMutability": "nonpayable",
    "type": "function",
}

TROUBLESHOOTING_TIPS = [
    'Double-check that you copied the *entire* "args:" data correctly.',
    "Ensure your wallet has enough ETH for gas fees on Sepolia.",
    "Verify the private key is correct and corresponds to the attester address.",
    "Make sure the package and its dependencies are installed (`pip install -e .`).",
    "Confirm the ZKPassport data structures match what the contract expects.",
]

INSTRUCTIONS = [
    "1. Install this package: `pip install -e .` (Python 3.10+).",
    '2. In your browser\'s developer console (F12), find the error message after clicking "Register" in ZKPassport.',
    '3. Copy the "args:" data (including the "args:" prefix and the entire argument list).',
    '4. Paste the copied "args:" data when prompted below.',
    "5. Enter your private key when prompted.",
]
