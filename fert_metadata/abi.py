"""Minimal contract ABIs and mainnet addresses for Beanstalk Fertilizer."""

# Ethereum Mainnet addresses
BEANSTALK_ADDRESS = "0xC1E088fC1323b20BCBee9bd1B9fC9546db5624C5"
FERTILIZER_ADDRESS = "0x402c84De2Ce49aF88f5e2eF3710ff89bFED36cB6"
MAINNET_CHAIN_ID = 1

BEANSTALK_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "beansPerFertilizer",
        "outputs": [{"name": "bpf", "type": "uint128"}],
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "getEndBpf",
        "outputs": [{"name": "endBpf", "type": "uint128"}],
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "getActiveFertilizer",
        "outputs": [{"name": "", "type": "uint256"}],
        "type": "function",
    },
]
