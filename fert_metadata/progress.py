"""Beanstalk BPF reads over web3."""

from web3 import Web3

from . import abi as contract_abi
from .config import RunConfig
from .errors import ConfigError, TransportError


def connect(config: RunConfig) -> Web3:
    """Open the RPC connection and check it serves the configured chain."""
    rpc_url = config.rpc_url
    if rpc_url.startswith("ws://") or rpc_url.startswith("wss://"):
        w3 = Web3(Web3.LegacyWebSocketProvider(rpc_url))
    else:
        w3 = Web3(Web3.HTTPProvider(rpc_url))
    if not w3.is_connected():
        raise TransportError(f"Cannot connect to RPC: {rpc_url}")
    chain_id = w3.eth.chain_id
    if chain_id != config.chain_id:
        raise ConfigError(
            f"RPC {rpc_url} serves chain {chain_id}, expected {config.chain_id}"
        )
    return w3


class ProgressSource:
    """Reads the global beans-per-fertilizer counter from Beanstalk."""

    def __init__(self, w3: Web3, config: RunConfig):
        self.w3 = w3
        self.beanstalk = w3.eth.contract(
            address=Web3.to_checksum_address(config.beanstalk_address),
            abi=contract_abi.BEANSTALK_ABI,
        )

    def _call(self, fn_name: str) -> int:
        try:
            return int(getattr(self.beanstalk.functions, fn_name)().call())
        except Exception as e:
            raise TransportError(f"Beanstalk.{fn_name}() failed: {e}") from e

    def current_bpf(self) -> int:
        return self._call("beansPerFertilizer")

    def end_bpf(self) -> int:
        return self._call("getEndBpf")

    def active_fertilizer(self) -> int:
        return self._call("getActiveFertilizer")
