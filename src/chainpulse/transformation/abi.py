"""ERC-20 Transfer event signature and payload decoding."""

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from chainpulse.shared.exceptions import LogDecodeAnomaly
from chainpulse.shared.models import TransferLog

TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"

# topic[0] of every ERC-20 Transfer log; from/to are indexed, value is in data
TRANSFER_TOPIC = Web3.to_hex(Web3.keccak(text=TRANSFER_EVENT_SIGNATURE))


def decode_transfer_amount(log: TransferLog) -> int:
    """
    Decode the non-indexed ``value`` of a Transfer log.

    Raises:
        LogDecodeAnomaly: Payload is not hex or not a uint256 word
    """
    data = log.data
    try:
        payload = bytes.fromhex(data[2:] if data.startswith(("0x", "0X")) else data)
        (value,) = abi_decode(["uint256"], payload)
    except (ValueError, DecodingError) as e:
        raise LogDecodeAnomaly(
            f"Cannot decode Transfer value in block {log.block_number}: {e}",
            block_number=log.block_number,
            log_index=log.log_index,
            data=data,
        ) from e
    return value
