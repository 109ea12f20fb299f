"""
Leaf encoders. Each one hashes domain data into the 32-byte digest the tree consumes,
matching the abi.encodePacked layout the claiming contract hashes on-chain.
"""
from typing import Literal

import base58
from eth_utils import is_hex_address, keccak, to_checksum_address
from web3 import Web3

from .errors import InvalidAddressError, InvalidLeafDataError

AddressEncoding = Literal["packed", "padded"]

TRON_ADDRESS_PREFIX = 0x41
UINT256_MAX = 2**256 - 1


def tron_to_evm_address(tron_addr: str) -> str:
    """
    Convert Tron Base58Check addr (T...) to EVM 0x address by stripping leading 0x41.
    Returns checksummed 0x address.
    """
    try:
        decoded = base58.b58decode_check(tron_addr)
    except ValueError as exc:
        raise InvalidAddressError(f"Invalid Tron address: {tron_addr}") from exc
    if len(decoded) != 21 or decoded[0] != TRON_ADDRESS_PREFIX:
        raise InvalidAddressError(f"Invalid Tron address: {tron_addr}")
    return to_checksum_address("0x" + decoded[1:].hex())


def normalize_address(addr: str) -> str:
    """Accept 0x/bare hex EVM addresses or Tron base58 addresses; return the checksummed EVM form."""
    if not isinstance(addr, str):
        raise InvalidAddressError(f"Invalid address: {addr!r}")
    addr = addr.strip()
    if addr.startswith("T") and len(addr) == 34:
        return tron_to_evm_address(addr)
    if not addr.startswith("0x"):
        addr = "0x" + addr
    if not is_hex_address(addr):
        raise InvalidAddressError(f"Invalid address: {addr}")
    return to_checksum_address(addr)


def address_leaf(addr: str, encoding: AddressEncoding = "packed") -> bytes:
    a = normalize_address(addr)
    if encoding == "packed":
        return bytes(Web3.solidity_keccak(["address"], [a]))
    if encoding == "padded":
        # left-padded to 32 bytes like the Solidity assembly
        return keccak(b"\x00" * 12 + bytes.fromhex(a[2:]))
    raise InvalidLeafDataError(f"Unknown address encoding: {encoding!r}")


def token_uri_leaf(index: int, uri: str) -> bytes:
    """keccak256(abi.encodePacked(uint256 index, string uri))"""
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidLeafDataError(f"Token index must be an integer, got {index!r}")
    if not 0 <= index <= UINT256_MAX:
        raise InvalidLeafDataError(f"Token index {index} exceeds uint256")
    if not isinstance(uri, str):
        raise InvalidLeafDataError(f"Token URI must be a string, got {type(uri).__name__}")
    return bytes(Web3.solidity_keccak(["uint256", "string"], [index, uri]))
