"""
Address parsing and well-known program addresses.
"""

from typing import Final, Union

from solders.pubkey import Pubkey

from solpay.core.errors import InputError

# Core system programs
SYSTEM_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("11111111111111111111111111111111")
TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
ASSOCIATED_TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)


def parse_address(value: Union[str, Pubkey], field_name: str = "address") -> Pubkey:
    """
    Parse a base58 address supplied by the user.

    Args:
        value: Address text, or an already parsed Pubkey
        field_name: Name used in the error message

    Returns:
        Parsed public key

    Raises:
        InputError: If the text is not a valid address
    """
    if isinstance(value, Pubkey):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InputError(f"{field_name.capitalize()} is required")

    try:
        return Pubkey.from_string(value.strip())
    except ValueError:
        raise InputError(f"Invalid {field_name}: {value!r}")


def short_address(address: Union[str, Pubkey], length: int = 20) -> str:
    """Shorten an address for logs and messages."""
    text = str(address)
    if len(text) <= length:
        return text
    return text[:length] + "..."
