"""Argument codec: packing of series parameters into one uint256 word."""

from .argument_codec import (
    A_BITS,
    B_BITS,
    FIELD_LAYOUT,
    K_BITS,
    PACKED_BITS,
    PRECISION_BITS,
    X_BITS,
    ArgumentCodecError,
    decode_arguments,
    encode_arguments,
    encode_parameters,
    evaluate_packed,
)

__all__ = [
    # Layout
    "PRECISION_BITS",
    "B_BITS",
    "A_BITS",
    "X_BITS",
    "K_BITS",
    "FIELD_LAYOUT",
    "PACKED_BITS",
    # Errors
    "ArgumentCodecError",
    # Functions
    "encode_arguments",
    "encode_parameters",
    "decode_arguments",
    "evaluate_packed",
]
