"""Streaming output decoding."""

from .stream_decoder import DecodedItem, NdjsonStreamDecoder, ScanState

__all__ = ["DecodedItem", "NdjsonStreamDecoder", "ScanState"]
