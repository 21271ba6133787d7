"""Streaming LZ4 frame adapters over the system liblz4, bound with cffi.

    import lz4stream

    with open('data.lz4', 'wb') as f, lz4stream.EncodingSink(f) as sink:
        sink.write(b'binary data')

    with open('data.lz4', 'rb') as f:
        data = lz4stream.DecodingSource(f).read()

``compress`` and ``decompress`` do the same for in-memory bytes.
"""
import io

from .context import CompressionContext, DecompressionContext
from .errors import (Lz4StreamError, CodecInitError, CodecError, TruncatedFrameError,
                     UsedAfterClose)
from .sink import EncodingSink, DEFAULT_BLOCK_SIZE
from .source import DecodingSource

__all__ = ('EncodingSink', 'DecodingSource',
           'CompressionContext', 'DecompressionContext',
           'Lz4StreamError', 'CodecInitError', 'CodecError', 'TruncatedFrameError',
           'UsedAfterClose', 'DEFAULT_BLOCK_SIZE',
           'compress', 'decompress')


def compress(some_bytes, block_size=DEFAULT_BLOCK_SIZE):
    out = io.BytesIO()
    with EncodingSink(out, block_size=block_size) as sink:
        sink.write(some_bytes)
    return out.getvalue()


def decompress(some_bytes, source_size=DEFAULT_BLOCK_SIZE, decoded_size=DEFAULT_BLOCK_SIZE):
    with DecodingSource(io.BytesIO(some_bytes), source_size, decoded_size) as source:
        return source.readall()
