import io
import os
import random

import pytest

import lz4stream

BUFFER_SIZES = [1, 8, 64, 256, 65536]

FOX = b'The quick brown fox jumps over the lazy dog\n'


def roundtrip(data, block_size=lz4stream.DEFAULT_BLOCK_SIZE,
              source_size=lz4stream.DEFAULT_BLOCK_SIZE, decoded_size=lz4stream.DEFAULT_BLOCK_SIZE):
    encoded = lz4stream.compress(data, block_size=block_size)
    return lz4stream.decompress(encoded, source_size=source_size, decoded_size=decoded_size)


def test_empty():
    encoded = lz4stream.compress(b'')
    assert encoded
    assert encoded.startswith(b'\x04\x22\x4d\x18')
    source = lz4stream.DecodingSource(io.BytesIO(encoded))
    assert source.read(1) == b''
    assert source.read() == b''


def test_all_zeroes():
    data = b'\0' * 1024
    assert data == roundtrip(data)


def test_repeated_byte():
    data = b'A' * 1024
    encoded = lz4stream.compress(data)
    assert len(encoded) < len(data)
    assert data == lz4stream.decompress(encoded)


def test_one_block_of_random():
    data = os.urandom(64 * 1024)
    assert data == roundtrip(data)


def test_random():
    for _ in range(3):
        data = os.urandom(random.randint(0, 10 * 1024 * 1024))
        assert data == roundtrip(data), 'failed with %d random bytes' % len(data)


def test_string():
    data = b'test' * (1024 * 1024)
    assert data == roundtrip(data)


def test_tiny_buffers():
    assert FOX == roundtrip(FOX, block_size=8, source_size=8, decoded_size=8)


@pytest.mark.parametrize('block_size', BUFFER_SIZES)
@pytest.mark.parametrize('decoded_size', BUFFER_SIZES)
def test_buffer_sizes(block_size, decoded_size):
    data = FOX * 50 + os.urandom(3000)
    assert data == roundtrip(data, block_size=block_size,
                             source_size=decoded_size, decoded_size=decoded_size)


@pytest.mark.parametrize('block_size', BUFFER_SIZES)
def test_buffer_sizes_empty(block_size):
    assert b'' == roundtrip(b'', block_size=block_size, source_size=block_size,
                            decoded_size=block_size)


def test_truncated_last_byte():
    data = os.urandom(100 * 1024)
    encoded = lz4stream.compress(data)
    with pytest.raises(lz4stream.CodecError):
        lz4stream.decompress(encoded[:-1])


def test_truncated_empty_frame():
    encoded = lz4stream.compress(b'')
    with pytest.raises(lz4stream.TruncatedFrameError):
        lz4stream.decompress(encoded[:-1])


def test_truncated_partial_output_is_short():
    data = FOX * 5000
    encoded = lz4stream.compress(data)
    source = lz4stream.DecodingSource(io.BytesIO(encoded[:len(encoded) // 2]))
    out = []
    with pytest.raises(lz4stream.TruncatedFrameError):
        for chunk in source:
            out.append(chunk)
    assert len(b''.join(out)) < len(data)


def test_garbage():
    with pytest.raises(lz4stream.CodecError) as excinfo:
        lz4stream.decompress(b'this is not an lz4 frame at all')
    assert excinfo.value.name


def test_trailing_bytes_after_frame_are_ignored():
    encoded = lz4stream.compress(FOX)
    assert FOX == lz4stream.decompress(encoded + b'trailing')


def test_readable_by_lz4_package():
    lz4_frame = pytest.importorskip('lz4.frame')
    data = FOX * 1000 + os.urandom(100 * 1024)
    assert data == lz4_frame.decompress(lz4stream.compress(data))


def test_reads_lz4_package_frames():
    lz4_frame = pytest.importorskip('lz4.frame')
    data = FOX * 1000 + os.urandom(100 * 1024)
    assert data == lz4stream.decompress(lz4_frame.compress(data), source_size=100, decoded_size=100)
