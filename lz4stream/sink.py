import io
import logging

from ._ffi import ffi, lib, error_name, LZ4F_HEADER_SIZE_MAX
from .context import CompressionContext
from .errors import CodecError, UsedAfterClose

log = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 64 * 1024

UNSTARTED = 'unstarted'
STREAMING = 'streaming'
CLOSED = 'closed'


class EncodingSink(object):
    """Writable stream that compresses everything written into one LZ4 frame.

    Bytes are packed into ``block_size`` staging blocks before they reach the
    codec, and compressed output goes to ``downstream.write``. The frame
    footer is only emitted by ``close()``; ``downstream`` itself is never
    closed.

        with open('data.lz4', 'wb') as f:
            with EncodingSink(f) as sink:
                sink.write(b'binary data')
    """

    def __init__(self, downstream, block_size=DEFAULT_BLOCK_SIZE):
        if block_size < 1:
            raise ValueError('block_size must be at least 1, got %r' % block_size)
        if not callable(getattr(downstream, 'write', None)):
            raise TypeError('downstream.write not callable')
        self._downstream = downstream
        self._phase = UNSTARTED
        self._block_size = block_size
        self._pos = 0
        self.total_in = 0
        self.total_out = 0

        self._context = CompressionContext()
        try:
            self._staging = ffi.new('char[]', block_size)
            capacity = lib.LZ4F_compressBound(block_size, ffi.NULL) + LZ4F_HEADER_SIZE_MAX
            self._destination = ffi.new('char[]', capacity)
            self._begin()
        except BaseException:
            self._context.release()
            self._phase = CLOSED
            raise

    @property
    def block_size(self):
        return self._block_size

    @property
    def closed(self):
        return self._phase == CLOSED

    def readable(self):
        return False

    def writable(self):
        return True

    def seekable(self):
        return False

    def read(self, size=-1):
        raise io.UnsupportedOperation('read')

    def __enter__(self):
        self._check_open()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.close()
        else:
            self._abort()
        return False

    def write(self, data):
        self._check_open()
        src = ffi.from_buffer(data)
        size = len(src)
        offset = 0
        while offset < size:
            n = min(self._block_size - self._pos, size - offset)
            ffi.memmove(self._staging + self._pos, src + offset, n)
            self._pos += n
            offset += n
            if self._pos == self._block_size:
                self._compress_staged()
        self.total_in += size
        return size

    def flush(self):
        self._check_open()
        self._compress_staged()
        ctx = self._context.handle
        result = lib.LZ4F_flush(ctx, self._destination, len(self._destination), ffi.NULL)
        self._emit(self._check(result))

    def close(self):
        if self._phase == CLOSED:
            return
        try:
            self._compress_staged()
            ctx = self._context.handle
            result = lib.LZ4F_compressEnd(ctx, self._destination, len(self._destination), ffi.NULL)
            self._emit(self._check(result))
            log.debug('frame closed: %d bytes in, %d bytes out', self.total_in, self.total_out)
        finally:
            self._abort()

    def _abort(self):
        self._context.release()
        self._phase = CLOSED

    def _check_open(self):
        if self._phase == CLOSED:
            raise UsedAfterClose()

    def _check(self, result):
        if lib.LZ4F_isError(result):
            self._abort()
            raise CodecError(error_name(result))
        return result

    def _emit(self, size):
        # compressUpdate returns 0 while lz4 is still filling its own block
        if size:
            self._downstream.write(ffi.buffer(self._destination, size)[:])
            self.total_out += size

    def _begin(self):
        ctx = self._context.handle
        result = lib.LZ4F_compressBegin(ctx, self._destination, len(self._destination), ffi.NULL)
        self._emit(self._check(result))
        self._phase = STREAMING
        log.debug('frame header written: %d bytes, block size %d', result, self._block_size)

    def _compress_staged(self):
        if not self._pos:
            return
        size, self._pos = self._pos, 0
        ctx = self._context.handle
        result = lib.LZ4F_compressUpdate(ctx, self._destination, len(self._destination),
                                         self._staging, size, ffi.NULL)
        self._emit(self._check(result))
