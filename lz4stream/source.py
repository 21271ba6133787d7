import errno
import io
import logging

from ._ffi import ffi, lib, error_name
from .context import DecompressionContext
from .errors import CodecError, TruncatedFrameError, UsedAfterClose
from .sink import DEFAULT_BLOCK_SIZE

log = logging.getLogger(__name__)

ACTIVE = 'active'
DRAINED = 'drained'
FAILED = 'failed'


def _would_block(method):
    # None from a non-blocking stream means "no data yet", not end of stream
    return BlockingIOError(errno.EAGAIN, 'upstream.%s returned None; a blocking stream is required'
                           % method)


class DecodingSource(object):
    """Readable stream that decodes a single LZ4 frame pulled from ``upstream``.

    Compressed bytes are read ``source_size`` at a time and decoded into a
    ``decoded_size`` window that ``read()`` drains. ``read()`` returns
    ``b''`` once the frame is complete; input that stops mid-frame raises
    ``TruncatedFrameError``. Bytes following the frame are left unread.

        with open('data.lz4', 'rb') as f:
            data = DecodingSource(f).read()
    """

    def __init__(self, upstream, source_size=DEFAULT_BLOCK_SIZE, decoded_size=DEFAULT_BLOCK_SIZE):
        if source_size < 1:
            raise ValueError('source_size must be at least 1, got %r' % source_size)
        if decoded_size < 1:
            raise ValueError('decoded_size must be at least 1, got %r' % decoded_size)
        readinto = getattr(upstream, 'readinto', None)
        if not callable(readinto) and not callable(getattr(upstream, 'read', None)):
            raise TypeError('upstream.read not callable')
        self._upstream = upstream
        self._readinto = readinto if callable(readinto) else None
        self._phase = ACTIVE
        self._closed = False
        self._hint = 1  # no frame header seen yet
        self.total_in = 0
        self.total_out = 0

        self._offset = 0
        self._filled = 0
        self._pos = 0
        self._end = 0

        self._context = DecompressionContext()
        try:
            self._source = ffi.new('char[]', source_size)
            self._decoded = ffi.new('char[]', decoded_size)
            self._src_size = ffi.new('size_t *')
            self._dst_size = ffi.new('size_t *')
        except BaseException:
            self._context.release()
            self._closed = True
            raise

    @property
    def closed(self):
        return self._closed

    def readable(self):
        return True

    def writable(self):
        return False

    def seekable(self):
        return False

    def write(self, data):
        raise io.UnsupportedOperation('write')

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._context.release()

    def __enter__(self):
        self._check_open()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def __iter__(self):
        while True:
            chunk = self.read(len(self._decoded))
            if not chunk:
                return
            yield chunk

    def read(self, size=-1):
        self._check_open()
        if size is None or size < 0:
            return self.readall()
        if size == 0 or not self._fill():
            return b''
        n = min(size, self._end - self._pos)
        data = ffi.buffer(self._decoded + self._pos, n)[:]
        self._pos += n
        return data

    def readinto(self, b):
        self._check_open()
        with memoryview(b) as view:
            size = view.nbytes
        if not size or not self._fill():
            return 0
        n = min(size, self._end - self._pos)
        ffi.memmove(b, self._decoded + self._pos, n)
        self._pos += n
        return n

    def readall(self):
        self._check_open()
        chunks = []
        while self._fill():
            chunks.append(ffi.buffer(self._decoded + self._pos, self._end - self._pos)[:])
            self._pos = self._end
        return b''.join(chunks)

    def _check_open(self):
        if self._closed:
            raise UsedAfterClose()

    def _fill(self):
        """Make sure the decoded window holds at least one byte; False at end of frame."""
        if self._pos < self._end:
            return True
        if self._phase == FAILED:
            raise CodecError('streamFailed', 'LZ4 stream is unusable after a previous error')
        if self._phase == DRAINED:
            return False
        return self._underflow()

    def _underflow(self):
        ctx = self._context.handle
        while True:
            if self._offset == self._filled:
                self._filled = self._read_upstream()
                self._offset = 0
                if not self._filled:
                    return self._upstream_exhausted()

            self._src_size[0] = self._filled - self._offset
            self._dst_size[0] = len(self._decoded)
            hint = lib.LZ4F_decompress(ctx, self._decoded, self._dst_size,
                                       self._source + self._offset, self._src_size, ffi.NULL)
            if lib.LZ4F_isError(hint):
                self._phase = FAILED
                raise CodecError(error_name(hint))

            consumed = self._src_size[0]
            produced = self._dst_size[0]
            self._offset += consumed
            self.total_in += consumed
            self.total_out += produced
            self._hint = hint
            if not hint:
                self._phase = DRAINED
                log.debug('frame complete: %d bytes in, %d bytes out', self.total_in, self.total_out)
            if produced:
                self._pos = 0
                self._end = produced
                return True
            if self._phase == DRAINED:
                return False

    def _upstream_exhausted(self):
        # an upstream that was empty from the start is a plain EOF
        if self.total_in and self._hint:
            self._phase = FAILED
            raise TruncatedFrameError(self._hint)
        self._phase = DRAINED
        return False

    def _read_upstream(self):
        capacity = len(self._source)
        if self._readinto is not None:
            count = self._readinto(ffi.buffer(self._source, capacity))
            if count is None:
                raise _would_block('readinto')
            return count
        data = self._upstream.read(capacity)
        if data is None:
            raise _would_block('read')
        if not data:
            return 0
        if len(data) > capacity:
            raise ValueError('upstream.read returned %d bytes, more than the %d requested'
                             % (len(data), capacity))
        ffi.memmove(self._source, data, len(data))
        return len(data)
