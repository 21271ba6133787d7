"""Scoped ownership of lz4 frame contexts.

A context is created on construction and freed exactly once: either by an
explicit ``release()`` (also run on ``__exit__``) or, failing that, when the
garbage collector reclaims the ``ffi.gc`` wrapper.
"""
import logging

from ._ffi import ffi, lib, error_name, LZ4F_VERSION
from .errors import CodecInitError, UsedAfterClose

log = logging.getLogger(__name__)


class _Context(object):
    _ctype = None
    _create = None
    _free = None

    def __init__(self):
        ptr = ffi.new(self._ctype + ' **')
        status = self._create(ptr, LZ4F_VERSION)
        if lib.LZ4F_isError(status):
            raise CodecInitError(error_name(status))
        self._handle = ffi.gc(ptr[0], self._free)
        log.debug('created %s', self._ctype)

    @property
    def handle(self):
        if self._handle is None:
            raise UsedAfterClose('%s has been released' % self._ctype)
        return self._handle

    @property
    def released(self):
        return self._handle is None

    def release(self):
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        ffi.release(handle)
        log.debug('released %s', self._ctype)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
        return False

    def __copy__(self):
        raise TypeError('%s cannot be copied' % type(self).__name__)

    def __deepcopy__(self, memo):
        raise TypeError('%s cannot be copied' % type(self).__name__)

    def __reduce__(self):
        raise TypeError('%s cannot be pickled' % type(self).__name__)


class CompressionContext(_Context):
    _ctype = 'LZ4F_cctx'
    _create = staticmethod(lib.LZ4F_createCompressionContext)
    _free = staticmethod(lib.LZ4F_freeCompressionContext)


class DecompressionContext(_Context):
    _ctype = 'LZ4F_dctx'
    _create = staticmethod(lib.LZ4F_createDecompressionContext)
    _free = staticmethod(lib.LZ4F_freeDecompressionContext)
