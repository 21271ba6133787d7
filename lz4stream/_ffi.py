import ctypes.util
import os

from cffi import FFI

ffi = FFI()

ffi.cdef(r"""

typedef size_t LZ4F_errorCode_t;

typedef struct LZ4F_cctx_s LZ4F_cctx;
typedef struct LZ4F_dctx_s LZ4F_dctx;

/* only ever passed as NULL, so the layouts are never needed */
typedef struct LZ4F_preferences_s LZ4F_preferences_t;
typedef struct LZ4F_compressOptions_s LZ4F_compressOptions_t;
typedef struct LZ4F_decompressOptions_s LZ4F_decompressOptions_t;

unsigned LZ4F_isError(LZ4F_errorCode_t code);
const char* LZ4F_getErrorName(LZ4F_errorCode_t code);

LZ4F_errorCode_t LZ4F_createCompressionContext(LZ4F_cctx** cctxPtr, unsigned version);
LZ4F_errorCode_t LZ4F_freeCompressionContext(LZ4F_cctx* cctx);

size_t LZ4F_compressBound(size_t srcSize, const LZ4F_preferences_t* prefsPtr);
size_t LZ4F_compressBegin(LZ4F_cctx* cctx, void* dstBuffer, size_t dstCapacity,
                          const LZ4F_preferences_t* prefsPtr);
size_t LZ4F_compressUpdate(LZ4F_cctx* cctx, void* dstBuffer, size_t dstCapacity,
                           const void* srcBuffer, size_t srcSize,
                           const LZ4F_compressOptions_t* cOptPtr);
size_t LZ4F_flush(LZ4F_cctx* cctx, void* dstBuffer, size_t dstCapacity,
                  const LZ4F_compressOptions_t* cOptPtr);
size_t LZ4F_compressEnd(LZ4F_cctx* cctx, void* dstBuffer, size_t dstCapacity,
                        const LZ4F_compressOptions_t* cOptPtr);

LZ4F_errorCode_t LZ4F_createDecompressionContext(LZ4F_dctx** dctxPtr, unsigned version);
LZ4F_errorCode_t LZ4F_freeDecompressionContext(LZ4F_dctx* dctx);

size_t LZ4F_decompress(LZ4F_dctx* dctx,
                       void* dstBuffer, size_t* dstSizePtr,
                       const void* srcBuffer, size_t* srcSizePtr,
                       const LZ4F_decompressOptions_t* dOptPtr);

""")

# from lz4frame.h
LZ4F_VERSION = 100
LZ4F_HEADER_SIZE_MAX = 19


def _library_path():
    path = os.environ.get('LZ4STREAM_LIBRARY')
    if path:
        return path
    return ctypes.util.find_library('lz4') or 'liblz4.so.1'


lib = ffi.dlopen(_library_path())


def error_name(code):
    return ffi.string(lib.LZ4F_getErrorName(code)).decode('utf-8')
