class Lz4StreamError(Exception):
    """Base class for every error raised by lz4stream."""


class CodecInitError(Lz4StreamError):
    """The lz4 library could not allocate a frame context."""

    def __init__(self, name):
        super(CodecInitError, self).__init__('failed to create LZ4 context: %s' % name)
        self.name = name


class CodecError(Lz4StreamError):
    """A frame call failed; the adapter that raised it is no longer usable."""

    def __init__(self, name, message=None):
        super(CodecError, self).__init__(message or 'LZ4 frame error: %s' % name)
        self.name = name


class TruncatedFrameError(CodecError):

    def __init__(self, expected):
        super(TruncatedFrameError, self).__init__(
            'frameTruncated',
            'LZ4 frame truncated: input ended while %d more byte(s) were expected' % expected)
        self.expected = expected


class UsedAfterClose(Lz4StreamError, ValueError):

    def __init__(self, message='I/O operation on closed LZ4 stream'):
        super(UsedAfterClose, self).__init__(message)
