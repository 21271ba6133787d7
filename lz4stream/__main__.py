"""(de)compresses a single lz4 frame between files and/or standard streams"""

import logging
import sys

from . import EncodingSink, DecodingSource, Lz4StreamError, DEFAULT_BLOCK_SIZE

log = logging.getLogger('lz4stream')

USAGE = """USAGE: lz4stream [-v] <-c|-d> <-|INPUT-FILE> <-|OUTPUT-FILE>

Compresses (-c) or decompresses (-d) one lz4 frame. '-' selects stdin for the
input and stdout for the output."""

_MODES = {'-c': True, '-d': False}


def do_compress(in_stream, out_stream, block_size=DEFAULT_BLOCK_SIZE):
    read = in_stream.read
    with EncodingSink(out_stream, block_size=block_size) as sink:
        while True:
            chunk = read(block_size)
            if not chunk:
                break
            sink.write(chunk)
    log.debug('compressed %d bytes into %d bytes', sink.total_in, sink.total_out)


def do_decompress(in_stream, out_stream, block_size=DEFAULT_BLOCK_SIZE):
    write = out_stream.write
    with DecodingSource(in_stream, block_size, block_size) as source:
        for chunk in source:
            write(chunk)
        log.debug('decompressed %d bytes into %d bytes', source.total_in, source.total_out)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = bool(args) and args[0] == '-v'
    if verbose:
        args.pop(0)
    logging.basicConfig(stream=sys.stderr, format='%(name)s: %(levelname)s: %(message)s',
                        level=logging.DEBUG if verbose else logging.WARNING)

    if len(args) != 3 or args[0] not in _MODES:
        print(USAGE, file=sys.stderr)
        return 1
    compress = _MODES[args[0]]
    input_path, output_path = args[1], args[2]

    in_file = out_file = None
    try:
        if input_path == '-':
            in_stream = sys.stdin.buffer
        else:
            try:
                in_stream = in_file = open(input_path, 'rb')
            except OSError as ex:
                log.error('failed to open input file for reading: %s', ex)
                return 2
        if output_path == '-':
            out_stream = sys.stdout.buffer
        else:
            try:
                out_stream = out_file = open(output_path, 'wb')
            except OSError as ex:
                log.error('failed to open output file for writing: %s', ex)
                return 4

        (do_compress if compress else do_decompress)(in_stream, out_stream)
        out_stream.flush()
    except Lz4StreamError as ex:
        log.error('%s failed: %s', 'compression' if compress else 'decompression', ex)
        return 8
    except OSError as ex:
        log.error('I/O failure: %s', ex)
        return 16
    finally:
        if in_file:
            in_file.close()
        if out_file:
            out_file.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
