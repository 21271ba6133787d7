import ctypes.util
import importlib.util

import pytest

from lz4stream import _ffi


def load_ffi_module():
    spec = importlib.util.spec_from_file_location('lz4stream_ffi_copy', _ffi.__file__)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_library_override(monkeypatch):
    path = ctypes.util.find_library('lz4') or 'liblz4.so.1'
    monkeypatch.setenv('LZ4STREAM_LIBRARY', path)
    assert _ffi._library_path() == path
    module = load_ffi_module()
    assert module.lib.LZ4F_compressBound(0, module.ffi.NULL) > 0
    assert module.error_name(int(module.ffi.cast('size_t', -1)))


def test_library_override_missing(monkeypatch, tmp_path):
    monkeypatch.setenv('LZ4STREAM_LIBRARY', str(tmp_path / 'liblz4-missing.so'))
    with pytest.raises(OSError):
        load_ffi_module()


def test_default_library_path(monkeypatch):
    monkeypatch.delenv('LZ4STREAM_LIBRARY', raising=False)
    assert _ffi._library_path() == (ctypes.util.find_library('lz4') or 'liblz4.so.1')
