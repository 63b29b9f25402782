"""Tests for codec detection and routing."""

import zipfile
from pathlib import Path

import pytest
from bandcamp_expand.codec import (
    CodecFamily,
    classify_entry_name,
    destination_root,
    detect_codec,
    sniff_codec,
)
from bandcamp_expand.common import CorruptedArchiveError, UnrecognizedCodecError


def make_zip(path: Path, names) -> Path:
    with zipfile.ZipFile(path, 'w') as zf:
        for name in names:
            zf.writestr(name, b"data")
    return path


class TestClassifyEntryName:
    """Tests for single entry classification."""

    @pytest.mark.parametrize("name", ["01 Track.flac", "01 Track.FLAC", "disc/01.Flac"])
    def test_flac(self, name):
        assert classify_entry_name(name) is CodecFamily.FLAC

    @pytest.mark.parametrize("name", ["01 Track.m4a", "01 Track.M4A", "01 Track.aac", "x/y.AaC"])
    def test_aac(self, name):
        assert classify_entry_name(name) is CodecFamily.AAC

    @pytest.mark.parametrize("name", ["cover.jpg", "01 Track.mp3", "flac", "notes.flac.txt"])
    def test_unrecognised(self, name):
        assert classify_entry_name(name) is None


class TestSniffCodec:
    """Tests for archive classification."""

    def test_flac_archive(self, tmp_path):
        path = make_zip(tmp_path / "a.zip", ["cover.jpg", "01 Intro.FLAC", "02 Song.flac"])
        with zipfile.ZipFile(path) as zf:
            assert sniff_codec(zf) is CodecFamily.FLAC

    def test_aac_archive_with_m4a(self, tmp_path):
        path = make_zip(tmp_path / "a.zip", ["cover.jpg", "01 Intro.m4a"])
        with zipfile.ZipFile(path) as zf:
            assert sniff_codec(zf) is CodecFamily.AAC

    def test_aac_archive_with_aac(self, tmp_path):
        path = make_zip(tmp_path / "a.zip", ["01 Intro.AAC"])
        with zipfile.ZipFile(path) as zf:
            assert sniff_codec(zf) is CodecFamily.AAC

    def test_first_match_wins(self, tmp_path):
        path = make_zip(tmp_path / "a.zip", ["readme.txt", "01.m4a", "02.flac"])
        with zipfile.ZipFile(path) as zf:
            assert sniff_codec(zf) is CodecFamily.AAC

    def test_unknown(self, tmp_path):
        path = make_zip(tmp_path / "a.zip", ["cover.jpg", "01.mp3", "02.ogg"])
        with zipfile.ZipFile(path) as zf:
            assert sniff_codec(zf) is CodecFamily.UNKNOWN

    def test_empty_archive(self, tmp_path):
        path = make_zip(tmp_path / "a.zip", [])
        with zipfile.ZipFile(path) as zf:
            assert sniff_codec(zf) is CodecFamily.UNKNOWN


class TestDetectCodec:
    """Tests for classification from a path."""

    def test_detect_from_path(self, tmp_path):
        path = make_zip(tmp_path / "a.zip", ["01.flac"])
        assert detect_codec(path) is CodecFamily.FLAC

    def test_missing_archive(self, tmp_path):
        with pytest.raises(CorruptedArchiveError):
            detect_codec(tmp_path / "missing.zip")

    def test_not_a_zip(self, tmp_path):
        path = tmp_path / "fake.zip"
        path.write_text("this is not a zip file")
        with pytest.raises(CorruptedArchiveError) as exc_info:
            detect_codec(path)
        assert isinstance(exc_info.value.__cause__, zipfile.BadZipFile)


class TestDestinationRoot:
    """Tests for routing by codec family."""

    def test_flac_route(self, tmp_path):
        assert destination_root(CodecFamily.FLAC, tmp_path) == tmp_path / "FLAC"

    def test_aac_route(self, tmp_path):
        assert destination_root(CodecFamily.AAC, tmp_path) == tmp_path / "AAC"

    def test_custom_subdirs(self, tmp_path):
        root = destination_root(CodecFamily.AAC, tmp_path, flac_subdir="Lossless", aac_subdir="Lossy")
        assert root == tmp_path / "Lossy"

    def test_unknown_raises(self, tmp_path):
        with pytest.raises(UnrecognizedCodecError):
            destination_root(CodecFamily.UNKNOWN, tmp_path)
