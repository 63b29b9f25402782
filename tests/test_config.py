"""Tests for the bandcamp-expand configuration schema."""

import tempfile
from pathlib import Path

import pytest
import platformdirs
from pydantic import ValidationError
from bandcamp_expand.common import expand_path_variables
from bandcamp_expand.config import (
    ExpandConfig,
    LibraryConfig,
    PathsConfig,
    ProcessingConfig,
)


class TestPathsConfig:
    """Tests for path defaults and expansion."""

    def test_defaults_follow_platform_folders(self):
        config = PathsConfig()
        downloads = platformdirs.user_downloads_dir()

        assert Path(config.source_dir) == Path(downloads) / "Bandcamp"
        assert Path(config.staging_root) == Path(downloads) / "Bandcamp" / "auto"
        assert Path(config.music_root) == Path(platformdirs.user_music_dir())
        assert "${" not in config.source_dir

    def test_variables_expanded_in_overrides(self):
        config = PathsConfig(music_root="${USER_HOME}/Music/Library")
        assert config.music_root == f"{Path.home()}/Music/Library"

    def test_accepts_path_objects(self, tmp_path):
        config = PathsConfig(source_dir=tmp_path)
        assert config.source_dir == str(tmp_path)

    def test_rejects_empty_path(self):
        with pytest.raises(ValidationError):
            PathsConfig(music_root="  ")

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            PathsConfig(download_dir="/tmp")


class TestExpandPathVariables:
    """Tests for ${VAR} expansion."""

    def test_temp_and_home(self):
        assert expand_path_variables("${TEMP}/x") == f"{tempfile.gettempdir()}/x"
        assert expand_path_variables("${USER_HOME}") == str(Path.home())

    def test_tilde(self):
        assert expand_path_variables("~/Music") == str(Path.home() / "Music")

    def test_plain_path_unchanged(self):
        assert expand_path_variables("/srv/music") == "/srv/music"


class TestExpandConfig:
    """Tests for the root configuration."""

    def test_defaults(self):
        config = ExpandConfig()

        assert config.logging.level == "INFO"
        assert config.library == LibraryConfig(flac_subdir="FLAC", aac_subdir="AAC")
        assert config.processing == ProcessingConfig(
            archive_pattern="*.zip", fail_fast=False, delete_archive=True
        )

    def test_path_properties(self, tmp_path):
        config = ExpandConfig(paths={
            "source_dir": str(tmp_path / "src"),
            "music_root": str(tmp_path / "music"),
            "staging_root": str(tmp_path / "stage"),
        })
        assert config.source_dir == tmp_path / "src"
        assert config.music_root == tmp_path / "music"
        assert config.staging_root == tmp_path / "stage"

    def test_from_nested_dict(self):
        config = ExpandConfig.model_validate({
            "logging": {"level": "warning", "format": "json"},
            "library": {"flac_subdir": "Lossless"},
            "processing": {"fail_fast": True, "delete_archive": False},
        })
        assert config.logging.level == "WARNING"
        assert config.library.flac_subdir == "Lossless"
        assert config.library.aac_subdir == "AAC"
        assert config.processing.fail_fast is True
        assert config.processing.delete_archive is False

    def test_rejects_empty_subdir(self):
        with pytest.raises(ValidationError):
            ExpandConfig(library={"flac_subdir": ""})

    def test_rejects_unknown_section(self):
        with pytest.raises(ValidationError):
            ExpandConfig(database={"path": "x"})
