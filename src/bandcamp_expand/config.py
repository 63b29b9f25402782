"""Configuration schema for bandcamp-expand."""

from pathlib import Path

from pydantic import BaseModel, Field, ConfigDict, field_validator

from bandcamp_expand.common import LoggingConfig, expand_path_variables


class PathsConfig(BaseModel):
    """Source, library and staging locations."""

    model_config = ConfigDict(extra='forbid', validate_default=True)

    source_dir: str = Field(
        default="${USER_DOWNLOADS}/Bandcamp",
        description="Directory scanned (non-recursively) for album archives"
    )
    music_root: str = Field(
        default="${USER_MUSIC}",
        description="Root of the music library"
    )
    staging_root: str = Field(
        default="${USER_DOWNLOADS}/Bandcamp/auto",
        description="Temporary extraction root"
    )

    @field_validator("*", mode="before")
    @classmethod
    def expand_variables(cls, v: str) -> str:
        """Expand ${VAR} in paths."""
        if isinstance(v, Path):
            v = str(v)
        return expand_path_variables(v)

    @field_validator("*")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("path must not be empty")
        return v


class LibraryConfig(BaseModel):
    """Codec subtree names under the music root."""

    model_config = ConfigDict(extra='forbid')

    flac_subdir: str = Field(default="FLAC", min_length=1)
    aac_subdir: str = Field(default="AAC", min_length=1)


class ProcessingConfig(BaseModel):
    """Run behaviour."""

    model_config = ConfigDict(extra='forbid')

    archive_pattern: str = Field(
        default="*.zip",
        min_length=1,
        description="Glob used to find archives in the source directory"
    )
    fail_fast: bool = Field(
        default=False,
        description="Stop the whole run on the first failed archive"
    )
    delete_archive: bool = Field(
        default=True,
        description="Delete the archive after a successful relocation"
    )


class ExpandConfig(BaseModel):
    """Root configuration for bandcamp-expand."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    library: LibraryConfig = Field(default_factory=LibraryConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)

    @property
    def source_dir(self) -> Path:
        return Path(self.paths.source_dir)

    @property
    def music_root(self) -> Path:
        return Path(self.paths.music_root)

    @property
    def staging_root(self) -> Path:
        return Path(self.paths.staging_root)
