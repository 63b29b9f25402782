"""Configuration utilities."""

import tempfile
import platformdirs
from pathlib import Path


def path_variables() -> dict[str, str]:
    """Return the ${VAR} replacements available in configured paths."""
    return {
        "${USER_HOME}": str(Path.home()),
        "${USER_DOWNLOADS}": platformdirs.user_downloads_dir(),
        "${USER_MUSIC}": platformdirs.user_music_dir(),
        "${USER_DATA}": platformdirs.user_data_dir(),
        "${USER_CONFIG}": platformdirs.user_config_dir(),
        "${USER_CACHE}": platformdirs.user_cache_dir(),
        "${USER_LOGS}": platformdirs.user_log_dir(),
        "${TEMP}": tempfile.gettempdir(),
    }


def expand_path_variables(path: str) -> str:
    """Expand ${VAR} variables in paths.

    Supported variables:
        ${USER_HOME}: User's home directory
        ${USER_DOWNLOADS}: Platform-standard Downloads folder
        ${USER_MUSIC}: Platform-standard Music folder
        ${USER_DATA}: User data directory
        ${USER_CONFIG}: User config directory
        ${USER_CACHE}: User cache directory
        ${USER_LOGS}: User log directory
        ${TEMP}: Temporary directory

    A leading ``~`` is expanded to the home directory as well.

    Args:
        path: Path string with variables

    Returns:
        Expanded path string
    """
    if not isinstance(path, str):
        return path

    for var, value in path_variables().items():
        path = path.replace(var, value)

    if path.startswith("~"):
        path = str(Path(path).expanduser())

    return path
