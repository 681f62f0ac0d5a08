"""
Loading and saving configuration files through the codec registry.

The format of a file is taken from its suffix unless given explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from confmux.codecs import registry
from confmux.errors import UnsupportedFormatError
from confmux.infra.paths import USER_CONFIG_DIR
from confmux.store import ConfigStore

logger = logging.getLogger(__name__)

_DOTENV_NAMES = {".env"}


def format_from_path(path: str | Path) -> str:
    """
    Determine the registered format name for a file.

    ``settings.yml`` gives ``yml`` and ``prod.env`` gives ``env``. A file
    named ``.env`` (no suffix of its own) gives ``dotenv``.

    Args:
        path: File path to inspect.

    Returns:
        A format name known to the codec registry.

    Raises:
        UnsupportedFormatError: If the suffix is missing or not registered.
    """
    p = Path(path)
    if p.name.lower() in _DOTENV_NAMES:
        return "dotenv"

    fmt = p.suffix.lower().lstrip(".")
    if not fmt or fmt not in registry:
        raise UnsupportedFormatError(f"Unsupported config file extension: {p.suffix!r}")
    return fmt


def resolve_config_file(
    user_path: str | Path | None,
    stems: Iterable[str],
    search_dirs: Iterable[Path] | None = None,
) -> Path | None:
    """
    Resolve the config file to use based on a prioritized lookup order.

    Lookup order:
        1. User-specified path (if provided and exists)
        2. ``<stem>.<format>`` in the current working directory, for each stem
           and each registered format name
        3. The same candidates inside the user config directory

    Args:
        user_path: Optional file path explicitly provided by the user.
        stems: File name stems to try, e.g. ``["settings"]``.
        search_dirs: Directories to search instead of cwd and the user
            config directory.

    Returns:
        A resolved ``Path`` if found, otherwise None.
    """
    if user_path:
        path = Path(user_path).expanduser().resolve()
        if path.is_file():
            return path
        logger.warning("Specified file not found: %s", path)

    dirs = list(search_dirs) if search_dirs is not None else [Path.cwd(), USER_CONFIG_DIR]
    names = registry.names()
    for directory in dirs:
        for stem in stems:
            for fmt in names:
                candidate = (directory / f"{stem}.{fmt}").resolve()
                if candidate.is_file():
                    logger.debug("Using config file: %s", candidate)
                    return candidate
    return None


def load_file(
    path: str | Path,
    fmt: str | None = None,
    store: ConfigStore | None = None,
) -> ConfigStore:
    """
    Load a configuration file into a store.

    Args:
        path: Path to the configuration file.
        fmt: Format name; detected from the suffix when omitted.
        store: Store to load into. A new one named after the file stem is
            created when omitted.

    Returns:
        The populated store.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnsupportedFormatError: If the format is unknown.
        DecodeError: If the file cannot be parsed.
    """
    source = Path(path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"Config file not found: {source}")

    fmt = fmt or format_from_path(source)
    if store is None:
        store = ConfigStore(name=source.stem, conf_type=fmt)

    logger.debug("Loading %s configuration from: %s", fmt, source)
    with source.open("rb") as f:
        store.load(f, fmt)
    return store


def save_file(
    store: ConfigStore,
    path: str | Path,
    fmt: str | None = None,
) -> None:
    """
    Write a store to disk.

    The file is written in place; a failed encode can leave it truncated.

    Args:
        store: Store to serialize.
        path: Destination path. Parent directories are created.
        fmt: Format name; detected from the suffix when omitted.

    Raises:
        UnsupportedFormatError: If the format is unknown.
        EncodeError: If serialization or writing fails.
    """
    output = Path(path).expanduser().resolve()
    fmt = fmt or format_from_path(output)
    registry.get(fmt)
    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        with output.open("wb") as f:
            store.dump(f, fmt)
    except Exception as e:
        logger.error("Failed to write %s config '%s': %s", fmt, output, e)
        raise

    logger.info("Configuration saved as %s: %s", fmt, output)
