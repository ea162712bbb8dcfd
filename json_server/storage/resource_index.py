from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from json_server.domain.errors import ResourceIndexError
from json_server.domain.models import ResourceIndex

logger = logging.getLogger(__name__)

RESOURCE_SUFFIX = ".json"


def resource_name_for(path: Path) -> Optional[str]:
    """
    Return the resource name for ``path``, or None if it is not a resource file.

    Only the exact, lowercase ``.json`` suffix qualifies. A bare ``.json``
    dotfile has no suffix and is ignored.
    """
    if path.suffix != RESOURCE_SUFFIX:
        return None
    return path.name[: -len(RESOURCE_SUFFIX)]


def build_index(directory: Path) -> ResourceIndex:
    """
    Enumerate the direct children of ``directory`` into a ResourceIndex.

    Subdirectories are skipped without being descended into. Names keep the
    directory enumeration order. An empty result is not an error; deciding
    whether to serve an empty index is left to the caller.

    Raises ResourceIndexError if the directory cannot be listed, an entry
    cannot be stat'd, or a filename is not valid UTF-8.
    """
    names: List[str] = []

    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise ResourceIndexError(f"Failed to read directory: {directory}: {e}") from e

    for entry in entries:
        try:
            entry.name.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ResourceIndexError(f"Invalid filename encoding in {directory}: {entry.name!r}") from e

        try:
            if entry.is_symlink() and not entry.exists():
                raise ResourceIndexError(f"Failed to stat directory entry: {entry}: dangling symlink")
            if not entry.is_file():
                continue
        except OSError as e:
            raise ResourceIndexError(f"Failed to stat directory entry: {entry}: {e}") from e

        name = resource_name_for(entry)
        if name is None:
            continue

        logger.debug("Indexed resource %r from %s", name, entry)
        names.append(name)

    logger.info("Indexed %d resource(s) in %s", len(names), directory)
    return ResourceIndex(names=tuple(names))
