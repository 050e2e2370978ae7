from __future__ import annotations

import os
import stat

from loguru import logger


def make_directories(path: str, mode: int = 0o777) -> None:
    """Create `path` and any missing parents.

    An existing directory is accepted as is.

    Raises:
        FileExistsError: `path` exists and is not a directory.
        OSError: A component could not be created.
    """
    try:
        st = os.stat(path)
    except FileNotFoundError:
        pass
    else:
        if stat.S_ISDIR(st.st_mode):
            return
        raise FileExistsError(f"Path exists and is not a directory: {path}")

    os.makedirs(path, mode, exist_ok=True)
    logger.info("Created directory {}", path)
