"""Reading ROM images from disk."""

import logging
import os
import stat
from pathlib import Path
from typing import Union

from .constants import MAX_ROM_SIZE
from .errors import RomNotFound, RomTooLarge, RomUnreadable

logger = logging.getLogger(__name__)

ROM_SUFFIXES = (".ch8", ".c8")


def read_rom(path: Union[str, os.PathLike]) -> bytes:
    """Load ROM from file"""
    path = Path(path)
    try:
        st = path.stat()
        if not stat.S_ISREG(st.st_mode):
            raise RomNotFound(f"ROM file {path} is not a regular file", str(path))
        if st.st_size > MAX_ROM_SIZE:
            raise RomTooLarge(st.st_size, MAX_ROM_SIZE, str(path))
        with open(path, 'rb') as f:
            data = f.read()
    except (FileNotFoundError, NotADirectoryError) as e:
        raise RomNotFound(f"ROM file {path} is invalid or does not exist", str(path)) from e
    except OSError as e:
        raise RomUnreadable(f"Could not read ROM file {path}: {e}", str(path)) from e

    # the file may have grown since stat()
    if len(data) > MAX_ROM_SIZE:
        raise RomTooLarge(len(data), MAX_ROM_SIZE, str(path))

    if path.suffix.lower() not in ROM_SUFFIXES:
        logger.info("%s has no .ch8/.c8 suffix, loading anyway", path.name)
    logger.debug("Read %d bytes from %s", len(data), path)
    return data
