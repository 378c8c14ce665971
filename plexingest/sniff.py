"""Content-type sniffing from file headers."""
from pathlib import Path

import magic

# Bytes read from the start of a file for type detection
HEADER_SIZE = 8192


def read_header(path: Path) -> bytes:
    """Read the first HEADER_SIZE bytes of a file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, 'rb') as f:
        return f.read(HEADER_SIZE)


def is_video(header: bytes) -> bool:
    """Check whether a file header belongs to a video container."""
    if not header:
        return False
    return magic.from_buffer(header, mime=True).startswith("video/")


def is_video_file(path: Path) -> bool:
    """Sniff a file on disk; OSError propagates to the caller."""
    return is_video(read_header(path))
