"""Source loading for the CLI.

Python strings carry their own length, so no end-of-input sentinel is
appended: the end of the string is the end of input for the lexer. Files
are read in text mode, so CRLF and CR line endings arrive as ``\\n``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from seed.errors import SourceNotFoundError, SourceReadError

logger = logging.getLogger(__name__)


def read_source(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a whole source file into memory.

    Raises:
        SourceNotFoundError: If ``path`` does not exist.
        SourceReadError: If it exists but cannot be read or decoded.
    """
    path = Path(path)
    if not path.exists():
        raise SourceNotFoundError(str(path))

    try:
        source = path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise SourceReadError(str(path), f"not valid {encoding}: {exc.reason}") from exc
    except OSError as exc:
        raise SourceReadError(str(path), exc.strerror or str(exc)) from exc

    logger.debug("Loaded %s (%d characters)", path, len(source))
    return source
