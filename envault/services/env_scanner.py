"""Pure helpers for discovering and parsing env files on disk.

Nothing here touches the database; callers pass in the project path and the
currently active environment name.
"""

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import FilesystemError, ValidationError
from ..schemas.env_file import EnvFile, EnvLine

ENV_PREFIX = ".env"
ENV_FILE = ".env"
BACKUP_FILE = ".env.backup"

MODIFIED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"

_VARIABLE_PATTERN = re.compile(r"^([^=]+)=(.*)$")

logger = logging.getLogger(__name__)


def validate_env_name(env_name: str, require_env_prefix: bool = False) -> str:
    """Reject names that could escape the project root.

    With *require_env_prefix*, names not starting with ``.env`` are rejected too.
    """
    if not env_name or env_name in (".", ".."):
        raise ValidationError(
            f"Invalid environment file name: {env_name!r}", field="env_name"
        )
    if require_env_prefix and not env_name.startswith(ENV_PREFIX):
        raise ValidationError(
            f"Not an env file: {env_name!r}", field="env_name"
        )
    if "/" in env_name or "\\" in env_name or os.sep in env_name:
        raise ValidationError(
            f"Environment file name must not contain path separators: {env_name!r}",
            field="env_name",
        )
    return env_name


def format_modified_time(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(MODIFIED_AT_FORMAT)


def _sort_key(env_file: EnvFile) -> tuple:
    # .env first, everything else by name
    return (env_file.name != ENV_FILE, env_file.name)


def scan_env_files(
    project_path: Union[str, Path], active_env: Optional[str] = None
) -> List[EnvFile]:
    """List every ``.env*`` entry directly inside *project_path*.

    Args:
        project_path: Directory to scan.
        active_env: Name of the active environment; the entry whose name is
            exactly equal gets ``is_active=True``.

    Returns:
        EnvFile records, ``.env`` first and the rest sorted by name.

    Raises:
        FilesystemError: If the path is missing, not a directory, or unreadable.
    """
    root = Path(project_path)
    if not root.is_dir():
        raise FilesystemError(f"Invalid project path: {project_path}", path=str(project_path))

    root = root.absolute()
    env_files: List[EnvFile] = []

    try:
        with os.scandir(root) as entries:
            for entry in entries:
                if not entry.name.startswith(ENV_PREFIX):
                    continue

                try:
                    modified_at = format_modified_time(entry.stat().st_mtime)
                except OSError:
                    modified_at = None

                env_files.append(EnvFile(
                    name=entry.name,
                    path=str(root / entry.name),
                    is_active=active_env is not None and entry.name == active_env,
                    modified_at=modified_at,
                ))
    except OSError as e:
        logger.warning(f"Cannot read project directory {root}: {e}")
        raise FilesystemError(f"Cannot read project directory {root}: {e}", path=str(root)) from e

    env_files.sort(key=_sort_key)
    return env_files


def parse_env_content(content: str) -> List[EnvLine]:
    """Classify each line as empty, comment, ``KEY=value`` variable, or invalid."""
    lines: List[EnvLine] = []
    for raw in content.split("\n"):
        raw = raw.rstrip("\r")
        stripped = raw.strip()

        if not stripped:
            lines.append(EnvLine(type="empty", raw=raw))
        elif stripped.startswith("#"):
            lines.append(EnvLine(type="comment", raw=raw))
        else:
            match = _VARIABLE_PATTERN.match(raw)
            if match:
                lines.append(EnvLine(
                    type="variable", raw=raw, key=match.group(1), value=match.group(2)
                ))
            else:
                lines.append(EnvLine(type="invalid", raw=raw))
    return lines
