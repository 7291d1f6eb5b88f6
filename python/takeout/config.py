"""Configuration management for Takeout."""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from takeout.errors import SetupError

logger = logging.getLogger(__name__)

ENV_ARCHIVE = "TAKEOUT_ARCHIVE"
ENV_OUTPUT_DIR = "TAKEOUT_OUTPUT_DIR"
ENV_WORK_DIR = "TAKEOUT_WORK_DIR"

DEFAULT_ARCHIVE = Path("Downloads") / "takeout.zip"
DEFAULT_OUTPUT_DIR = Path("Music") / "takeout"
WORK_SUBDIR = "tmp"


def eprint(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)


@dataclass(frozen=True)
class TakeoutConfig:
    """Paths resolved once at startup."""
    archive_path: Path
    output_dir: Path
    work_dir: Path


def load_config(env_file: Optional[str] = None) -> dict:
    """
    Load configuration from .env file.

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Dictionary of configuration values (None where unset).
    """
    if env_file is None:
        env_file = ".env"

    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        eprint(f"Loaded environment from {env_path.resolve()}")
    else:
        eprint(
            f"Warning: .env file not found at {env_path.resolve()} "
            "- falling back to process env."
        )

    return {
        "archive": os.getenv(ENV_ARCHIVE),
        "output_dir": os.getenv(ENV_OUTPUT_DIR),
        "work_dir": os.getenv(ENV_WORK_DIR),
    }


def _home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise SetupError(f"Failed to determine home directory. {e}") from e


def _pick(cli_value: Optional[str], env: Mapping[str, Optional[str]],
          key: str) -> Optional[Path]:
    """Return the CLI value, else the env value, as an expanded path."""
    value = cli_value or env.get(key)
    if not value:
        return None
    return Path(value).expanduser()


def resolve_config(archive: Optional[str] = None,
                   output_dir: Optional[str] = None,
                   work_dir: Optional[str] = None,
                   env: Optional[Mapping[str, Optional[str]]] = None) -> TakeoutConfig:
    """
    Resolve the archive, output and work paths.

    Precedence is CLI value, then environment value, then a default
    under the home directory. The work directory defaults to a
    subdirectory of the output directory.

    Raises:
        SetupError: If a default is needed and the home directory is unknown.
    """
    env = env or {}

    archive_path = _pick(archive, env, "archive")
    output_path = _pick(output_dir, env, "output_dir")

    if archive_path is None or output_path is None:
        home = _home_dir()
        if archive_path is None:
            archive_path = home / DEFAULT_ARCHIVE
        if output_path is None:
            output_path = home / DEFAULT_OUTPUT_DIR

    work_path = _pick(work_dir, env, "work_dir") or output_path / WORK_SUBDIR

    return TakeoutConfig(
        archive_path=archive_path,
        output_dir=output_path,
        work_dir=work_path,
    )


def ensure_directories(config: TakeoutConfig) -> None:
    """
    Create the output and work directories if they don't exist.

    Raises:
        SetupError: If a path exists but is not a directory, or cannot be created.
    """
    for directory in (config.output_dir, config.work_dir):
        if directory.is_dir():
            continue
        if directory.exists():
            raise SetupError(f"Not a directory: {directory}")
        logger.info(f"Creating directory: {directory}")
        try:
            directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            raise SetupError(f"Failed to create directory {directory}: {e}") from e
