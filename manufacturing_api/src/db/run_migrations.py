"""
Programmatic Alembic migration runner.

Runs migrations without an alembic.ini by pointing Alembic at the migrations
directory beside this file and at the URL resolved by src.db.config.

Usage examples:
    python -m src.db.run_migrations upgrade head
    python -m src.db.run_migrations downgrade base
    python -m src.db.run_migrations current
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List

from alembic import command
from alembic.config import Config

from src.db.config import get_settings

logger = logging.getLogger(__name__)

_DEFAULT_TARGETS: Dict[str, List[str]] = {
    "upgrade": ["head"],
    "downgrade": ["-1"],
}

_COMMANDS: Dict[str, Callable[..., None]] = {
    "upgrade": command.upgrade,
    "downgrade": command.downgrade,
    "history": command.history,
    "current": command.current,
    "heads": command.heads,
    "show": command.show,
    "stamp": command.stamp,
}


# PUBLIC_INTERFACE
def build_config() -> Config:
    """Alembic Config bound to this package's migrations and the configured database."""
    cfg = Config()
    cfg.set_main_option("script_location", str(Path(__file__).resolve().parent / "migrations"))
    # env.py connects with the async URL; this one serves offline (--sql) runs.
    cfg.set_main_option("sqlalchemy.url", get_settings().sync_database_url)
    return cfg


# PUBLIC_INTERFACE
def main(argv: List[str] | None = None) -> None:
    """Run an Alembic command, e.g. main(["upgrade", "head"])."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        raise SystemExit("No Alembic arguments provided. Example: upgrade head")

    cmd, other = args[0], args[1:]
    handler = _COMMANDS.get(cmd)
    if handler is None:
        raise SystemExit(f"Unsupported Alembic command: {cmd}. Use one of: {', '.join(_COMMANDS)}")
    if cmd in ("show", "stamp") and not other:
        raise SystemExit(f"Usage: {cmd} <revision>")

    logger.info("alembic %s %s", cmd, " ".join(other))
    handler(build_config(), *(other or _DEFAULT_TARGETS.get(cmd, [])))


if __name__ == "__main__":
    main()
