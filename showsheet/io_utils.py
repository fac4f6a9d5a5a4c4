"""General I/O utilities for JSON output files and backups.

This module centralizes filesystem I/O helpers so the cache and the build
script can share them without pulling in parsing logic.
"""
from pathlib import Path
from datetime import datetime
import json
import logging
from typing import Any


def create_backup(path: Path) -> Path:
    """Create a timestamped backup of an existing file and return the backup path."""
    p = Path(path)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_name = f"{p.stem}_backup_{timestamp}{p.suffix}"
    backup_path = p.parent / backup_name
    backup_path.write_text(p.read_text(encoding='utf-8'), encoding='utf-8')
    logging.info(f"Created backup: {backup_path}")
    return backup_path


def write_json(path: Path, data: Any, make_backup: bool = False) -> None:
    """Write `data` as indented UTF-8 JSON, fully replacing any existing file.

    The document is written to a sibling temp file first and then renamed
    over the destination, so readers never see a half-written file on
    filesystems with atomic rename.
    """
    p = Path(path)
    if make_backup and p.exists():
        create_backup(p)
    if p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + '.tmp')
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False) + '\n', encoding='utf-8')
    tmp.replace(p)


def read_json(path: Path) -> Any:
    """Read a JSON file written by `write_json`."""
    return json.loads(Path(path).read_text(encoding='utf-8'))
