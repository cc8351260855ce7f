"""Backup export and validated import."""

import json
from datetime import date
from typing import Optional

import structlog

from pocketbook.domain import actions
from pocketbook.domain.documents import state_to_document
from pocketbook.domain.entities import AppState
from pocketbook.domain.errors import ImportFormatError
from pocketbook.domain.migration import normalize_document
from pocketbook.domain.store import AppStore

logger = structlog.get_logger(__name__)


def export_json(state: AppState) -> str:
    """Serialize the whole state as a human-readable JSON document."""
    return json.dumps(state_to_document(state), indent=2, ensure_ascii=False)


def backup_filename(today: Optional[date] = None) -> str:
    """Return the default file name for a backup taken on ``today``."""
    return f"pocketbook-backup-{(today or date.today()).isoformat()}.json"


def parse_backup(text: str) -> AppState:
    """Parse and normalize a backup document.

    A backup must be a JSON object with a ``transactions`` array; anything
    else is rejected before it can reach the state.

    Raises:
        ImportFormatError: If the text is not a valid backup
    """
    try:
        document = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        raise ImportFormatError(f"Backup is not valid JSON: {e}")

    if not isinstance(document, dict) or not isinstance(document.get("transactions"), list):
        raise ImportFormatError("Invalid backup format: missing 'transactions' list")

    try:
        return normalize_document(document)
    except (ValueError, RecursionError) as e:
        raise ImportFormatError(f"Invalid backup format: {e}")


class BackupService:
    """Service for exporting and restoring the full state."""

    def __init__(self, store: AppStore):
        self.store = store

    def export_data(self) -> str:
        """Return the current state as backup JSON."""
        return export_json(self.store.state)

    def import_data(self, text: str) -> bool:
        """Replace the state with the contents of a backup.

        Returns:
            True if the backup was applied, False if it was rejected (the
            state is left untouched in that case)
        """
        try:
            state = parse_backup(text)
        except ImportFormatError as e:
            logger.warning("backup_import_rejected", reason=str(e))
            return False

        self.store.dispatch(actions.load_data(state))
        logger.info(
            "backup_imported",
            transactions=len(state.transactions),
            accounts=len(state.accounts),
        )
        return True
