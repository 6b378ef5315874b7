# -*- coding: utf-8 -*-
# backend/store.py
#
# Unico proprietario della rappresentazione persistente del documento daily.
# Interfaccia: load() -> DailyState, save(state) (sempre il documento intero).
#
# Nessun lock: due richieste concorrenti che leggono prima di scrivere
# perdono l'aggiornamento della prima (lost update). Accettato per la
# frequenza "umana" delle modifiche; un solo processo scrittore.

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from backend.models import DailyDocument, DailyState, db

logger = logging.getLogger(__name__)


def dumps(state: DailyState) -> str:
    return json.dumps(state.to_dict(), ensure_ascii=False, indent=2)


class DailyStore(ABC):
    """Interfaccia dello store: documento intero in lettura e in scrittura."""

    @abstractmethod
    def load(self) -> DailyState:
        """Documento corrente; se manca viene creato con i default."""

    @abstractmethod
    def save(self, state: DailyState) -> None:
        """Riscrive il documento intero."""


class MemoryStore(DailyStore):
    """Store in memoria (test / sviluppo). Conserva il JSON serializzato."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.raw: Optional[str] = json.dumps(initial, ensure_ascii=False) if initial is not None else None
        self.writes = 0

    def load(self) -> DailyState:
        if self.raw is None:
            state = DailyState()
            self.save(state)
            return state
        try:
            return DailyState.from_dict(json.loads(self.raw))
        except ValueError:
            logger.warning("daily document in memory is malformed, using defaults")
            return DailyState()

    def save(self, state: DailyState) -> None:
        self.raw = dumps(state)
        self.writes += 1


class JsonFileStore(DailyStore):
    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def _create_default(self) -> DailyState:
        state = DailyState()
        try:
            self.save(state)
            logger.info("daily document %s not found, created with defaults", self.path)
        except OSError as exc:
            logger.warning("daily document %s not found and not writable (%s), using defaults", self.path, exc)
        return state

    def load(self) -> DailyState:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return self._create_default()
        except ValueError as exc:
            # byte non UTF-8: file corrotto, come il JSON malformato
            logger.warning("daily document %s is malformed (%s), using defaults", self.path, exc)
            return DailyState()
        except OSError as exc:
            logger.warning("daily document %s unreadable (%s), using defaults", self.path, exc)
            return DailyState()
        try:
            return DailyState.from_dict(json.loads(raw))
        except ValueError as exc:
            logger.warning("daily document %s is malformed (%s), using defaults", self.path, exc)
            return DailyState()

    def save(self, state: DailyState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(dumps(state), encoding="utf-8")
            os.replace(tmp, self.path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise


class SqlStore(DailyStore):
    """Documento salvato in una sola riga della tabella daily_document."""

    ROW_ID = 1

    def load(self) -> DailyState:
        row = db.session.get(DailyDocument, self.ROW_ID)
        if row is None:
            state = DailyState()
            self.save(state)
            logger.info("daily_document row not found, created with defaults")
            return state
        try:
            return DailyState.from_dict(json.loads(row.payload))
        except ValueError as exc:
            logger.warning("daily_document row is malformed (%s), using defaults", exc)
            return DailyState()

    def save(self, state: DailyState) -> None:
        row = db.session.get(DailyDocument, self.ROW_ID)
        if row is None:
            row = DailyDocument(id=self.ROW_ID, payload="{}")
            db.session.add(row)
        row.payload = dumps(state)
        row.updated_at = datetime.now(timezone.utc).replace(tzinfo=None)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
