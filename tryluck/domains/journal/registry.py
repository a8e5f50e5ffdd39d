"""Dispatch table from journal type tag to its table and schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Type

from tryluck.core.utils.serialization import CamelModel, LenientModel
from tryluck.domains.journal.models import (
    BeliefEntry,
    DecisionEntry,
    GratitudeEntry,
    LuckEntry,
    ProphecyEntry,
    WoopEntry,
)
from tryluck.domains.journal.schemas.journal_schemas import (
    BeliefCreate,
    BeliefImport,
    BeliefResponse,
    DecisionCreate,
    DecisionImport,
    DecisionResponse,
    GratitudeCreate,
    GratitudeImport,
    GratitudeResponse,
    LuckCreate,
    LuckImport,
    LuckResponse,
    ProphecyCreate,
    ProphecyImport,
    ProphecyResponse,
    WoopCreate,
    WoopImport,
    WoopResponse,
)
from tryluck.extensions import db


@dataclass(frozen=True)
class JournalKind:
    tag: str
    model: Type[db.Model]
    create_schema: Type[CamelModel]
    import_schema: Type[LenientModel]
    response_schema: Type[CamelModel]
    snapshot_key: str


JOURNAL_KINDS: Dict[str, JournalKind] = {
    kind.tag: kind
    for kind in (
        JournalKind("luck", LuckEntry, LuckCreate, LuckImport, LuckResponse, "luckEntries"),
        JournalKind(
            "gratitude",
            GratitudeEntry,
            GratitudeCreate,
            GratitudeImport,
            GratitudeResponse,
            "gratitudeEntries",
        ),
        JournalKind(
            "decisions",
            DecisionEntry,
            DecisionCreate,
            DecisionImport,
            DecisionResponse,
            "decisionEntries",
        ),
        JournalKind("woop", WoopEntry, WoopCreate, WoopImport, WoopResponse, "woopEntries"),
        JournalKind(
            "prophecy",
            ProphecyEntry,
            ProphecyCreate,
            ProphecyImport,
            ProphecyResponse,
            "prophecyEntries",
        ),
        JournalKind(
            "beliefs", BeliefEntry, BeliefCreate, BeliefImport, BeliefResponse, "beliefEntries"
        ),
    )
}

JOURNAL_TYPES = tuple(JOURNAL_KINDS)


def get_kind(tag: str) -> Optional[JournalKind]:
    return JOURNAL_KINDS.get((tag or "").strip().lower())
