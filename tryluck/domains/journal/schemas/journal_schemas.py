"""Journal schemas, one family per kind."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import AliasChoices, Field

from tryluck.core.utils.serialization import CamelModel, LenientDay, LenientModel

BeliefType = Literal["empowering", "limiting"]


def _entry_date_field():
    return Field(default=None, validation_alias=AliasChoices("date", "entryDate", "entry_date"))


# --- Create payloads (HTTP) ---


class JournalCreateBase(CamelModel):
    entry_date: Optional[date] = _entry_date_field()


class LuckCreate(JournalCreateBase):
    event1: str = ""
    event2: str = ""
    event3: str = ""


class GratitudeCreate(JournalCreateBase):
    item1: str = ""
    item2: str = ""
    item3: str = ""


class DecisionCreate(JournalCreateBase):
    decision: str = Field(min_length=1)
    logic: str = ""
    expectation: str = ""
    emotional_state: str = ""


class WoopCreate(JournalCreateBase):
    wish: str = Field(min_length=1)
    outcome: str = ""
    obstacle: str = ""
    plan: str = ""


class ProphecyCreate(JournalCreateBase):
    prophecy: str = Field(min_length=1)
    reasoning: str = ""
    steps: str = ""


class BeliefCreate(JournalCreateBase):
    belief: str = Field(min_length=1)
    origin: str = ""
    impact: str = ""
    belief_type: BeliefType = "empowering"


# --- Snapshot import payloads (client-authored, lenient) ---


class JournalImportBase(LenientModel):
    entry_date: LenientDay = _entry_date_field()


class LuckImport(JournalImportBase):
    event1: str = ""
    event2: str = ""
    event3: str = ""


class GratitudeImport(JournalImportBase):
    item1: str = ""
    item2: str = ""
    item3: str = ""


class DecisionImport(JournalImportBase):
    decision: str = ""
    logic: str = ""
    expectation: str = ""
    emotional_state: str = ""


class WoopImport(JournalImportBase):
    wish: str = ""
    outcome: str = ""
    obstacle: str = ""
    plan: str = ""


class ProphecyImport(JournalImportBase):
    prophecy: str = ""
    reasoning: str = ""
    steps: str = ""


class BeliefImport(JournalImportBase):
    belief: str = ""
    origin: str = ""
    impact: str = ""
    belief_type: BeliefType = "empowering"


# --- Responses ---


class JournalResponseBase(CamelModel):
    id: int
    user_id: int
    entry_date: date
    created_at: Optional[datetime] = None


class LuckResponse(JournalResponseBase):
    event1: str
    event2: str
    event3: str


class GratitudeResponse(JournalResponseBase):
    item1: str
    item2: str
    item3: str


class DecisionResponse(JournalResponseBase):
    decision: str
    logic: str
    expectation: str
    emotional_state: str


class WoopResponse(JournalResponseBase):
    wish: str
    outcome: str
    obstacle: str
    plan: str


class ProphecyResponse(JournalResponseBase):
    prophecy: str
    reasoning: str
    steps: str


class BeliefResponse(JournalResponseBase):
    belief: str
    origin: str
    impact: str
    belief_type: str
