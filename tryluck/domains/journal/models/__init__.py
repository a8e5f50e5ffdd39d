from tryluck.domains.journal.models.journal_entries import (  # noqa: F401
    BeliefEntry,
    DecisionEntry,
    GratitudeEntry,
    LuckEntry,
    ProphecyEntry,
    WoopEntry,
)
