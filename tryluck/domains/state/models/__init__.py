from tryluck.domains.state.models.streak_models import CompletionHistory, UserStreak  # noqa: F401
