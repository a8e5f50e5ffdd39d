from tryluck.domains.habits.models.habit_models import (  # noqa: F401
    CustomTemplate,
    Habit,
    HabitChecklistItem,
    HabitCompletion,
    HabitLogEntry,
)
