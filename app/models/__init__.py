from .habit import Frequency, Habit, HabitCategory, HabitLog, LAST_DAY_TOKEN, WEEKDAY_TOKENS
from .mapping import habit_from_row, habit_to_row, log_from_row

__all__ = [
    "Frequency",
    "Habit",
    "HabitCategory",
    "HabitLog",
    "LAST_DAY_TOKEN",
    "WEEKDAY_TOKENS",
    "habit_from_row",
    "habit_to_row",
    "log_from_row",
]
