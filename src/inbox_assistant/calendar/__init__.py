"""Calendar scheduling. Use ``from inbox_assistant.calendar.client import CalendarClient``."""
