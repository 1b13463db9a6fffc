"""timepie - 24-hour pie dial for calendar events."""
