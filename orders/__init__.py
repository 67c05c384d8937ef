"""Order records, intake pipeline and update notifications."""
