"""Kalender-Engine: Wochenzyklus, Materialisierung, Aggregation und Layout."""
