"""Room reservation allocation engine."""
