"""Runtime package for the room reservation engine."""
