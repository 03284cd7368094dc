"""Infrastructure layer: persistence, security, realtime and file storage."""
