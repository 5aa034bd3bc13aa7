"""openclaw-docker command line."""
