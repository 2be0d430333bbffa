"""Payment notification opt-out API."""
