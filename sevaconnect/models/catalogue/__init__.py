"""Global catalogue and per-society offering models."""
