"""Fails while importing, like a module reading settings that were never set."""

raise RuntimeError("settings are not configured")
