"""Pluggy hook specifications for handlerdoc collaborators.

Domain classification is delegated to plugins so projects can map their
own namespace conventions onto business domains.
"""

from __future__ import annotations

import pluggy

PROJECT_NAME = "handlerdoc"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class HandlerdocHookSpec:
    """Hook specifications for the handlerdoc plugin system."""

    @hookspec(firstresult=True)
    def parse_domain(self, command_class: str) -> str | None:
        """Return the business domain owning *command_class*, or None to pass."""
