"""Washington State Legislature source placeholder.

Registered so the name resolves, but no capability is implemented yet; every
fetch raises ``SourceNotSupportedError``.
"""

from legislature_api.lib.sources.base import BaseSource


class WashingtonLegislatureSource(BaseSource):
    """Washington source with no implemented capabilities."""

    @property
    def source_name(self) -> str:
        return "washington"

    @property
    def state(self) -> str:
        return "WA"
