from __future__ import annotations

from typing import Protocol, Sequence

from .model import GeofenceLocation


class GeofenceRepository(Protocol):
    def list_active(self) -> Sequence[GeofenceLocation]:
        """Active locations in storage order."""
        raise NotImplementedError
