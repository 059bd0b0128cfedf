"""
Repository Interfaces (Ports) for progression analytics.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ProgressionRepository

    class ProgressionService:
        def __init__(self, progression_repo: ProgressionRepository):
            self._progression_repo = progression_repo
"""

from application.ports.progression_repository import ProgressionRepository

__all__ = [
    "ProgressionRepository",
]
