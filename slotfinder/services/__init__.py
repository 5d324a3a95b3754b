"""
Service layer helpers that orchestrate configuration and domain logic.
"""

from .slot_finder import SlotFinderService, slots, slots_as_dicts

__all__ = ["SlotFinderService", "slots", "slots_as_dicts"]
