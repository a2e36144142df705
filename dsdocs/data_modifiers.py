"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Data modifier plugins.

A data modifier tells the docs generator that an entity must be protected,
in which case distribution-level documentation is suppressed. Modifiers are
registered explicitly or discovered through the ``dsdocs.data_modifiers``
entry-point group of installed packages.
"""

import logging
from abc import ABC, abstractmethod
from importlib import metadata
from typing import Iterable, List, Optional

logger = logging.getLogger("dsdocs.data_modifiers")

ENTRY_POINT_GROUP = "dsdocs.data_modifiers"


class DataModifier(ABC):
    """Interface for plugins that can require modification of an entity's data."""

    @abstractmethod
    def requires_modification(self, entity_type: str, identifier: str) -> bool:
        """Return True if data for the given entity must be modified or hidden."""


class DataModifierManager:
    """Ordered collection of data modifiers queried short-circuit on True."""

    def __init__(self, modifiers: Optional[Iterable[DataModifier]] = None):
        self._modifiers: List[DataModifier] = []
        for modifier in modifiers or []:
            self.register(modifier)

    @property
    def modifiers(self) -> List[DataModifier]:
        return list(self._modifiers)

    def __len__(self) -> int:
        return len(self._modifiers)

    def register(self, modifier: DataModifier) -> None:
        """Append a modifier; registration order is query order."""
        if not isinstance(modifier, DataModifier):
            raise TypeError(f"{modifier!r} is not a DataModifier")
        self._modifiers.append(modifier)
        logger.debug(f"Registered data modifier {type(modifier).__name__}")

    def discover(self, group: str = ENTRY_POINT_GROUP) -> List[DataModifier]:
        """Load and register modifiers advertised by installed packages.

        Each entry point must resolve to a DataModifier subclass or to a
        zero-argument callable returning a DataModifier instance.

        Returns:
            The newly registered modifiers, in entry-point order
        """
        discovered = []
        for entry_point in metadata.entry_points(group=group):
            target = entry_point.load()
            modifier = target()
            self.register(modifier)
            discovered.append(modifier)
            logger.info(f"Discovered data modifier {entry_point.name}")
        return discovered

    def requires_modification(self, entity_type: str, identifier: str) -> bool:
        """Ask each modifier in turn; True as soon as one of them says so."""
        for modifier in self._modifiers:
            if modifier.requires_modification(entity_type, identifier):
                logger.info(
                    f"{type(modifier).__name__} requires modification of {entity_type} {identifier}"
                )
                return True
        return False
