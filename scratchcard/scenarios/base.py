from __future__ import annotations

import abc
import logging
from typing import Optional

from ..parser import parse_scenario

logger = logging.getLogger("scratchcard.scenarios")


class ScenarioSource(abc.ABC):
    """Supplies scenario descriptors, honouring a one-shot developer override."""

    def __init__(self) -> None:
        self._override: Optional[str] = None

    @property
    def pending_override(self) -> Optional[str]:
        return self._override

    def force(self, descriptor: str) -> None:
        """Queue ``descriptor`` for the next draw only.

        The descriptor is parsed immediately so that tooling gets a
        ``MalformedScenario`` now rather than a declined purchase later.
        """
        parse_scenario(descriptor)
        logger.info("Scenario override queued: %s", descriptor)
        self._override = descriptor

    def clear_override(self) -> None:
        self._override = None

    def next(self) -> str:
        if self._override is not None:
            descriptor, self._override = self._override, None
            logger.debug("Using forced scenario %s", descriptor)
            return descriptor
        return self._draw()

    @abc.abstractmethod
    def _draw(self) -> str:
        """Return a descriptor when no override is pending."""
