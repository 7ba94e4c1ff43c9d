"""Key resolver interface for the Security domain."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyResolver(ABC):
    """Looks up the raw key string registered for a key version."""

    @abstractmethod
    def resolve_key(self, version: int = 1) -> Optional[str]:
        """
        Return the raw key string for ``version``.

        Parameters
        ----------
        version
            Positive key version

        Returns
        -------
        The configured secret, unvalidated, or None when no key is configured
        for this version and no unversioned fallback exists.
        """
