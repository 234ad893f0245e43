"""Abstract base class for subtitle options sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.options import AcquisitionOptions


class IOptionsProvider(ABC):
    @abstractmethod
    def get_acquisition_options(self) -> AcquisitionOptions:
        """Return the current subtitle options snapshot.

        Raises
        ------
        ConfigurationError
            If the stored options are invalid.
        """
