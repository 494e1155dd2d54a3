"""
Timetable Repository Interface

Interface for loading and storing timetables.
"""

from abc import ABC, abstractmethod

from ..models.timetable import Timetable


class TimetableLoadError(Exception):
    """Exception raised when a timetable cannot be read."""

    pass


class ITimetableRepository(ABC):
    """Interface for timetable repository operations."""

    @abstractmethod
    def load_timetable(self) -> Timetable:
        """
        Load the timetable from the data source.

        Returns:
            Timetable object

        Raises:
            TimetableLoadError: If the data source is missing or unreadable
        """
        pass

    @abstractmethod
    def save_timetable(self, timetable: Timetable) -> bool:
        """
        Save a timetable to the data source.

        Args:
            timetable: Timetable to store

        Returns:
            True if saved successfully, False otherwise
        """
        pass
