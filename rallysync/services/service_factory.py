"""
Service Factory for dependency injection.

This module provides a factory for creating properly configured service
instances with their dependencies injected.
"""
from typing import Optional

from ..models import ScheduleSettings
from ..utils import DEFAULT_SETUP_FILE
from .persistence_service import JsonKeyValueStore, PersistenceService
from .setup_service import SetupService
from .schedule_service import ScheduleBuilder
from .verification_service import VerificationService
from .message_service import MessageService
from .planner_service import PlannerService
from .reinforcement_service import ReinforcementService


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    Persistence, scheduling and verification services are shared singletons
    per factory.
    """

    def __init__(self, setup_path: str = DEFAULT_SETUP_FILE, settings: Optional[ScheduleSettings] = None):
        """
        Initialize factory.

        Args:
            setup_path: JSON file holding the setup snapshot
            settings: Timing settings for the schedule builder
        """
        self.setup_path = setup_path
        self.settings = settings or ScheduleSettings()
        self._persistence_service: Optional[PersistenceService] = None
        self._schedule_builder: Optional[ScheduleBuilder] = None
        self._verification_service: Optional[VerificationService] = None

    def create_setup_service(self) -> SetupService:
        """Create SetupService loading from the configured snapshot file."""
        return SetupService(persistence_service=self._get_persistence_service())

    def create_message_service(self) -> MessageService:
        return MessageService(verification_service=self._get_verification_service())

    def create_planner_service(self, setup_service: SetupService) -> PlannerService:
        """
        Create PlannerService with injected dependencies.

        Args:
            setup_service: Source of the current setup snapshot

        Returns:
            Configured PlannerService instance
        """
        return PlannerService(
            setup_service=setup_service,
            schedule_builder=self._get_schedule_builder(),
            message_service=self.create_message_service(),
        )

    def create_reinforcement_service(self) -> ReinforcementService:
        return ReinforcementService()

    def create_complete_service_suite(self) -> dict:
        """
        Create a complete suite of services with proper dependencies.

        Returns:
            Dictionary containing all configured services
        """
        setup_service = self.create_setup_service()
        return {
            'setup': setup_service,
            'planner': self.create_planner_service(setup_service),
            'reinforcement': self.create_reinforcement_service(),
            'persistence': self._get_persistence_service(),
        }

    def _get_persistence_service(self) -> PersistenceService:
        """Get singleton persistence service."""
        if self._persistence_service is None:
            self._persistence_service = PersistenceService(JsonKeyValueStore(self.setup_path))
        return self._persistence_service

    def _get_schedule_builder(self) -> ScheduleBuilder:
        """Get singleton schedule builder."""
        if self._schedule_builder is None:
            self._schedule_builder = ScheduleBuilder(self.settings)
        return self._schedule_builder

    def _get_verification_service(self) -> VerificationService:
        """Get singleton verification service."""
        if self._verification_service is None:
            self._verification_service = VerificationService()
        return self._verification_service
