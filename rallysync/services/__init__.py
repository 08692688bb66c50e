"""
Services package for the RallySync rally timing planner.

This package contains service classes that handle business logic.
Includes factory for dependency injection.
"""
from .persistence_service import JsonKeyValueStore, PersistenceService
from .setup_service import SetupService, SetupError
from .schedule_service import ScheduleBuilder, start_delta
from .verification_service import VerificationService, VerificationLine
from .message_service import MessageService
from .planner_commands import Command, CommandManager, StateTransitionCommand
from .planner_service import PlannerService, PlannerError
from .reinforcement_service import ReinforcementService
from .service_factory import ServiceFactory

__all__ = [
    "JsonKeyValueStore", "PersistenceService", "SetupService", "SetupError",
    "ScheduleBuilder", "start_delta", "VerificationService", "VerificationLine",
    "MessageService", "Command", "CommandManager", "StateTransitionCommand",
    "PlannerService", "PlannerError", "ReinforcementService", "ServiceFactory"
]
