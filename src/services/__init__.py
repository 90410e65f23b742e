"""
MCP tool services, one per Graph domain.
"""

from .calendar_service import CalendarService
from .directory_service import DirectoryService
from .general_service import GeneralService
from .mail_service import MailService
from .presence_service import PresenceService
from .teams_service import TeamsService

__all__ = [
    "CalendarService",
    "DirectoryService",
    "GeneralService",
    "MailService",
    "PresenceService",
    "TeamsService",
]
