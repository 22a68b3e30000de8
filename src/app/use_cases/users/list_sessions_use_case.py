"""
List Sessions Use Case

Shows a user where they are logged in.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import ActiveSessionInfo, ActiveSessionsResponse


class ListSessionsUseCase:
    """Unexpired sessions of the caller, most recently active first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: int, current_session_id: int
    ) -> Result[ActiveSessionsResponse]:
        async with self.uow:
            sessions = await self.uow.sessions.list_active_for_user(user_id)

        return Return.ok(
            ActiveSessionsResponse(
                sessions=[
                    ActiveSessionInfo(
                        id=s.id,
                        current=s.id == current_session_id,
                        device_info=s.device_info,
                        ip_address=s.ip_address,
                        user_agent=s.user_agent,
                        expires_at=s.expires_at,
                        last_activity=s.last_activity,
                        created_at=s.created_at,
                    )
                    for s in sessions
                ]
            )
        )
