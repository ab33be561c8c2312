"""Academic session use cases."""

from .close_session import CloseSessionRequest, CloseSessionUseCase
from .create_session import CreateSessionRequest, CreateSessionUseCase
from .get_session import GetSessionRequest, GetSessionUseCase
from .session_response import SessionResponse
from .start_session import StartSessionRequest, StartSessionUseCase
from .update_session import UpdateSessionRequest, UpdateSessionUseCase

__all__ = [
    "CloseSessionRequest",
    "CloseSessionUseCase",
    "CreateSessionRequest",
    "CreateSessionUseCase",
    "GetSessionRequest",
    "GetSessionUseCase",
    "SessionResponse",
    "StartSessionRequest",
    "StartSessionUseCase",
    "UpdateSessionRequest",
    "UpdateSessionUseCase",
]
