from contextvars import ContextVar

# Correlation id shown in every log line (process id, or the editor session being served)
session_id: ContextVar[str | None] = ContextVar[str | None]("session_id", default=None)

# Editor session currently handled by a request, if any
editor_session_id: ContextVar[str | None] = ContextVar[str | None](
    "editor_session_id", default=None
)
