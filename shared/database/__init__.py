from shared.database.postgres import Base, get_async_session_factory, get_session

__all__ = ["Base", "get_async_session_factory", "get_session"]
