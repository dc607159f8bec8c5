from babysleep.core.repositories.data_repository import SessionRepository

__all__ = ['SessionRepository']
