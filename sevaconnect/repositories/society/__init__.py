from sevaconnect.repositories.society.society_repository import SocietyRepository

__all__ = ["SocietyRepository"]
