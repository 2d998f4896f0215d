from sevaconnect.db.session import Database

__all__ = ["Database"]
