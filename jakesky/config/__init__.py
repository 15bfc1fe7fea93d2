from .schema import Location

__all__ = ["Location"]
