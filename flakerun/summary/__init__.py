from .status import StatusSummary

__all__ = ["StatusSummary"]
