from .bridge import BridgeService
from .execution import BasicExecutor

__all__ = ["BridgeService", "BasicExecutor"]
