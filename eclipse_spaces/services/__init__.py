from .strategy import prompt_import_strategy
from .transfer_service import SpaceTransferService

__all__ = [
    "SpaceTransferService",
    "prompt_import_strategy",
]
