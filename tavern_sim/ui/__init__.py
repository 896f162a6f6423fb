from .cli_interface import PlayerInterface

__all__ = ["PlayerInterface"]
