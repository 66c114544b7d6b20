from .submit import main

__all__ = ["main"]
