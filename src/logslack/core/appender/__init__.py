from .handler import SlackHandler

__all__ = ["SlackHandler"]
