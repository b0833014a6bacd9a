"""Newsletter adapters."""

from .buttondown import ButtondownSubscriber

__all__ = ["ButtondownSubscriber"]
