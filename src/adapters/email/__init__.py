"""Email adapters - Confirmation email delivery."""

from .console import ConsoleEmailSender
from .sparkpost import SparkPostEmailSender

__all__ = ["ConsoleEmailSender", "SparkPostEmailSender"]
