"""
Alert dispatch adapters for FloodGuard.

E-mail formatting and delivery belong to an external notification
service; these adapters hand it the structured assessment.
"""

from .webhook import WebhookAlertDispatcher, LogAlertDispatcher, alert_payload

__all__ = ["WebhookAlertDispatcher", "LogAlertDispatcher", "alert_payload"]
