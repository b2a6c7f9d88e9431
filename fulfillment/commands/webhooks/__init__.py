"""Webhook command handlers."""

from fulfillment.commands.webhooks.dialogflow_command import DialogflowWebhookCommand

__all__ = ["DialogflowWebhookCommand"]
