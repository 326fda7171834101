"""Firebase Cloud Messaging integration."""
