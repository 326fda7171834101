"""SMTP email integration."""
