"""Resend email API integration."""
