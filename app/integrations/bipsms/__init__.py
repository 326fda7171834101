"""BipSMS WhatsApp gateway integration."""
