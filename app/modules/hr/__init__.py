"""HR notifications: monthly reports, request workflows and holiday announcements."""
