"""Portal services: entitlements, CRUD panels, click tracking and inactive-user cleanup."""
