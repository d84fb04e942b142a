"""Exchange integrations built on the shared REST infrastructure."""
