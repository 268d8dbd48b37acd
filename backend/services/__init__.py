"""Services shared by the portal's page controllers."""
