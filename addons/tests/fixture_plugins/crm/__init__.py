"""CRM plugin used in tests."""
