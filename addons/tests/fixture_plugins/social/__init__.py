"""Social networks plugin used in tests."""
