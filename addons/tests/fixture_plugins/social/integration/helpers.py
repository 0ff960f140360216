"""Not an integration module; ignored by the locator."""
