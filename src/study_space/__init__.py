"""Study Space application package."""
