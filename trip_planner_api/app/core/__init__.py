"""Configuration, persistence, security and error plumbing shared by the app."""
