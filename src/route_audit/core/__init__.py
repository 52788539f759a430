"""Configuration and file discovery."""
