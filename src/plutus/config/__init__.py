"""Configuration: YAML application settings and the credential manager."""
