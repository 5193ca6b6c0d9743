class SeederError(Exception):
    """Base error for the seeding run."""


class ConfigurationError(SeederError):
    """Missing or malformed configuration (credentials, env values)."""


class ValidationError(ConfigurationError):
    """A configuration value has the wrong shape (e.g. SEED_MONTH)."""


class StoreError(SeederError):
    """Any failure reported by the document store."""
