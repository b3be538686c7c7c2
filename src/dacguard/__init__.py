"""DacGuard - discretionary access control over resources."""

__version__ = "0.1.0"
