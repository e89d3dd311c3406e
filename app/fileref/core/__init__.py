"""Core path value type, file operations, errors and configuration."""
