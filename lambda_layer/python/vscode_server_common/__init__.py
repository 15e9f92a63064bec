"""VSCode Server Common Library - Shared utilities for Lambda functions."""

__version__ = "1.0.0"
