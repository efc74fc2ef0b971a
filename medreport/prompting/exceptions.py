class PromptTemplateError(Exception):
    """Raised when a bundled prompt resource cannot be loaded."""
