"""
Element inspection exceptions.
"""

from llm_web_inspector.exceptions.base import WebInspectorError


class InspectError(WebInspectorError):
    """Base exception for element resolution errors."""
    pass


class InvalidInputError(InspectError):
    """
    Input that cannot be resolved against.
    
    Raised when there is no target description and no quick answer,
    or when the snapshot screenshot cannot be decoded.
    """
    
    def __init__(self, message: str, target_description: str | None = None):
        super().__init__(message, {"target_description": target_description})
        self.target_description = target_description


class ElementNotFoundError(InspectError):
    """
    No element could be resolved for a target.
    
    Attributes:
        target_description: The element description that was asked for
        position: Absolute position the model pointed at, if any
    """
    
    def __init__(
        self,
        message: str,
        target_description: str | None = None,
        position: tuple | None = None,
    ):
        super().__init__(message, {"target_description": target_description, "position": position})
        self.target_description = target_description
        self.position = position


class DataExtractionError(InspectError):
    """
    The model returned no data and reported errors.
    
    Attributes:
        data_query: The extraction request, as text
        errors: Error messages reported by the model
    """
    
    def __init__(self, message: str, data_query: str | None = None, errors: list | None = None):
        super().__init__(message, {"data_query": data_query, "errors": errors or []})
        self.data_query = data_query
        self.errors = errors or []
