#!/usr/bin/env python3
"""
Error Types
Exception hierarchy for catalog loading, recipe validation and cooking
sessions. Quantity scaling never raises; unparseable amounts pass through.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, Optional


class ErrorSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    RESOURCE = "resource"
    STATE = "state"
    UNKNOWN = "unknown"


class RecipeAppError(Exception):
    """Base exception for recipe assistant errors."""

    status_code = 500

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 category: ErrorCategory = ErrorCategory.UNKNOWN):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.severity = severity
        self.category = category
        self.timestamp = datetime.now(timezone.utc)
        self.trace_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            'error': self.message,
            'error_code': self.error_code,
            'category': self.category.value,
            'severity': self.severity.value,
            'details': self.details,
            'trace_id': self.trace_id,
            'timestamp': self.timestamp.isoformat(),
        }


class CatalogLoadError(RecipeAppError):
    """Recipe catalog file could not be read or decoded."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details, severity=ErrorSeverity.HIGH,
                         category=ErrorCategory.RESOURCE)


class RecipeNotFoundError(RecipeAppError):
    """No recipe with the requested id."""

    status_code = 404

    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}", details={'recipe_id': recipe_id},
                         severity=ErrorSeverity.LOW, category=ErrorCategory.NOT_FOUND)
        self.recipe_id = recipe_id


class RecipeValidationError(RecipeAppError):
    """Recipe data failed schema validation."""

    status_code = 400

    def __init__(self, message: str, messages: Optional[Dict[str, Any]] = None):
        super().__init__(message, details={'messages': messages or {}},
                         severity=ErrorSeverity.LOW, category=ErrorCategory.VALIDATION)
        self.messages = messages or {}


class CookingSessionError(RecipeAppError):
    """Invalid cooking session operation."""

    status_code = 409

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details, severity=ErrorSeverity.LOW,
                         category=ErrorCategory.STATE)
