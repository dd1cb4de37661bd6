"""
Custom exception classes for the pumi gazetteer.

This module defines the exception hierarchy raised by code validation,
table lookups, data loading and the source pipeline.
"""

from typing import Optional, List, Dict, Any


class GazetteerError(Exception):
    """Base exception class for all gazetteer errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base gazetteer error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class ValidationError(GazetteerError):
    """Exception raised for data validation errors."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Any = None, validation_rules: Optional[List[str]] = None,
                 error_code: str = 'VALIDATION_ERROR'):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            field_name: Name of the field that failed validation
            invalid_value: The invalid value that caused the error
            validation_rules: List of validation rules that were violated
            error_code: Error code, overridden by subclasses
        """
        context = {
            'field_name': field_name,
            'invalid_value': str(invalid_value) if invalid_value is not None else None,
            'validation_rules': validation_rules or []
        }
        super().__init__(message, error_code=error_code, context=context)
        self.field_name = field_name
        self.invalid_value = invalid_value
        self.validation_rules = validation_rules or []


class InvalidCodeError(ValidationError):
    """Raised when a division code is not a 2..max digit string of even length."""

    def __init__(self, code: Any, max_length: int = 8):
        super().__init__(
            f"Code length must be between 2 and {max_length}",
            field_name='code',
            invalid_value=code,
            validation_rules=[f"^[0-9]{{2,{max_length}}}$", "even length"],
            error_code='INVALID_CODE'
        )
        self.code = code
        self.max_length = max_length


class InvalidParentCodeError(ValidationError):
    """Raised when a parent-scoped lookup gets a code of the wrong length."""

    def __init__(self, code: Any, parent_code_length: int):
        super().__init__(
            f"Parent code length must be equal to {parent_code_length}",
            field_name='parent',
            invalid_value=code,
            validation_rules=[f"^[0-9]{{{parent_code_length}}}$"],
            error_code='INVALID_PARENT_CODE'
        )
        self.code = code
        self.parent_code_length = parent_code_length


class DataLoadError(GazetteerError):
    """Exception raised for data loading errors."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 level: Optional[str] = None, original_error: Optional[Exception] = None):
        """
        Initialize data load error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            level: Administrative level being loaded
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'level': level,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='DATA_LOAD_ERROR', context=context)
        self.file_path = file_path
        self.level = level
        self.original_error = original_error


class FileAccessError(GazetteerError):
    """Exception raised for file access and I/O errors."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        """
        Initialize file access error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Type of operation that failed (read, write, create, etc.)
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='FILE_ACCESS_ERROR', context=context)
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class SourceFetchError(GazetteerError):
    """Exception raised when a remote source file cannot be downloaded."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        context = {
            'url': url,
            'status_code': status_code,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='SOURCE_FETCH_ERROR', context=context)
        self.url = url
        self.status_code = status_code
        self.original_error = original_error


class ConfigurationError(GazetteerError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that has invalid value
            config_value: Invalid configuration value
            valid_values: List of valid values for the configuration key
        """
        context = {
            'config_key': config_key,
            'config_value': str(config_value) if config_value is not None else None,
            'valid_values': [str(v) for v in valid_values] if valid_values else None
        }
        super().__init__(message, error_code='CONFIGURATION_ERROR', context=context)
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []


def create_validation_error(field_name: str, value: Any, rules: List[str]) -> ValidationError:
    """
    Create a validation error with standardized message format.

    Args:
        field_name: Name of the field that failed validation
        value: Invalid value
        rules: List of validation rules that were violated

    Returns:
        ValidationError instance
    """
    message = f"Validation failed for field '{field_name}' with value '{value}'"
    if rules:
        message += f". Rules violated: {', '.join(rules)}"

    return ValidationError(
        message=message,
        field_name=field_name,
        invalid_value=value,
        validation_rules=rules
    )


def get_error_severity(error: Exception) -> str:
    """
    Get the severity level of an error.

    Args:
        error: Exception to evaluate

    Returns:
        Severity level string (low, medium, high, critical)
    """
    if isinstance(error, ConfigurationError):
        return 'critical'
    elif isinstance(error, (DataLoadError, FileAccessError)):
        return 'high'
    elif isinstance(error, SourceFetchError):
        return 'medium'
    elif isinstance(error, ValidationError):
        return 'low'
    else:
        return 'medium'
