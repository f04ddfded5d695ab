"""Error handling for JSON Codable."""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .types import (
    ErrorHandlerInterface,
    ErrorResponse,
    ErrorType,
    ProcessingError,
    ShapeMismatchError,
    ValidationError,
    ValidationResult,
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Validates JSON input and explains decode and encode failures.

    Used by the command-line interface to turn exceptions into messages with
    a suggested follow-up.
    """

    def __init__(self, max_depth: int = 32, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            max_depth: Nesting depth reported as a warning by validate_input
            logger: Optional logger instance for error reporting
        """
        self.max_depth = max_depth
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_string(input_data, self.max_depth)
        except RecursionError as e:
            self.logger.error(f"Input too deeply nested to validate: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.STRUCTURE,
                    message="Input is too deeply nested to validate",
                    location="input"
                )],
                warnings=[]
            )

    def describe(self, error: Exception) -> ErrorResponse:
        """
        Explain an error raised while decoding or encoding.

        Args:
            error: Exception raised by a CodableAdapter

        Returns:
            ErrorResponse with a suggested action
        """
        if isinstance(error, PydanticValidationError):
            self.logger.error(f"Structural decode failed with {error.error_count()} errors")
            return ErrorResponse(
                can_recover=False,
                suggested_action="The rewritten JSON does not fit the schema. Check that every "
                                 "required field has a transformer whose source path exists and "
                                 "that values have the declared types."
            )
        if not isinstance(error, ProcessingError):
            self.logger.error(f"Unexpected error: {error}")
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry."
            )

        self.logger.error(f"Processing error: {error.error_type.value} - {error}")
        if isinstance(error, ShapeMismatchError):
            return ErrorResponse(
                can_recover=True,
                suggested_action=f"Expected {error.expected.value} at {error.location} but found "
                                 f"{error.received.value}. Use a list decode for arrays and "
                                 "a single decode for objects."
            )
        if error.error_type == ErrorType.SYNTAX:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Fix the JSON syntax of the input and retry."
            )
        if error.error_type == ErrorType.CIRCULAR:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Nested schemas recurse too deeply. Check for self-referencing "
                                 "data or raise the adapter's max_depth."
            )
        if error.error_type == ErrorType.SCHEMA:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Schemas must subclass JSONCodable and map property names to "
                                 "transformers, key paths, strings or date formats."
            )
        return ErrorResponse(
            can_recover=False,
            suggested_action="Check the structure of the input document."
        )
