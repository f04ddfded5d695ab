"""Validation utilities for JSON input documents."""

import json
from typing import Any, List, Tuple

from ..types import ValidationResult, ValidationError, ErrorType


class ValidationUtils:
    """Utility class for validating JSON text before decoding."""

    @staticmethod
    def validate_json_string(json_string: str, max_depth: int = 32) -> ValidationResult:
        """
        Validate JSON string syntax and structure.

        Args:
            json_string: JSON string to validate
            max_depth: Nesting depth above which a warning is emitted

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        structure_errors, structure_warnings = ValidationUtils._validate_json_structure(data, max_depth)
        errors.extend(structure_errors)
        warnings.extend(structure_warnings)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _validate_json_structure(data: Any, max_depth: int) -> Tuple[List[ValidationError], List[str]]:
        """Validate JSON data structure."""
        errors = []
        warnings = []

        if not isinstance(data, (dict, list)):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Root element must be an object or an array, got {type(data).__name__}",
                location="root"
            ))
            return errors, warnings

        if isinstance(data, list):
            for index, item in enumerate(data):
                if not isinstance(item, dict):
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Array elements must be objects, got {type(item).__name__}",
                        location=f"[{index}]"
                    ))
                    break

        depth = ValidationUtils.calculate_max_depth(data)
        if depth > max_depth:
            warnings.append(f"Deep nesting detected (depth: {depth}). "
                            f"Nested schemas deeper than {max_depth} levels will be rejected.")

        return errors, warnings

    @staticmethod
    def calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if isinstance(data, dict):
            children = data.values()
        elif isinstance(data, list):
            children = data
        else:
            return current_depth

        max_child_depth = current_depth
        for child in children:
            max_child_depth = max(max_child_depth, ValidationUtils.calculate_max_depth(child, current_depth + 1))
        return max_child_depth
