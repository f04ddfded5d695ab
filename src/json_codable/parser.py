"""JSON text parsing and serialization."""

import json
import logging
from typing import Any, Optional, Union

from .types import DataType, ErrorType, JSONValue, ProcessingError


class JSONParser:
    """
    Converts between UTF-8 JSON text and parsed JSON values.

    Parsed values use the standard library representation: dicts, lists,
    strings, numbers, booleans and None.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, data: Union[str, bytes, bytearray]) -> JSONValue:
        """
        Parse JSON text.

        Args:
            data: JSON text, as str or UTF-8 bytes

        Returns:
            The parsed JSON value

        Raises:
            ProcessingError: If the text is empty, not UTF-8 or not valid JSON
        """
        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode("utf-8")
            except UnicodeDecodeError as e:
                raise ProcessingError(f"JSON input is not valid UTF-8: {e}", ErrorType.SYNTAX) from e

        if not data.strip():
            raise ProcessingError("JSON input is empty", ErrorType.SYNTAX)

        try:
            value = json.loads(data)
        except json.JSONDecodeError as e:
            raise ProcessingError(
                f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}",
                ErrorType.SYNTAX,
                {"line": e.lineno, "column": e.colno},
            ) from e

        self.logger.debug(f"Parsed JSON {self.detect_data_type(value).value}")
        return value

    def serialize(self, value: Any) -> bytes:
        """
        Serialize a JSON value to compact UTF-8 text.

        Raises:
            ProcessingError: If the value holds something JSON cannot represent
        """
        try:
            text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise ProcessingError(f"Value is not JSON serializable: {e}", ErrorType.STRUCTURE) from e
        return text.encode("utf-8")

    @staticmethod
    def detect_data_type(value: Any) -> DataType:
        return DataType.of(value)
