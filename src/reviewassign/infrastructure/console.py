"""Console output for CLI commands"""

import json
import sys
from typing import Any, Dict, Optional, TextIO


class ConsoleWriter:
    """Handle command output: JSON results on stdout, annotations on stderr"""

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def write_json(self, payload: Dict[str, Any]) -> None:
        """Write one JSON document to stdout

        Args:
            payload: JSON-serialisable result
        """
        self.stdout.write(json.dumps(payload, indent=2, sort_keys=False))
        self.stdout.write("\n")
        self.stdout.flush()

    def write_error(self, code: str, message: str) -> None:
        """Write an error document to stdout and a one-line notice to stderr

        Args:
            code: Error code (e.g., "NOT_FOUND")
            message: Human-readable message
        """
        self.write_json({"error": {"code": code, "message": message}})
        self.set_error(message)

    def set_error(self, message: str) -> None:
        self.stderr.write(f"error: {message}\n")

    def set_notice(self, message: str) -> None:
        self.stderr.write(f"notice: {message}\n")
