from __future__ import annotations

"""GitHub Actions runtime bindings.

``ActionsRuntime`` is the host collaborator the wait loop talks to: it reads
``INPUT_*`` variables, masks secrets, writes step outputs and reports the
final status. Everything is kept on the instance so tests can inspect it
without a runner.
"""

import logging
import os
import sys
import uuid
from typing import Dict, List, Mapping, Optional, TextIO

from .errors import ConfigError

logger = logging.getLogger("branchwait")

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


def escape_data(value: str) -> str:
    """Escape the data part of a workflow command so it stays on one line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class RedactingFilter(logging.Filter):
    """Replace registered secret values with ``***`` in log records."""

    def __init__(self, secrets: Optional[List[str]] = None):
        super().__init__()
        self.secrets: List[str] = secrets if secrets is not None else []

    def redact(self, text: str) -> str:
        # longest first so a secret containing another is masked whole
        for secret in sorted(self.secrets, key=len, reverse=True):
            text = text.replace(secret, "***").replace(escape_data(secret), "***")
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if self.secrets:
            record.msg = self.redact(record.getMessage())
            record.args = None
            if record.exc_info and not record.exc_text:
                record.exc_text = self.redact(logging.Formatter().formatException(record.exc_info))
        return True


def configure_logging(debug: bool = False, stream: Optional[TextIO] = None) -> RedactingFilter:
    """Attach a plain stream handler and the redacting filter to the package logger."""
    redactor = RedactingFilter()
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(redactor)

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return redactor


class ActionsRuntime:
    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        stdout: Optional[TextIO] = None,
        redactor: Optional[RedactingFilter] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.stdout = stdout or sys.stdout
        self.redactor = redactor or RedactingFilter()
        self.outputs: Dict[str, str] = {}
        self.failed_message: Optional[str] = None
        self.exit_code = 0

    # -- inputs -------------------------------------------------------------

    def get_input(self, name: str, required: bool = False) -> str:
        key = "INPUT_" + name.replace(" ", "_").upper()
        value = (self.environ.get(key) or "").strip()
        if required and not value:
            raise ConfigError(f"Input required and not supplied: {name}")
        return value

    def get_boolean_input(self, name: str, default: bool = False) -> bool:
        value = self.get_input(name)
        if not value:
            return default
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ConfigError(
            f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
            "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
        )

    # -- secrets & outputs --------------------------------------------------

    @property
    def secrets(self) -> List[str]:
        return self.redactor.secrets

    def set_secret(self, value: Optional[str]) -> None:
        if not value or value in self.redactor.secrets:
            return
        self.redactor.secrets.append(value)
        self._command(f"::add-mask::{escape_data(value)}")

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        path = self.environ.get("GITHUB_OUTPUT")
        if path:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            with open(path, "a", encoding="utf-8") as fh:
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            logger.debug("GITHUB_OUTPUT not set, output %s kept in memory only", name)

    # -- logging ------------------------------------------------------------

    def debug(self, message: str) -> None:
        logger.debug(message)

    def info(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning("::warning::%s", escape_data(message))

    def error(self, message: str) -> None:
        logger.error("::error::%s", escape_data(message))

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.failed_message = message
        self.error(message)

    def _command(self, line: str) -> None:
        self.stdout.write(line + "\n")
        self.stdout.flush()
