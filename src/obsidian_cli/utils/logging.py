"""Secure logging configuration for obsidian-cli.

Provides logging setup with API key masking.
Bearer tokens are completely masked in all log output.
"""

import logging
import re
import sys
from collections.abc import Mapping


class TokenMaskingFilter(logging.Filter):
    """Logging filter that masks API keys for security.

    Bearer tokens, and the configured API key wherever it appears,
    are replaced with [MASKED].
    """

    TOKEN_PATTERNS = [
        # Match Authorization header format
        re.compile(r"(Authorization['\"]?\s*[=:]\s*['\"]?Bearer\s+)([^\s'\",}]+)", re.IGNORECASE),
        # Match bare "Bearer VALUE"
        re.compile(r"(Bearer\s+)([^\s'\",}]+)"),
        # Match OBSIDIAN_API_KEY=VALUE
        re.compile(r"(OBSIDIAN_API_KEY\s*[=:]\s*['\"]?)([^\s'\",}]+)"),
    ]

    def __init__(self, secrets: list[str] | None = None) -> None:
        """Initialize the filter.

        Args:
            secrets: Literal values to mask in addition to the patterns
        """
        super().__init__()
        self.secrets = [secret for secret in (secrets or []) if secret]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask tokens in log records.

        Args:
            record: Log record to process

        Returns:
            Always True (record is always passed through, just modified)
        """
        if record.msg:
            record.msg = self._mask_tokens(str(record.msg))
        if isinstance(record.args, Mapping):
            # Single mapping argument for %(key)s formatting
            record.args = {key: self._mask_arg(value) for key, value in record.args.items()}
        elif record.args:
            record.args = tuple(self._mask_arg(arg) for arg in record.args)
        return True

    def _mask_arg(self, arg: object) -> object:
        if isinstance(arg, str):
            return self._mask_tokens(arg)
        return arg

    def _mask_tokens(self, text: str) -> str:
        """Mask all tokens in text.

        Args:
            text: Text potentially containing tokens

        Returns:
            Text with token values replaced by [MASKED]
        """
        result = text
        for secret in self.secrets:
            result = result.replace(secret, "[MASKED]")
        for pattern in self.TOKEN_PATTERNS:
            result = pattern.sub(lambda m: m.group(1) + "[MASKED]", result)
        return result


def setup_logging(
    level: int = logging.WARNING,
    name: str | None = None,
    secrets: list[str] | None = None,
) -> logging.Logger:
    """Set up logging with token masking.

    Log records go to stderr so they never mix with command output.

    Args:
        level: Logging level (default: WARNING)
        name: Logger name (default: "obsidian_cli")
        secrets: Literal values to mask (e.g., the API key)

    Returns:
        Configured logger instance
    """
    logger_name = name or "obsidian_cli"
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)

    handler.addFilter(TokenMaskingFilter(secrets))

    logger.addHandler(handler)

    return logger
