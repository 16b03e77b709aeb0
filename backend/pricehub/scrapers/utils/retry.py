"""Retry utilities with exponential backoff for browser scraping."""

import logging

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)
import structlog
from playwright.async_api import Error as PlaywrightError


logger = structlog.get_logger(__name__)


# Navigation errors (net::ERR_*, target closed) are retried; selector
# timeouts are handled by the caller as "no results".
playwright_retry = retry(
    stop=stop_after_attempt(2),
    wait=wait_exponential(multiplier=1, min=2, max=15),
    retry=retry_if_exception_type(PlaywrightError),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
