#!/usr/bin/env python
# duck_service.py
import asyncio
import json
import os
from typing import Optional

import aiohttp

from .base import BaseEmailService
from ..base import DuckError, ErrorKind, GeneratedEmail
from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)

ENDPOINT = "https://quack.duckduckgo.com/api/email/addresses"
DUCK_DOMAIN = "@duck.com"


class DuckEmailService(BaseEmailService):
    """DuckDuckGo email protection (@duck.com addresses)"""

    SERVICE_NAME = "duckduckgo"

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[aiohttp.ClientTimeout] = None,
    ):
        super().__init__()
        self.endpoint = endpoint or os.getenv("DDG_ENDPOINT", ENDPOINT)
        # None keeps aiohttp's default timeout
        self.timeout = timeout
        self.session = None
        logger.debug(f"DuckEmailService initialized for {self.endpoint}")

    async def request_email(self, api_key: str) -> GeneratedEmail:
        """Ask the API for a new private address"""
        if not api_key:
            raise DuckError(ErrorKind.MISSING_CREDENTIAL, "no API key configured")

        if self.session is None:
            if self.timeout is None:
                self.session = aiohttp.ClientSession()
            else:
                self.session = aiohttp.ClientSession(timeout=self.timeout)

        logger.debug(f"POST {self.endpoint}")
        try:
            async with self.session.post(
                self.endpoint,
                headers={"Authorization": f"Bearer {api_key}"},
            ) as response:
                status = response.status
                body = await response.read()
        except aiohttp.ClientError as e:
            logger.error(f"Request to {self.endpoint} failed: {e}")
            raise DuckError(ErrorKind.REMOTE_ERROR, f"request failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Request to {self.endpoint} timed out")
            raise DuckError(ErrorKind.REMOTE_ERROR, "request timed out") from e

        logger.debug(f"Response status: {status}, {len(body)} bytes")

        # 401 is reported without the body
        if status == 401:
            logger.warning("API rejected the token")
            raise DuckError(ErrorKind.INVALID_CREDENTIAL, "invalid token", status=401)
        if not 200 <= status <= 299:
            raise DuckError(ErrorKind.REMOTE_ERROR, f"HTTP {status}", status=status)

        return GeneratedEmail(address=self.parse_address(body), raw_body=body)

    @staticmethod
    def parse_address(body: bytes) -> str:
        """Turn a ``{"address": "<local-part>"}`` body into a full address"""
        try:
            data = json.loads(body)
        except ValueError as e:
            raise DuckError(
                ErrorKind.MALFORMED_RESPONSE, f"decode error: {e}"
            ) from e

        address = data.get("address") if isinstance(data, dict) else None
        if not address or not isinstance(address, str):
            raise DuckError(ErrorKind.MALFORMED_RESPONSE, "no address in response")

        return address + DUCK_DOMAIN

    async def close(self):
        """Close the HTTP session"""
        await super().close()

        if self.session:
            logger.debug("Closing aiohttp session")
            await self.session.close()
            self.session = None
