#!/usr/bin/env python
from abc import ABC, abstractmethod

from ..base import GeneratedEmail


class BaseEmailService(ABC):
    """Interface for services that hand out private email addresses"""

    SERVICE_NAME = "abstract"

    def __init__(self):
        self.service_name = self.SERVICE_NAME

    @abstractmethod
    async def request_email(self, api_key: str) -> GeneratedEmail:
        """Request a new address - REQUIRED"""
        pass

    async def close(self):
        """Cleanup resources - OPTIONAL (has default implementation)"""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
