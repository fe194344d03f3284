"""Pytest configuration and shared fixtures."""

from typing import Optional

import pytest

from catalogsmith.config import Settings
from catalogsmith.llm import LLMMessage, ModelGateway
from catalogsmith.sheets import SheetData


class FakeGateway(ModelGateway):
    """Gateway double that records calls and returns a canned answer."""

    provider = "fake"

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    @property
    def is_configured(self) -> bool:
        return self.response is not None or self.error is not None

    async def converse(
        self, directive: str, history: list[LLMMessage], message: str
    ) -> Optional[str]:
        self.calls.append(
            {"kind": "converse", "directive": directive, "history": list(history), "message": message}
        )
        if self.error is not None:
            raise self.error
        return self.response

    async def summarize(
        self, directive: str, prompt: str, max_tokens: Optional[int] = None
    ) -> Optional[str]:
        self.calls.append(
            {"kind": "summarize", "directive": directive, "prompt": prompt, "max_tokens": max_tokens}
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings with test values and no credentials."""
    return Settings(
        llm_provider="anthropic",
        anthropic_api_key=None,
        openrouter_api_key=None,
        model_name="claude-3-5-haiku-latest",
        host="127.0.0.1",
        port=8000,
        debug=False,
        cors_allow_origins=["*"],
        max_tokens=1024,
    )


@pytest.fixture
def unavailable_gateway() -> FakeGateway:
    """Gateway with no credential: every call returns None."""
    return FakeGateway()


@pytest.fixture
def template_sheet() -> SheetData:
    """An Amazon-style template."""
    return SheetData(
        headers=["SKU", "Title", "Brand", "Selling Price", "Bullet Point 1", "Search Keywords"],
        rows=[],
    )


@pytest.fixture
def raw_sheet() -> SheetData:
    """A vendor export whose headers differ from the template's."""
    return SheetData(
        headers=[
            "Item ID",
            "Brand Name",
            "Item Name",
            "Offer Price",
            "Product Description",
            "Fabric Material",
            "Colour",
            "Amazon ASIN",
        ],
        rows=[
            {
                "Item ID": "A-100",
                "Brand Name": "Acme",
                "Item Name": "Runner Shoe",
                "Offer Price": "1999",
                "Product Description": "Lightweight mesh upper. Great for daily runs and casual wear.",
                "Fabric Material": "Mesh",
                "Colour": "Blue",
                "Amazon ASIN": "B00TEST",
            },
            {
                "Item ID": "A-101",
                "Brand Name": "",
                "Item Name": "Trail Boot",
                "Offer Price": "3499",
                "Product Description": "Rugged. Waterproof leather build for mountain trails",
                "Fabric Material": "Leather",
                "Colour": "",
            },
        ],
    )


# Configure pytest-asyncio
def pytest_configure(config):
    """Configure pytest with asyncio settings."""
    config.addinivalue_line("markers", "asyncio: mark test as async")


@pytest.fixture
def make_gateway():
    """Factory for FakeGateway instances."""
    return FakeGateway
