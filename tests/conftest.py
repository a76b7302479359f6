"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from resume_refiner.clients.llm_client import LLMClient
from resume_refiner.config import AppConfig, LLMConfig


@pytest.fixture
def no_sleep() -> AsyncMock:
    return AsyncMock(return_value=None)


@pytest.fixture
def sample_tagged_text() -> str:
    return """Here is your resume.

[SUMMARY]
Platform engineering leader with 15 years in cloud infrastructure.
Built SRE practices across three business units.
[/SUMMARY]

[CORE_SKILLS]
Cloud Strategy
Kubernetes

FinOps
[/CORE_SKILLS]

[EXPERIENCE]
Company: Acme Corp | Director of Platform | 2019 - Present
- Led 40-person platform organisation
- Cut cloud spend 30%

Company: Globex | Senior SRE Manager | 2014 - 2019
- Introduced SLO-based alerting
[/EXPERIENCE]

[CERTIFICATIONS]
- AWS Solutions Architect Professional
- CKA
[/CERTIFICATIONS]

[EDUCATION]
B.Tech Computer Science, IIT Delhi
[/EDUCATION]
"""


@pytest.fixture
def fast_config() -> AppConfig:
    return AppConfig(
        llm=LLMConfig(model_chain=("gemini-2.5-flash", "gemini-2.0-flash"), backoff_seconds=0)
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.invoke = AsyncMock(return_value="")
    client.get_token_summary.return_value = {"input": 0, "output": 0, "calls": []}
    return client
