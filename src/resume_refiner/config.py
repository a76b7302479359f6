"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from resume_refiner.document.assembler import DEFAULT_ENTRY_SENTINEL, SECTION_TAGS
from resume_refiner.parsers.tags import TAG_NAME_PATTERN
from resume_refiner.pipeline.completion import FatalPolicy

DEFAULT_MODEL_CHAIN: tuple[str, ...] = (
    "gemini-2.5-flash",
    "gemini-flash-latest",
    "gemini-2.0-flash",
    "gemini-2.5-flash-lite",
)


@dataclass(frozen=True)
class LLMConfig:
    model_chain: tuple[str, ...] = DEFAULT_MODEL_CHAIN
    max_attempts: int = 3
    backoff_seconds: float = 1.0
    fatal_policy: str = FatalPolicy.ABORT.value
    timeout: int = 120
    max_tokens: int = 8192
    temperature: float = 0.3

    def __post_init__(self) -> None:
        object.__setattr__(self, "model_chain", tuple(self.model_chain))
        if not 1 <= self.max_attempts <= 10:
            raise ValueError(f"max_attempts must be between 1 and 10, got {self.max_attempts}")
        if self.backoff_seconds < 0:
            raise ValueError(f"backoff_seconds must be >= 0, got {self.backoff_seconds}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be >= 1, got {self.timeout}")
        if self.fatal_policy not in {p.value for p in FatalPolicy}:
            raise ValueError(f"fatal_policy must be 'abort' or 'skip', got {self.fatal_policy!r}")


@dataclass(frozen=True)
class ParserConfig:
    tags: tuple[str, ...] = SECTION_TAGS
    entry_sentinel: str = DEFAULT_ENTRY_SENTINEL

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))
        for tag in self.tags:
            if not TAG_NAME_PATTERN.match(tag):
                raise ValueError(f"tags: invalid section tag name {tag!r}")
        if not self.entry_sentinel:
            raise ValueError("entry_sentinel must not be empty")


@dataclass(frozen=True)
class DocumentConfig:
    font: str = "Calibri"
    body_size: float = 11
    heading_size: float = 13
    name_size: float = 19

    def __post_init__(self) -> None:
        for name in ("body_size", "heading_size", "name_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")


@dataclass(frozen=True)
class CandidateConfig:
    """Fixed header printed above the generated sections."""

    name: str = ""
    contact_lines: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "contact_lines", tuple(self.contact_lines))


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    candidate: CandidateConfig = field(default_factory=CandidateConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        parser=ParserConfig(**raw.get("parser", {})),
        document=DocumentConfig(**raw.get("document", {})),
        candidate=CandidateConfig(**raw.get("candidate", {})),
    )
