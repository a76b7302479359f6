"""Resume refiner - completion, section parsing and document assembly."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from resume_refiner.clients.llm_client import LLMClient
from resume_refiner.config import AppConfig
from resume_refiner.document.assembler import assemble
from resume_refiner.document.docx_renderer import render_docx
from resume_refiner.models.completion import CompletionResult
from resume_refiner.models.document import StyleBlock
from resume_refiner.parsers.tags import parse_sections
from resume_refiner.pipeline.completion import (
    CancellationToken,
    CompletionOrchestrator,
    FatalPolicy,
)
from resume_refiner.prompts import (
    DEFAULT_SYSTEM_PROMPT,
    build_refine_prompt,
    build_tailor_prompt,
)


@dataclass
class RefineResult:
    """Everything produced by one refine pass."""

    completion: CompletionResult
    sections: dict[str, str]
    blocks: list[StyleBlock]
    elapsed_seconds: float = 0.0
    metadata: dict = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.completion.text


class ResumeRefiner:
    """Runs the tailor and refine passes against the configured model chain."""

    def __init__(
        self,
        llm: LLMClient,
        config: AppConfig | None = None,
        *,
        orchestrator: CompletionOrchestrator | None = None,
    ):
        self.llm = llm
        self.config = config or AppConfig()
        self.orchestrator = orchestrator or CompletionOrchestrator(
            max_attempts=self.config.llm.max_attempts,
            backoff_seconds=self.config.llm.backoff_seconds,
            fatal_policy=FatalPolicy(self.config.llm.fatal_policy),
        )

    async def complete(
        self,
        prompt: str,
        *,
        cancel: CancellationToken | None = None,
    ) -> CompletionResult:
        return await self.orchestrator.run(
            self.config.llm.model_chain, prompt, self.llm.invoke, cancel=cancel
        )

    async def tailor(
        self,
        company: str,
        job_title: str,
        jd_text: str,
        resume_text: str,
        extra: str = "",
        *,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        cancel: CancellationToken | None = None,
    ) -> CompletionResult:
        """Produce a markdown resume tailored to one job."""
        prompt = build_tailor_prompt(
            company, job_title, jd_text, resume_text, extra, system_prompt=system_prompt
        )
        return await self.complete(prompt, cancel=cancel)

    async def refine(
        self,
        jd_text: str,
        resume_text: str,
        *,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        cancel: CancellationToken | None = None,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> RefineResult:
        """Ask for a tagged resume and assemble it into style blocks.

        Args:
            jd_text: Job description text.
            resume_text: Raw resume to rewrite (e.g. the tailor pass output).
            system_prompt: Instructions placed ahead of the format rules.
            cancel: Optional token checked before each backend call and backoff.
            on_phase: Optional callback(phase_name, detail) for progress.
        """
        start = time.monotonic()

        def _notify(phase: str, detail: str = ""):
            if on_phase:
                on_phase(phase, detail)

        parser = self.config.parser
        prompt = build_refine_prompt(
            jd_text,
            resume_text,
            parser.tags,
            parser.entry_sentinel,
            system_prompt=system_prompt,
        )

        _notify("completion", "Requesting tagged resume")
        completion = await self.complete(prompt, cancel=cancel)

        _notify("assemble", f"Parsing response from {completion.backend_id}")
        sections, blocks = self.build_document(completion.text)

        elapsed = time.monotonic() - start
        _notify("done", f"{len(sections)} section(s), {elapsed:.1f}s")
        return RefineResult(
            completion=completion,
            sections=sections,
            blocks=blocks,
            elapsed_seconds=elapsed,
            metadata={"attempts": len(completion.attempts)},
        )

    def build_document(self, tagged_text: str) -> tuple[dict[str, str], list[StyleBlock]]:
        """Parse tagged text and assemble it; no backend call."""
        parser = self.config.parser
        sections = parse_sections(tagged_text, parser.tags)
        blocks = assemble(sections, entry_sentinel=parser.entry_sentinel)
        return sections, blocks

    def render(self, blocks: list[StyleBlock], output_path: str | Path) -> Path:
        return render_docx(
            blocks,
            output_path,
            style=self.config.document,
            candidate=self.config.candidate,
        )
