"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from resume_refiner.clients.llm_client import LLMClient
from resume_refiner.config import AppConfig, load_config
from resume_refiner.errors import AllFailedError
from resume_refiner.logging.cost_calculator import calculate_cost
from resume_refiner.parsers.inputs import load_job_description, load_resume
from resume_refiner.pipeline.refiner import RefineResult, ResumeRefiner
from resume_refiner.prompts import load_system_prompt
from resume_refiner.utils.filenames import (
    job_folder_name,
    refined_docx_name,
    tailored_markdown_name,
)

app = typer.Typer(
    name="resume-refiner",
    help="Tailor a resume to a job and render it as a styled DOCX.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _make_refiner(config: AppConfig) -> ResumeRefiner:
    llm = LLMClient(
        timeout=config.llm.timeout,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )
    return ResumeRefiner(llm, config)


def _require(path: Path, what: str) -> None:
    if not path.exists():
        console.print(f"[red]{what} not found: {path}[/red]")
        raise typer.Exit(1)


def _report_input_error(err: Exception) -> None:
    console.print(f"[red]Cannot load input: {err}[/red]")


def _report_failure(err: AllFailedError) -> None:
    console.print(f"[red]No usable completion: {err}[/red]")
    if err.attempts:
        table = Table(title="Attempts")
        table.add_column("Backend")
        table.add_column("#", justify="right")
        table.add_column("Outcome")
        for a in err.attempts:
            outcome = "success" if a.success else a.failure_kind.value
            table.add_row(a.backend_id, str(a.attempt_number), outcome)
        console.print(table)


def _print_usage(refiner: ResumeRefiner) -> None:
    summary = refiner.llm.get_token_summary()
    cost = calculate_cost(summary["calls"])
    console.print(
        f"[dim]Tokens: {summary['input']} in / {summary['output']} out "
        f"| est. ${cost:.4f}[/dim]"
    )


def _run_refine(
    refiner: ResumeRefiner,
    jd_text: str,
    raw_text: str,
    out_dir: Path,
    system_prompt: str,
) -> tuple[RefineResult, Path]:
    with console.status("Refining resume...") as status:

        def on_phase(phase: str, detail: str) -> None:
            status.update(detail)

        result = asyncio.run(
            refiner.refine(jd_text, raw_text, system_prompt=system_prompt, on_phase=on_phase)
        )

    docx_path = out_dir / refined_docx_name(jd_text)
    refiner.render(result.blocks, docx_path)
    docx_path.with_suffix(".txt").write_text(result.text, encoding="utf-8")
    return result, docx_path


@app.command()
def tailor(
    company: str = typer.Option(..., "--company", help="Target company"),
    job_title: str = typer.Option(..., "--job-title", help="Target job title"),
    jd: Path = typer.Option(..., "--job-desc-file", help="Job description text file"),
    resume: Path = typer.Option(..., "--resume", help="Base resume (PDF/DOCX/TXT/MD)"),
    extra: str = typer.Option("", "--extra", help="Extra instructions for the writer"),
    output: Path = typer.Option(None, "--output", "-o", help="Output markdown path"),
    system_prompt_file: Path = typer.Option(None, "--system-prompt", help="System prompt file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Write a markdown resume tailored to one job."""
    _setup_logging(verbose)
    _require(jd, "Job description")
    _require(resume, "Resume")

    try:
        config = load_config()
        system_prompt = load_system_prompt(system_prompt_file)
        jd_text = load_job_description(jd)
        resume_text = load_resume(resume)
    except (FileNotFoundError, ValueError) as err:
        _report_input_error(err)
        raise typer.Exit(1)

    refiner = _make_refiner(config)
    try:
        with console.status("Tailoring resume..."):
            result = asyncio.run(
                refiner.tailor(
                    company,
                    job_title,
                    jd_text,
                    resume_text,
                    extra,
                    system_prompt=system_prompt,
                )
            )
    except AllFailedError as err:
        _report_failure(err)
        raise typer.Exit(1)

    if output is None:
        output = Path("output") / tailored_markdown_name(company, job_title)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.text, encoding="utf-8")
    console.print(f"[green]Tailored resume written to: {output}[/green] ({result.backend_id})")
    _print_usage(refiner)


@app.command()
def refine(
    jd: Path = typer.Option(..., "--job-desc-file", help="Job description text file"),
    raw: Path = typer.Option(..., "--raw-file", help="Resume text to refine"),
    out_dir: Path = typer.Option(Path("output"), "--out-dir", help="Output directory"),
    system_prompt_file: Path = typer.Option(None, "--system-prompt", help="System prompt file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Rewrite a resume into tagged sections and render it as DOCX."""
    _setup_logging(verbose)
    _require(jd, "Job description")
    _require(raw, "Raw resume")

    try:
        config = load_config()
        system_prompt = load_system_prompt(system_prompt_file)
        jd_text = load_job_description(jd)
        raw_text = load_resume(raw)
    except (FileNotFoundError, ValueError) as err:
        _report_input_error(err)
        raise typer.Exit(1)

    refiner = _make_refiner(config)
    try:
        result, docx_path = _run_refine(refiner, jd_text, raw_text, out_dir, system_prompt)
    except AllFailedError as err:
        _report_failure(err)
        raise typer.Exit(1)

    console.print(
        Panel(
            f"Backend: {result.completion.backend_id} "
            f"({len(result.completion.attempts)} attempt(s))\n"
            f"Sections: {', '.join(result.sections) or '(none)'}\n"
            f"Elapsed: {result.elapsed_seconds:.1f}s",
            title="Refined resume",
        )
    )
    console.print(f"[green]DOCX saved: {docx_path}[/green]")
    _print_usage(refiner)


@app.command()
def render(
    tagged: Path = typer.Argument(help="Tagged resume text file"),
    output: Path = typer.Option(None, "--output", "-o", help="Output .docx path"),
) -> None:
    """Render an already tagged resume to DOCX without calling any backend."""
    _require(tagged, "Tagged resume")
    try:
        config = load_config()
    except ValueError as err:
        _report_input_error(err)
        raise typer.Exit(1)
    refiner = _make_refiner(config)

    sections, blocks = refiner.build_document(tagged.read_text(encoding="utf-8"))
    if not sections:
        console.print("[yellow]No recognized sections found.[/yellow]")

    output = output or tagged.with_suffix(".docx")
    refiner.render(blocks, output)
    console.print(f"[green]DOCX saved: {output}[/green] ({len(blocks)} blocks)")


@app.command()
def pipeline(
    company: str = typer.Option(..., "--company", help="Target company"),
    job_title: str = typer.Option(..., "--job-title", help="Target job title"),
    jd: Path = typer.Option(..., "--job-desc-file", help="Job description text file"),
    resume: Path = typer.Option(..., "--resume", help="Base resume (PDF/DOCX/TXT/MD)"),
    extra: str = typer.Option("", "--extra", help="Extra instructions for the writer"),
    jobs_dir: Path = typer.Option(Path("jobs"), "--jobs-dir", help="Root folder for job outputs"),
    system_prompt_file: Path = typer.Option(None, "--system-prompt", help="System prompt file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Tailor pass, then refine pass on its output."""
    _setup_logging(verbose)
    _require(jd, "Job description")
    _require(resume, "Resume")

    try:
        config = load_config()
        system_prompt = load_system_prompt(system_prompt_file)
        jd_text = load_job_description(jd)
        resume_text = load_resume(resume)
    except (FileNotFoundError, ValueError) as err:
        _report_input_error(err)
        raise typer.Exit(1)

    refiner = _make_refiner(config)

    job_folder = jobs_dir / job_folder_name(company, job_title)
    raw_file = job_folder / "raw.txt"

    try:
        with console.status("Phase 1: tailoring resume..."):
            tailored = asyncio.run(
                refiner.tailor(
                    company,
                    job_title,
                    jd_text,
                    resume_text,
                    extra,
                    system_prompt=system_prompt,
                )
            )
        job_folder.mkdir(parents=True, exist_ok=True)
        raw_file.write_text(tailored.text, encoding="utf-8")

        _, docx_path = _run_refine(
            refiner, jd_text, tailored.text, job_folder / "phase2", system_prompt
        )
    except AllFailedError as err:
        _report_failure(err)
        raise typer.Exit(1)

    console.print("[green]Full pipeline complete.[/green]")
    console.print(f"Phase-1 raw: {raw_file}")
    console.print(f"Phase-2 DOCX: {docx_path}")
    _print_usage(refiner)


if __name__ == "__main__":
    app()
