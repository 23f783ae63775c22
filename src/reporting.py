"""Plain-text views of a hunt report: the candidate list and the run log."""

from src.core.schemas import HuntReport, PersistenceResult, PlatformDebugLog

_RULE = "-" * 72


def render_candidates(report: HuntReport) -> str:
    """Render the ranked shortlist with the job header and summary."""
    job = report.job
    summary = report.summary
    lines = [
        f"Job: {job.role} ({job.seniority}) @ {job.location}",
        _RULE,
    ]

    if not report.candidates:
        lines.append("No candidates found. Try other keywords.")
    for rank, c in enumerate(report.candidates, start=1):
        lines.append(f"#{rank} {c.name} [{c.platform.upper()}] score {c.score}/100")
        if c.location:
            lines.append(f"    location: {c.location}")
        if c.profile_url:
            lines.append(f"    profile:  {c.profile_url}")
        if c.rationale:
            lines.append(f"    why:      {c.rationale}")

    lines.append(_RULE)
    lines.append(
        f"{summary.top_candidates_count} of {summary.total_candidates} candidates shown | "
        f"average {summary.average_score:.2f} | highest {summary.highest_score}"
    )
    if report.platform_stats:
        stats = ", ".join(f"{k}={v}" for k, v in report.platform_stats.items())
        lines.append(f"Platforms: {stats}")
    return "\n".join(lines)


def render_log(
    debug_log: PlatformDebugLog | None,
    persistence: PersistenceResult | None = None,
    analyzer_error: str | None = None,
) -> str:
    """Render the per-platform diagnostic log and the persistence outcome."""
    lines: list[str] = []
    if analyzer_error:
        lines.append(f"[analyzer] error: {analyzer_error}")

    if debug_log is not None:
        lines.append(f"[search] {debug_log.timestamp.isoformat(timespec='seconds')} "
                     f"mode={debug_log.mode}")
        used = debug_log.input.get("keywords_used", debug_log.input.get("keywords"))
        if used is not None:
            lines.append(f"[search] keywords: {used}")
        for platform, entry in debug_log.platforms.items():
            line = f"[{platform}] {entry.name}: {entry.candidates_count} candidates"
            if entry.note:
                line += f" ({entry.note})"
            lines.append(line)
            lines.extend(f"[{platform}]   error: {err}" for err in entry.errors)

    if persistence is not None:
        lines.append(
            f"[airtable] saved={persistence.saved_count} failed={persistence.failure_count}"
        )
        lines.extend(f"[airtable]   {entry}" for entry in persistence.logs)
        if persistence.error:
            lines.append(f"[airtable]   error: {persistence.error}")
    return "\n".join(lines)
