"""Markdown rendering of a RealTimeAnalysis."""

from __future__ import annotations

from necassist.models.analysis import RealTimeAnalysis, Severity


def render_markdown(analysis: RealTimeAnalysis) -> str:
    """Render the analysis as a Markdown compliance report."""
    lines: list[str] = []

    lines.append(f"# NEC Compliance Report — {analysis.analysis_id}")
    lines.append("")
    lines.append(f"**Compliance:** {analysis.overall_compliance}%")
    lines.append(f"**Analyzed:** {analysis.timestamp.strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append(
        f"**Violations:** {analysis.critical_violations} critical, "
        f"{analysis.major_violations} major, {analysis.minor_violations} minor, "
        f"{analysis.warnings} warnings"
    )
    if analysis.partial:
        failed = ", ".join(f.analyzer for f in analysis.failures)
        lines.append(f"**Partial result:** analyzers failed: {failed}")
    lines.append("")

    if analysis.violations:
        lines.append("## Violations")
        lines.append("")
        lines.append("| Severity | Section | Title | Current | Required |")
        lines.append("|----------|---------|-------|---------|----------|")
        for v in sorted(analysis.violations, key=lambda v: _SEVERITY_ORDER[v.severity]):
            title = v.title.replace("|", "\\|")
            lines.append(
                f"| {_severity_label(v.severity)} | {v.section} | {title} "
                f"| {v.current_value} | {v.required_value} |"
            )
        lines.append("")

        lines.append("## Resolutions")
        lines.append("")
        for v in analysis.violations:
            lines.append(f"### NEC {v.section} — {v.title}")
            lines.append("")
            lines.append(v.description)
            lines.append("")
            for i, step in enumerate(v.resolution.steps, 1):
                lines.append(f"{i}. {step}")
            if v.resolution.alternatives:
                lines.append("")
                lines.append(f"*Alternatives:* {'; '.join(v.resolution.alternatives)}")
            if v.why_it_matters:
                lines.append("")
                lines.append(f"*Why it matters:* {v.why_it_matters}")
            lines.append("")
    else:
        lines.append("No violations found. Design complies with all checked rules.")
        lines.append("")

    if analysis.quick_fixes:
        lines.append("## Quick Fixes")
        lines.append("")
        for fix in analysis.quick_fixes:
            lines.append(f"- **{fix.description}** ({fix.difficulty}): {fix.action}")
        lines.append("")

    if analysis.suggestions:
        lines.append("## Suggestions")
        lines.append("")
        for s in analysis.suggestions:
            sections = ", ".join(s.nec_sections)
            lines.append(f"- **{s.title}** [{s.priority}] — {s.description} (NEC {sections})")
        lines.append("")

    if analysis.insights:
        lines.append("## Insights")
        lines.append("")
        for insight in analysis.insights:
            ref = f" (NEC {insight.nec_section})" if insight.nec_section else ""
            lines.append(f"- *{insight.type}* **{insight.title}**{ref}: {insight.content}")
        lines.append("")

    return "\n".join(lines)


_SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.MAJOR: 1,
    Severity.MINOR: 2,
    Severity.WARNING: 3,
}


def _severity_label(severity: Severity) -> str:
    return severity.value.upper()
