"""Plugin output rendering."""

from check_proc_mem.models import AggregateResult, Status
from check_proc_mem.units import convert

PLUGIN_NAME = "check_proc_mem"


def format_value(value: float) -> str:
    """Format a number with up to 15 significant digits."""
    return f"{value:.15g}"


def _perf_entry(
    label: str, value: float, unit: str, warning: str | None, critical: str | None
) -> str:
    """Format one perfdata entry with its optional thresholds."""
    entry = f"{label}={format_value(value)}{unit}"
    if warning is not None:
        entry += f";{warning}"
    if critical is not None:
        entry += f";{critical}"
    return entry


def render(
    aggregate: AggregateResult,
    page_size: int,
    unit: str,
    status: Status,
    warning: str | None = None,
    critical: str | None = None,
) -> str:
    """
    Render the plugin status line with its performance data.

    Format:
        check_proc_mem STATUS - <total><unit> | <name>=<v><unit>[;w][;c] ...
        total=<v><unit>[;w][;c]
    """
    total = format_value(convert(aggregate.grand_total, page_size, unit))
    perfdata = [
        _perf_entry(name, convert(pages, page_size, unit), unit, warning, critical)
        for name, pages in aggregate.sorted_totals()
    ]
    perfdata.append(
        _perf_entry(
            "total",
            convert(aggregate.grand_total, page_size, unit),
            unit,
            warning,
            critical,
        )
    )
    return f"{PLUGIN_NAME} {status.name} - {total}{unit} | {' '.join(perfdata)}"


def render_error(message: str) -> str:
    """Render a fatal error line."""
    return f"{Status.UNKNOWN.name} ERROR: {message}"


def render_verbose(aggregate: AggregateResult, page_size: int, unit: str) -> list[str]:
    """Diagnostic lines printed ahead of the status line with --verbose."""
    lines = [f"Pagesize: {page_size}"]
    lines.extend(
        f"{name} Rss pages used: {pages}" for name, pages in aggregate.sorted_totals()
    )
    lines.append(f"Total Rss pages used: {aggregate.grand_total}")
    lines.append(f"Total Rss bytes used: {aggregate.grand_total * page_size}")
    lines.append(f"Perf data unit of measure: {unit}")
    return lines
