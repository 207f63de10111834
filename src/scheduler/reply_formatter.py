"""
Rendering progress and summary replies in Telegram HTML
"""
from config.settings import Config
from utils.validators import DataSanitizer

SUCCESS_TITLE = "Event successfully created"
NOTES_TITLE = "Other notes"
DIVIDER = "------------------------------------"
FILLED_CELL = "█"
EMPTY_CELL = "░"


def progress_percentage(completed: int, total: int) -> int:
    if total <= 0:
        return 100
    # half-up like Math.round, not banker's rounding
    return int(completed / total * 100 + 0.5)


def render_progress_bar(percentage: int, cells: int = Config.PROGRESS_BAR_CELLS) -> str:
    filled = min(cells, max(0, percentage * cells // 100))
    return FILLED_CELL * filled + EMPTY_CELL * (cells - filled)


def render_progress(completed: int, total: int) -> str:
    percentage = progress_percentage(completed, total)
    return f"{Config.PROCESSING_MESSAGE}\n[{render_progress_bar(percentage)}] {percentage}%"


def format_created_line(result) -> str:
    summary = DataSanitizer.escape_html(result.summary)
    url = DataSanitizer.escape_html(result.url)
    return f'✅ {summary} <a href="{url}">View</a>'


def format_note_line(note: str) -> str:
    return f"🗒 {DataSanitizer.escape_html(note)}"


def render_reply(outcome) -> str:
    """
    Final summary: created events, then other notes

    Each block appears only when it has lines; the divider only sits
    between two blocks.
    """
    blocks = []

    if outcome.created:
        lines = "\n".join(format_created_line(result) for result in outcome.created)
        blocks.append(f"<b>{SUCCESS_TITLE}</b>\n<blockquote>{lines}</blockquote>")

    if outcome.other:
        lines = "\n".join(format_note_line(note) for note in outcome.other)
        blocks.append(f"<b>{NOTES_TITLE}</b>\n<blockquote>{lines}</blockquote>")

    return f"\n{DIVIDER}\n".join(blocks)
