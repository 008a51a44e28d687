"""Output formatting and display for the scoreboard."""

from typing import List, Tuple

from .models import Award, ContributorMetrics
from .scoreboard import ScoreboardResult
from .scoring import SCORE_FORMULA


# ANSI color codes
GREEN = '\033[92m'
CYAN = '\033[96m'
BOLD = '\033[1m'
RESET = '\033[0m'

MEDALS = {1: '🥇', 2: '🥈', 3: '🥉'}

# Medal emoji occupy two terminal columns
RANK_WIDTH = 4
MEDAL_WIDTH = 2

ROW_FORMAT = "{} {:<25} {:>6} {:>5} {:>7} {:>6} {:>5} {:>5} {:>6} {:>8} {:>5} {:>9}"
HEADERS = ("#", "User", "Score", "PRs", "Reviews", "Small", "Mega", "Fast", "Stale", "Driveby", "Deep", "AvgMerge")

METRIC_DEFINITIONS = [
    ("PRs", "Merged pull requests authored"),
    ("Small", "PRs with < 100 lines changed (+5 bonus)"),
    ("Mega", "PRs with > 500 lines changed (-5 penalty)"),
    ("Reviews", "Code reviews submitted (approved or changes requested)"),
    ("Fast", "PRs merged within 24 hours (+5 bonus)"),
    ("Stale", "PRs that took > 5 days to merge (-3 penalty)"),
    ("Deep", "Reviews with comments > 50 chars (+3 bonus)"),
    ("Driveby", "Approvals with empty comment body (-2 penalty)"),
    ("AvgMerge", "Average time from PR creation to merge"),
]


class OutputFormatter:
    """Formats and prints the scoreboard."""

    def __init__(self, use_color: bool = True):
        """Initialize the output formatter.

        Args:
            use_color: Whether to emit ANSI color codes
        """
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{RESET}"

    def print_scoreboard(self, result: ScoreboardResult):
        """Print the banner, ranked table, formula, awards and glossary."""
        self._print_banner(result)
        self._print_table(result.ranked)

        print()
        print(SCORE_FORMULA)
        print()

        self._print_awards(result.awards)
        self._print_definitions()

    def _print_banner(self, result: ScoreboardResult):
        window = result.window
        print()
        print("=" * 48)
        print(self._color("  📊 GIT SCOREBOARD", BOLD))
        print(f"  {result.label}  •  {window.start_label} - {window.end_label}")
        print("=" * 48)
        print()

    def _print_table(self, ranked: List[Tuple[int, ContributorMetrics]]):
        print(ROW_FORMAT.format(HEADERS[0].ljust(RANK_WIDTH), *HEADERS[1:]))
        print(ROW_FORMAT.format("---".ljust(RANK_WIDTH), "-" * 25, "-" * 6, "-" * 5, "-" * 7, "-" * 6,
                                "-" * 5, "-" * 5, "-" * 6, "-" * 8, "-" * 5, "-" * 9))
        for rank, metrics in ranked:
            print(self.format_row(rank, metrics))

    def format_row(self, rank: int, metrics: ContributorMetrics) -> str:
        """Format one table row; the top three ranks get medals."""
        medal = MEDALS.get(rank)
        if medal:
            rank_cell = medal + " " * (RANK_WIDTH - MEDAL_WIDTH)
        else:
            rank_cell = str(rank).ljust(RANK_WIDTH)
        row = ROW_FORMAT.format(
            rank_cell,
            f"@{metrics.user}",
            metrics.score,
            metrics.prs,
            metrics.reviews,
            metrics.small,
            metrics.mega,
            metrics.fast,
            metrics.stale,
            metrics.driveby_reviews,
            metrics.deep_reviews,
            f"{metrics.avg_merge_hours}h",
        )
        if medal:
            return self._color(row, GREEN)
        return row

    def _print_awards(self, awards: List[Award]):
        print(self._color("--- Awards ---", BOLD))
        for award in awards:
            print(f"{award.emoji}  {award.title}: {self._color('@' + award.user, CYAN)} ({award.detail})")

    def _print_definitions(self):
        print()
        print("--- Metric Definitions ---")
        for name, description in METRIC_DEFINITIONS:
            print(f"  {name:<8} {description}")
