"""Pretty console output for the denial classifier.

This module provides user-friendly terminal output with:
- Emojis for visual scanning
- A running progress indicator
- Category and payer breakdowns
- Final summary statistics

Usage:
    from utils.console import console
    console.start("Denial Classifier")
    console.progress(3, 10)
    console.classification_summary(stats, "out/results.json")

Design principles:
- Isolated from logging (file logs are separate)
- Stateless methods (no side effects beyond printing)
- Configurable via environment variables
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ConsoleConfig:
    """Configuration for console output behavior."""
    max_error_length: int = 120
    bar_width: int = 30
    box_width: int = 50

    @classmethod
    def from_env(cls) -> "ConsoleConfig":
        """Load configuration from environment variables."""
        return cls(
            max_error_length=int(os.getenv("CONSOLE_MAX_ERROR_LEN", "120")),
        )


class Console:
    """Pretty console output handler for pipeline operations.

    All output goes to stdout and is designed to be human-readable.
    For machine-readable logs, use the logging module instead.
    """

    def __init__(self, config: Optional[ConsoleConfig] = None):
        self.config = config or ConsoleConfig.from_env()

    # ==================== Helpers ====================

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis if too long."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 3] + "..."

    def _print(self, *args, **kwargs) -> None:
        """Print to stdout with flush."""
        print(*args, **kwargs, flush=True)

    # ==================== Phase Indicators ====================

    def start(self, message: str, detail: Optional[str] = None) -> None:
        """Display pipeline/phase start message."""
        self._print(f"\n🩺 {message}")
        if detail:
            self._print(f"   └─ {detail}")

    def error(self, message: str, detail: Optional[str] = None) -> None:
        """Display error message on stderr."""
        self._print(f"\n❌ {message}", file=sys.stderr)
        if detail:
            self._print(f"   └─ {detail}", file=sys.stderr)

    def warning(self, message: str, detail: Optional[str] = None) -> None:
        self._print(f"\n⚠️  {message}")
        if detail:
            self._print(f"   └─ {detail}")

    def info(self, message: str, detail: Optional[str] = None) -> None:
        self._print(f"\n📋 {message}")
        if detail:
            self._print(f"   └─ {detail}")

    # ==================== Classification ====================

    def classification_start(self, total_claims: int) -> None:
        self._print(f"\n🤖 Processing {total_claims} claim(s)...")

    def progress(self, current: int, total: int) -> None:
        """Overwrite the current line with a progress bar."""
        pct = current / total if total > 0 else 0
        filled = int(self.config.bar_width * pct)
        bar = "█" * filled + "░" * (self.config.bar_width - filled)
        self._print(f"\r   [{bar}] {current}/{total} ({pct*100:.1f}%)", end="")

    def progress_done(self) -> None:
        self._print()

    # ==================== Final Summary ====================

    def classification_summary(
        self,
        stats: Dict[str, Any],
        output_path: str,
        elapsed: Optional[float] = None,
    ) -> None:
        """Display totals, category and payer counts, and failed claims."""
        self._print(f"\n📊 Processing Summary")
        self._print("=" * self.config.box_width)
        self._print(f"Total Claims: {stats['total']}")
        self._print(f"✅ Successful: {stats['successful']}")
        self._print(f"❌ Failed: {stats['failed']}")

        if stats["category_counts"]:
            self._print("\n📋 Categories Found:")
            for category, count in stats["category_counts"].items():
                self._print(f"  • {category}: {count}")

        if stats["payer_counts"]:
            self._print("\n🏥 Payers Identified:")
            for payer, count in stats["payer_counts"].items():
                self._print(f"  • {payer}: {count}")

        if stats["failed_claims"]:
            self._print("\n⚠️  Failed Claims:")
            for item in stats["failed_claims"]:
                error = self._truncate(str(item["error"]), self.config.max_error_length)
                self._print(f"  • Claim {item['id']}: {error}")

        self._print(f"\n💾 Saved: {output_path}")
        if elapsed is not None:
            self._print(f"⏱️  Total: {elapsed:.1f}s")

    # ==================== Pipeline Status ====================

    def pipeline_finished(self, success: bool = True) -> None:
        """Display pipeline completion status."""
        self._print(f"\n{'─' * self.config.box_width}")
        if success:
            self._print("✨ Processing complete!")
        else:
            self._print("💥 Processing failed!")
        self._print(f"{'─' * self.config.box_width}\n")

    def interrupted(self) -> None:
        """Display interruption message."""
        self._print("\n\n⏹️  Process interrupted by user")
        self._print("   └─ No output file was written")


# ==================== Singleton Instance ====================
# This allows: from utils.console import console
console = Console()

__all__ = ["Console", "ConsoleConfig", "console"]
