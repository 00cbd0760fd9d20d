"""
Professional Logging Module for webflow-reset
Provides formatted console logging with statistics tracking for:
- Item discovery (pagination)
- Reference clearing & deletion
- Rate limiting
- Site republishing & webhook cleanup
"""

import logging
from datetime import datetime
from typing import Dict

# Statistics tracker
class ResetStats:
    """Track the statistics of one reset run"""

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset all counters"""
        self.items_found = 0
        self.references_cleared = 0
        self.items_deleted = 0
        self.rate_limits_hit = 0
        self.sites_republished = 0
        self.webhooks_removed = 0
        self.start_time = datetime.now()

    def get_summary(self) -> Dict:
        """Get formatted statistics summary"""
        duration = (datetime.now() - self.start_time).total_seconds()

        return {
            "duration_seconds": round(duration, 2),
            "items_found": self.items_found,
            "references_cleared": self.references_cleared,
            "items_deleted": self.items_deleted,
            "rate_limits_hit": self.rate_limits_hit,
            "sites_republished": self.sites_republished,
            "webhooks_removed": self.webhooks_removed,
            "deletion_rate": f"{(self.items_deleted / max(self.items_found, 1)) * 100:.1f}%",
            "throughput_per_second": round(self.items_deleted / max(duration, 1), 2)
        }


class ProfessionalLogger:
    """Enhanced logger with formatted output"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def header(self, title: str, width: int = 80):
        """Log a section header"""
        self.logger.info("")
        self.logger.info("=" * width)
        self.logger.info(f"🎯 {title}")
        self.logger.info("=" * width)

    def section(self, title: str):
        """Log a subsection"""
        self.logger.info(f"📂 {title}")
        self.logger.info("-" * 60)

    def metric(self, label: str, value, icon: str = "📊"):
        """Log a metric"""
        self.logger.info(f"   {icon} {label}: {value}")

    def success(self, message: str):
        """Log a success"""
        self.logger.info(f"✅ {message}")

    def warning(self, message: str):
        """Log a warning"""
        self.logger.warning(f"⚠️  {message}")

    def error(self, message: str):
        """Log an error"""
        self.logger.error(f"❌ {message}")

    def print_stats(self, stats: ResetStats):
        """Print comprehensive statistics summary"""
        summary = stats.get_summary()

        self.header("RESET STATISTICS")

        self.section("Items")
        self.metric("Found", summary["items_found"], "📥")
        self.metric("References Cleared", summary["references_cleared"], "🔗")
        self.metric("Deleted", summary["items_deleted"], "🗑️")
        self.metric("Deletion Rate", summary["deletion_rate"], "📊")

        self.section("Sites")
        self.metric("Republished", summary["sites_republished"], "🚀")
        self.metric("Webhooks Removed", summary["webhooks_removed"], "🪝")

        self.section("Performance")
        self.metric("Rate Limits Hit", summary["rate_limits_hit"], "🚦")
        self.metric("Duration", f"{summary['duration_seconds']}s", "⏱️")
        self.metric("Throughput", f"{summary['throughput_per_second']} items/sec", "⚡")

        self.logger.info("=" * 80)


# Helper to get professional logger
def get_professional_logger(name: str) -> ProfessionalLogger:
    """Get a professional logger instance"""
    return ProfessionalLogger(name)
