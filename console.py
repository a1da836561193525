"""
Benford Gate Console - Terminal Style Output

Provides colored console output and the shared logger for Benford gate runs.
"""

import logging
import sys
from datetime import datetime


# ANSI color codes
class Colors:
    RED = "\033[31m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_BLACK = "\033[90m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"
    BRIGHT_WHITE = "\033[97m"

    BG_RED = "\033[41m"

    BOLD = "\033[1m"
    DIM = "\033[2m"

    RESET = "\033[0m"


class Theme:
    ACCENT = Colors.BRIGHT_YELLOW
    DATA = Colors.BRIGHT_CYAN
    SUCCESS = Colors.BRIGHT_GREEN
    WARNING = Colors.YELLOW
    ERROR = Colors.BRIGHT_RED
    CRITICAL = Colors.BRIGHT_RED + Colors.BOLD
    INFO = Colors.WHITE
    DEBUG = Colors.BRIGHT_BLACK
    HEADER = Colors.BRIGHT_WHITE + Colors.BOLD
    DIVIDER = Colors.BRIGHT_BLACK
    VALUE = Colors.BRIGHT_WHITE
    LABEL = Colors.CYAN
    TIMESTAMP = Colors.BRIGHT_BLACK


GATE_BANNER = r"""
{accent}┌──────────────────────────────────────────────────────────────────┐
│ {white}BENFORD GATE{accent}   {cyan}First-digit conformance routing for documents{accent}    │
│ {dim}chi-squared goodness of fit · df=8{accent}                               │
└──────────────────────────────────────────────────────────────────┘{reset}
"""

GATE_TINY = "{accent}◆ BENFORD GATE{reset} {dim}│{reset} {cyan}First-digit conformance routing{reset}"


def format_banner(style: str = "mini") -> str:
    template = GATE_BANNER if style == "mini" else GATE_TINY
    return template.format(
        accent=Theme.ACCENT,
        white=Colors.BRIGHT_WHITE,
        cyan=Theme.DATA,
        dim=Colors.DIM,
        reset=Colors.RESET
    )


# Relationship name -> (color, icon)
VERDICT_STYLES = {
    "NON_CONFORMING": (Theme.ERROR, "✗"),
    "SUSPECT": (Colors.BG_RED + Colors.BRIGHT_WHITE, "✗"),
    "CONFORMING": (Theme.SUCCESS, "✓"),
    "NOT_SUSPECT": (Theme.SUCCESS, "✓"),
    "INSUFFICIENT_SAMPLE": (Theme.WARNING, "…"),
}


class GateLogger(logging.Logger):
    """Logger with terminal-style formatting plus report helpers."""

    def __init__(self, name: str = "benford_gate", level: int = logging.INFO, stream=None):
        super().__init__(name, level)
        self.stream = stream
        self._setup_handler()

    def _setup_handler(self):
        handler = logging.StreamHandler(self.stream or sys.stderr)
        handler.setFormatter(GateFormatter())
        self.addHandler(handler)

    def _out(self, text: str = ""):
        print(text, file=self.stream or sys.stdout)

    def banner(self, style: str = "mini"):
        self._out(format_banner(style))

    def section(self, title: str):
        """Print a section header."""
        line = "━" * 70
        self._out(f"\n{Theme.DIVIDER}{line}{Colors.RESET}")
        self._out(f"{Theme.HEADER}  {title.upper()}{Colors.RESET}")
        self._out(f"{Theme.DIVIDER}{line}{Colors.RESET}\n")

    def metric(self, label: str, value: str, unit: str = "", status: str = ""):
        status_color = {"good": Theme.SUCCESS, "warning": Theme.WARNING, "bad": Theme.ERROR}.get(status, "")
        unit_str = f" {Colors.DIM}{unit}{Colors.RESET}" if unit else ""
        self._out(f"  {Theme.LABEL}{label:.<30}{Colors.RESET} {status_color}{Theme.VALUE}{value}{Colors.RESET}{unit_str}")

    def verdict(self, relationship: str, source: str, sample_size: int, detail: str = ""):
        """Print one routed document."""
        color, icon = VERDICT_STYLES.get(relationship, (Theme.INFO, "•"))
        self._out(f"  {color}{icon} {relationship:20}{Colors.RESET} │ {Theme.VALUE}{source:30}{Colors.RESET} │ "
                  f"{Theme.DATA}n={sample_size:<6}{Colors.RESET} │ {detail}")

    def status(self, message: str, status: str = "info"):
        icons = {
            "info": ("ℹ", Theme.INFO),
            "success": ("✓", Theme.SUCCESS),
            "warning": ("⚠", Theme.WARNING),
            "error": ("✗", Theme.ERROR),
        }

        icon, color = icons.get(status, ("•", Theme.INFO))
        timestamp = datetime.now().strftime("%H:%M:%S")
        self._out(f"  {Theme.TIMESTAMP}[{timestamp}]{Colors.RESET} {color}{icon}{Colors.RESET} {message}")

    def divider(self, char: str = "─", width: int = 70):
        self._out(f"  {Theme.DIVIDER}{char * width}{Colors.RESET}")


class GateFormatter(logging.Formatter):
    """Short level tags and millisecond timestamps."""

    FORMATS = {
        logging.DEBUG: f"{Theme.DEBUG}DBG{Colors.RESET}",
        logging.INFO: f"{Theme.INFO}INF{Colors.RESET}",
        logging.WARNING: f"{Theme.WARNING}WRN{Colors.RESET}",
        logging.ERROR: f"{Theme.ERROR}ERR{Colors.RESET}",
        logging.CRITICAL: f"{Theme.CRITICAL}CRT{Colors.RESET}",
    }

    def format(self, record):
        level_str = self.FORMATS.get(record.levelno, "???")
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        return f"  {Theme.TIMESTAMP}{timestamp}{Colors.RESET} {level_str} {record.getMessage()}"


# Global logger instance
logger = GateLogger()


def print_scan_header(config, document_count: int):
    """Print the configuration a scan runs with."""
    logger.banner("mini")
    logger.section("SCAN CONFIGURATION")
    logger.metric("Routing Mode", config.mode.value.upper())
    logger.metric("Significance (alpha)", f"{config.alpha:g}")
    logger.metric("Minimum Sample", "NONE" if config.min_sample is None else str(config.min_sample))
    logger.metric("Zero-Sample Policy", "INSUFFICIENT" if config.strict_minimum else "LEGACY")
    logger.metric("Documents", f"{document_count:,}")
    logger._out()


def print_scan_results(counts: dict[str, int], failed: int = 0):
    """Print per-relationship totals."""
    logger.section("SCAN RESULTS")
    total = sum(counts.values())
    logger.metric("Documents Routed", f"{total:,}", status="good")
    if failed:
        logger.metric("Unreadable", f"{failed:,}", status="bad")

    logger._out()
    logger.divider()
    for name, count in counts.items():
        color, _ = VERDICT_STYLES.get(name, (Theme.INFO, "•"))
        if count:
            logger._out(f"  {color}  {name:<20}{Colors.RESET}  {Theme.VALUE}{count:>5}{Colors.RESET}")
        else:
            logger._out(f"  {Colors.DIM}  {name:<20}{Colors.RESET}  {Colors.DIM}{count:>5}{Colors.RESET}")
    logger.divider()
    logger._out()


def success(msg: str): logger.status(msg, "success")
def error(msg: str): logger.status(msg, "error")
