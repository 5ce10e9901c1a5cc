"""
Storm Report - Centralized Path Configuration
==============================================

This module provides centralized path management for the storm report.
Import it wherever a script reads or writes project files.

Usage:
    from storm_report.config_paths import RAW_DATA_DIR, PROCESSED_DATA_DIR, FIGURES_DIR

    df = pd.read_csv(RAW_DATA_DIR / 'StormData.csv.bz2')
    clean.to_csv(PROCESSED_DATA_DIR / 'storm_events_clean.csv', index=False)
"""

from pathlib import Path
import sys

# ==============================================================================
# PROJECT ROOT DETECTION
# ==============================================================================

_ROOT_INDICATORS = ['pyproject.toml', 'README.md', '.git']


def find_project_root():
    """
    Find project root by looking for key indicators.
    Searches upward from current file location.
    """
    current = Path(__file__).resolve().parent

    for indicator in _ROOT_INDICATORS:
        if (current / indicator).exists():
            return current

    # Search up to 3 parent levels
    for parent in current.parents[:3]:
        for indicator in _ROOT_INDICATORS:
            if (parent / indicator).exists():
                return parent

    # Fallback: parent of storm_report/
    return current.parent


PROJECT_ROOT = find_project_root()

# ==============================================================================
# DIRECTORY PATHS
# ==============================================================================

CONFIG_DIR = PROJECT_ROOT / 'config'

# Data directories
DATA_DIR = PROJECT_ROOT / 'data'
RAW_DATA_DIR = DATA_DIR / 'raw'
PROCESSED_DATA_DIR = DATA_DIR / 'processed'

# Results directories
RESULTS_DIR = PROJECT_ROOT / 'results'
FIGURES_DIR = RESULTS_DIR / 'figures'
TABLES_DIR = RESULTS_DIR / 'tables'
REPORTS_DIR = RESULTS_DIR / 'reports'

LOGS_DIR = PROJECT_ROOT / 'logs'

# ==============================================================================
# DIRECTORY CREATION
# ==============================================================================


def ensure_directories():
    """Create all necessary directories if they don't exist."""
    directories = [
        CONFIG_DIR,
        RAW_DATA_DIR,
        PROCESSED_DATA_DIR,
        FIGURES_DIR,
        TABLES_DIR,
        REPORTS_DIR,
        LOGS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


# ==============================================================================
# UTF-8 ENCODING (Windows PowerShell fix)
# ==============================================================================

if sys.platform == 'win32':
    try:
        sys.stdout.reconfigure(encoding='utf-8')
        sys.stderr.reconfigure(encoding='utf-8')
    except AttributeError:
        pass

# ==============================================================================
# VERIFICATION
# ==============================================================================

if __name__ == "__main__":
    from rich.console import Console
    from rich.table import Table

    ensure_directories()

    console = Console()
    table = Table(title="Storm Report Path Configuration", show_header=True)
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Path", style="green")
    table.add_column("Exists?", style="yellow")

    paths = {
        'PROJECT_ROOT': PROJECT_ROOT,
        'CONFIG_DIR': CONFIG_DIR,
        'RAW_DATA_DIR': RAW_DATA_DIR,
        'PROCESSED_DATA_DIR': PROCESSED_DATA_DIR,
        'FIGURES_DIR': FIGURES_DIR,
        'TABLES_DIR': TABLES_DIR,
        'REPORTS_DIR': REPORTS_DIR,
        'LOGS_DIR': LOGS_DIR,
    }

    for name, path in paths.items():
        exists = "✓" if path.exists() else "✗"
        table.add_row(name, str(path), exists)

    console.print(table)
    console.print("\n[bold green]All paths verified![/bold green]")
