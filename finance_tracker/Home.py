"""Main entry point for the Streamlit multi-page tracker.

This file enables Streamlit's automatic page discovery and renders the
dashboard view.  Pages in the pages/ directory appear in the sidebar.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from finance_tracker.views import render_view


def main():
    render_view("dashboard")


if __name__ == "__main__":
    main()
