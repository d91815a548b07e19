"""Top-level package for the Personal Finance Tracker.

The primary modules are:

* ``models`` – transaction and budget records and their validation
* ``analytics`` – pandas aggregations behind every chart and insight
* ``store`` – the session's single source of truth for both collections
* ``visualization`` – functions that generate Plotly figures
* ``views`` – the Streamlit views tying everything together

To run the tracker from the command line you can execute:

```bash
python run_tracker.py
```
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import models  # noqa: F401  # re-exported for convenience
from . import store  # noqa: F401  # re-exported for convenience

__all__ = ["analytics", "models", "store"]
