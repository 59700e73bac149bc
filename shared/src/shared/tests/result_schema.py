"""
Output protocol for test results.

Results are printed as one JSON document between two marker lines so that
an orchestrator can extract them from mixed stdout.
"""

import json
from typing import Any, Dict, Optional

SCHEMA_VERSION = "1.0"

START_MARKER = "===LABORANT_RESULTS==="
END_MARKER = "===LABORANT_RESULTS_END==="


def format_output(data: Dict[str, Any]) -> str:
    """Wrap a result dictionary in the output markers."""
    payload = {"schema_version": SCHEMA_VERSION, **data}
    json_str = json.dumps(payload, indent=2, default=str)
    return f"{START_MARKER}\n{json_str}\n{END_MARKER}"


def parse_test_output(stdout: str) -> Optional[Dict[str, Any]]:
    """Extract the result dictionary from captured stdout, if present."""
    start_idx = stdout.find(START_MARKER)
    end_idx = stdout.find(END_MARKER)
    if start_idx == -1 or end_idx == -1 or end_idx < start_idx:
        return None

    json_str = stdout[start_idx + len(START_MARKER) : end_idx].strip()
    try:
        return json.loads(json_str)
    except json.JSONDecodeError:
        return None
