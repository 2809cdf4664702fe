import os
import sys

import pytest

# Add repo root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def document():
    return {
        "name": "report.pdf",
        "fields": {"permit": "A-17", "approved": True, "depth": 1520.5},
        "items": [
            {"code": "x", "qty": 1},
            {"code": "y", "qty": 2, "note": None},
        ],
        "tags": ["alpha", "beta", "gamma"],
    }
