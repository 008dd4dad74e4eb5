import sys
from pathlib import Path

import pytest

# Put 'src' on sys.path before collection so the top-level packages
# (common, schema, dal, inference, formgen) import without installation.

if sys.version_info < (3, 10):
    print(
        f"ERROR: This project requires Python 3.10+ (found {sys.version.split()[0]}).",
        file=sys.stderr,
    )
    sys.exit(1)


ROOT_DIR = Path(__file__).parent.absolute()
src_dir = ROOT_DIR / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def _isolated_formgen_env(monkeypatch):
    """Keep developer shells from leaking sampling/LLM settings into tests."""
    for name in (
        "MONGODB_URI",
        "FORMGEN_PRIMARY_SAMPLE_LIMIT",
        "FORMGEN_TARGET_SAMPLE_LIMIT",
        "FORMGEN_PREVIEW_VALUES",
        "FORMGEN_PREVIEW_MAX_CHARS",
        "FORMGEN_TRACE_SAMPLING",
        "SCHEMA_MERGE_POLICY",
        "LLM_PROVIDER",
        "LLM_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
