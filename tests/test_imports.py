"""Each module must be importable on its own, in a fresh interpreter."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"

MODULES = [
    "pdfcollate.services.pdf_codec",
    "pdfcollate.services.source_loader",
    "pdfcollate.services.export_service",
    "pdfcollate.services.archive",
    "pdfcollate.editor.page_model",
    "pdfcollate.editor.session",
    "pdfcollate.editor",
    "pdfcollate.utils.config_manager",
    "pdfcollate.cli",
]


class TestFreshImport:
    @pytest.mark.parametrize("module", MODULES)
    def test_module_imports_first(self, module):
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
        )
        result = subprocess.run(
            [sys.executable, "-c", f"import {module}"],
            capture_output=True,
            text=True,
            env=env,
            timeout=60,
        )
        assert result.returncode == 0, result.stderr
