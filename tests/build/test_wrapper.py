"""
Tests for linker wrapper staging.
"""

import os
import sys
from unittest.mock import patch

import pytest
from filelock import Timeout as LockTimeout

from rustndk.build.wrapper import WRAPPER_FILES, stage_linker_wrappers


class TestStageLinkerWrappers:
    def test_stages_all_files(self, tmp_path):
        wrapper_dir = stage_linker_wrappers(tmp_path)

        assert wrapper_dir == tmp_path / "linker-wrapper"
        for name in WRAPPER_FILES:
            assert (wrapper_dir / name).is_file()

    def test_python_wrapper_content(self, tmp_path):
        wrapper_dir = stage_linker_wrappers(tmp_path)

        content = (wrapper_dir / "linker-wrapper.py").read_text()
        assert "RUST_ANDROID_GRADLE_CC" in content
        assert "-lunwind" in content

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_executable(self, tmp_path):
        wrapper_dir = stage_linker_wrappers(tmp_path)

        assert os.access(wrapper_dir / "linker-wrapper.sh", os.X_OK)

    def test_idempotent(self, tmp_path):
        wrapper_dir = stage_linker_wrappers(tmp_path)
        script = wrapper_dir / "linker-wrapper.sh"
        mtime = script.stat().st_mtime_ns

        stage_linker_wrappers(tmp_path)

        assert script.stat().st_mtime_ns == mtime

    def test_replaces_modified_file(self, tmp_path):
        wrapper_dir = stage_linker_wrappers(tmp_path)
        script = wrapper_dir / "linker-wrapper.py"
        original = script.read_bytes()
        script.write_text("tampered")

        stage_linker_wrappers(tmp_path)

        assert script.read_bytes() == original

    def test_lock_timeout_reraised(self, tmp_path, caplog):
        with patch("rustndk.build.wrapper.FileLock") as mock_lock:
            mock_lock.return_value.__enter__.side_effect = LockTimeout(str(tmp_path))

            with pytest.raises(LockTimeout):
                stage_linker_wrappers(tmp_path, timeout=1)

        assert "Could not acquire linker wrapper lock" in caplog.text
