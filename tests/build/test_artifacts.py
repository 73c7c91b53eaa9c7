"""
Tests for build output discovery and staging.
"""

from pathlib import Path

from rustndk.build.artifacts import (
    cargo_output_dir,
    default_includes,
    resolve_cargo_target_dir,
    stage_artifacts,
)


class TestResolveCargoTargetDir:
    def test_default_under_module(self, tmp_path):
        assert resolve_cargo_target_dir(tmp_path) == tmp_path / "target"

    def test_configured_directory(self, tmp_path):
        assert resolve_cargo_target_dir(tmp_path, {}, {}, "/cfg") == Path("/cfg")

    def test_environment_over_configured(self, tmp_path):
        result = resolve_cargo_target_dir(
            tmp_path, {}, {"CARGO_TARGET_DIR": "/env"}, "/cfg"
        )

        assert result == Path("/env")

    def test_local_property_over_all(self, tmp_path):
        result = resolve_cargo_target_dir(
            tmp_path,
            {"rust.cargoTargetDir": "/local"},
            {"CARGO_TARGET_DIR": "/env"},
            "/cfg",
        )

        assert result == Path("/local")

    def test_empty_values_ignored(self, tmp_path):
        result = resolve_cargo_target_dir(
            tmp_path, {"rust.cargoTargetDir": ""}, {"CARGO_TARGET_DIR": ""}, ""
        )

        assert result == tmp_path / "target"


class TestCargoOutputDir:
    def test_default_target(self):
        path = cargo_output_dir(Path("t"), "x86_64-unknown-linux-gnu", "x86_64-unknown-linux-gnu", "debug")

        assert path == Path("t", "debug")

    def test_cross_target(self):
        path = cargo_output_dir(Path("t"), "aarch64-linux-android", "x86_64-unknown-linux-gnu", "release")

        assert path == Path("t", "aarch64-linux-android", "release")

    def test_unknown_default_target_nests(self):
        path = cargo_output_dir(Path("t"), "x86_64-unknown-linux-gnu", None, "debug")

        assert path == Path("t", "x86_64-unknown-linux-gnu", "debug")


class TestDefaultIncludes:
    def test_names(self):
        assert default_includes("rust") == ["librust.so", "librust.dylib", "rust.dll"]


class TestStageArtifacts:
    def make_output(self, root: Path, *names: str) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for name in names:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"\x7fELF" + name.encode())
        return root

    def test_copies_default_library(self, tmp_path):
        source = self.make_output(tmp_path / "out", "librust.so", "librust.d", "other.txt")

        staged = stage_artifacts(source, tmp_path / "jni", "arm64-v8a", None, "rust")

        assert staged.destination == tmp_path / "jni" / "arm64-v8a"
        assert staged.files == [tmp_path / "jni" / "arm64-v8a" / "librust.so"]
        assert (staged.destination / "librust.so").read_bytes() == b"\x7fELFlibrust.so"
        assert not (staged.destination / "other.txt").exists()
        assert staged

    def test_windows_and_macos_names(self, tmp_path):
        source = self.make_output(tmp_path / "out", "rust.dll", "librust.dylib")

        staged = stage_artifacts(source, tmp_path / "jni", "desktop", [], "rust")

        assert sorted(p.name for p in staged.files) == ["librust.dylib", "rust.dll"]

    def test_custom_includes_preserve_layout(self, tmp_path):
        source = self.make_output(
            tmp_path / "out", "librust.so", "deps/libdep.so", "deps/libdep.rlib"
        )

        staged = stage_artifacts(source, tmp_path / "jni", "x86", ["**/*.so"], "rust")

        destination = tmp_path / "jni" / "x86"
        assert (destination / "librust.so").is_file()
        assert (destination / "deps" / "libdep.so").is_file()
        assert not (destination / "deps" / "libdep.rlib").exists()

    def test_overlapping_patterns_copy_once(self, tmp_path):
        source = self.make_output(tmp_path / "out", "librust.so")

        staged = stage_artifacts(source, tmp_path / "jni", "x86", ["*.so", "lib*"], "rust")

        assert len(staged.files) == 1

    def test_missing_source_is_empty(self, tmp_path):
        staged = stage_artifacts(tmp_path / "nope", tmp_path / "jni", "x86", None, "rust")

        assert staged.files == []
        assert not staged
        assert staged.destination.is_dir()

    def test_no_match_is_empty(self, tmp_path):
        source = self.make_output(tmp_path / "out", "libother.so")

        staged = stage_artifacts(source, tmp_path / "jni", "x86", None, "rust")

        assert not staged

    def test_overwrites_previous_copy(self, tmp_path):
        source = self.make_output(tmp_path / "out", "librust.so")
        destination = tmp_path / "jni" / "x86"
        destination.mkdir(parents=True)
        (destination / "librust.so").write_bytes(b"stale")

        stage_artifacts(source, tmp_path / "jni", "x86", None, "rust")

        assert (destination / "librust.so").read_bytes() == b"\x7fELFlibrust.so"
