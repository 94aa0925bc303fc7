"""
Tests for the project driver: source filtering, output paths and per-file
failure handling.
"""

from __future__ import annotations

from pathlib import PurePath

import pytest

from aidl2.pipeline import (
    CodeGeneratorConfig,
    OutputConfig,
    ParseError,
    ProjectGenerator,
    StructuralMismatchError,
    UnsupportedMarshallingError,
)

SAMPLE_REL = PurePath("com/example/sample")
INTERFACES = ["ISampleService", "IListener", "IRepository"]


def source_path(project, name, package_dir=SAMPLE_REL):
    return project / "src" / package_dir / f"{name}.aidl2"


def gen_path(project, name, package_dir=SAMPLE_REL, gen_dir="gen"):
    return project / gen_dir / package_dir / f"{name}.java"


def write_source(project, name, content, package_dir=SAMPLE_REL):
    path = source_path(project, name, package_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestRun:
    """Test cases for ProjectGenerator.run"""

    def test_generates_every_updated_file(self, sample_project):
        """Test that each source gets a Java file in gen/"""
        generator = ProjectGenerator(sample_project)
        report = generator.run([source_path(sample_project, name) for name in INTERFACES], [])

        assert report.ok
        assert report.generated == [gen_path(sample_project, name) for name in INTERFACES]
        for name in INTERFACES:
            java = gen_path(sample_project, name).read_text(encoding="utf-8")
            assert f"public interface {name}" in java
            assert f" * Original file: com/example/sample/{name}.aidl2\n" in java

    def test_command_line_in_banner(self, sample_project):
        """Test that the command line is written into the banner"""
        generator = ProjectGenerator(sample_project, command_line="aidl2 --prefix project")
        generator.run([source_path(sample_project, "IListener")], [])

        java = gen_path(sample_project, "IListener").read_text(encoding="utf-8")
        assert " * Generated by: aidl2 --prefix project\n" in java

    def test_overwrites_previous_output(self, sample_project):
        """Test that regeneration replaces a stale file"""
        target = gen_path(sample_project, "IListener")
        target.parent.mkdir(parents=True)
        target.write_text("stale", encoding="utf-8")

        ProjectGenerator(sample_project).run([source_path(sample_project, "IListener")], [])

        assert target.read_text(encoding="utf-8").startswith("/*")
        assert [p.name for p in target.parent.iterdir()] == ["IListener.java"]

    def test_removed_file(self, sample_project):
        """Test that a removed source deletes its generated file"""
        generator = ProjectGenerator(sample_project)
        source = source_path(sample_project, "IListener")
        generator.run([source], [])
        source.unlink()

        report = generator.run([], [source])

        assert report.removed == [gen_path(sample_project, "IListener")]
        assert not gen_path(sample_project, "IListener").exists()

    def test_removed_file_without_output(self, sample_project):
        """Test that removing a never generated file is not an error"""
        report = ProjectGenerator(sample_project).run([], [source_path(sample_project, "IGone")])

        assert report.ok
        assert report.removed == []

    def test_empty_source(self, sample_project):
        """Test that an empty file produces nothing"""
        source = write_source(sample_project, "IEmpty", "")

        report = ProjectGenerator(sample_project).run([source], [])

        assert report.ok
        assert report.generated == []
        assert not gen_path(sample_project, "IEmpty").exists()

    def test_failure_does_not_stop_other_files(self, sample_project):
        """Test that one broken file is reported and the rest still generated"""
        broken = write_source(
            sample_project,
            "IBroken",
            "package com.example.sample;\ninterface IBroken {\n    void f(out String s);\n}\n",
        )
        good = source_path(sample_project, "IListener")

        report = ProjectGenerator(sample_project).run([broken, good], [])

        assert not report.ok
        assert report.generated == [gen_path(sample_project, "IListener")]
        assert not gen_path(sample_project, "IBroken").exists()

        (path, error), = report.failures
        assert path == PurePath("com/example/sample/IBroken.aidl2")
        assert isinstance(error, UnsupportedMarshallingError)
        assert str(error).startswith("com/example/sample/IBroken.aidl2:3:")

    def test_missing_source_is_a_failure(self, sample_project):
        """Test that an unreadable source is reported, not raised"""
        report = ProjectGenerator(sample_project).run([source_path(sample_project, "IMissing")], [])

        (_, error), = report.failures
        assert isinstance(error, FileNotFoundError)

    def test_undecodable_source_does_not_stop_other_files(self, sample_project):
        """Test that a source that is not UTF-8 is reported with its file name"""
        bad = source_path(sample_project, "IBad")
        bad.write_bytes(b"package com.example.sample;\ninterface IBad {\xff}\n")
        good = source_path(sample_project, "IListener")

        report = ProjectGenerator(sample_project).run([bad, good], [])

        assert report.generated == [gen_path(sample_project, "IListener")]
        (path, error), = report.failures
        assert path == PurePath("com/example/sample/IBad.aidl2")
        assert isinstance(error, ParseError)
        assert isinstance(error.__cause__, UnicodeDecodeError)
        assert str(error).startswith("com/example/sample/IBad.aidl2: error: Not a UTF-8 file:")

    def test_failed_removal_does_not_stop_other_removals(self, sample_project):
        """Test that an output that cannot be deleted is reported"""
        generator = ProjectGenerator(sample_project)
        listener = source_path(sample_project, "IListener")
        generator.run([listener], [])
        # a directory in place of the generated file cannot be unlinked
        blocked = gen_path(sample_project, "IBlocked")
        blocked.mkdir(parents=True)
        (blocked / "keep.txt").write_text("x", encoding="utf-8")

        report = generator.run([], [source_path(sample_project, "IBlocked"), listener])

        assert report.removed == [gen_path(sample_project, "IListener")]
        assert not gen_path(sample_project, "IListener").exists()
        (path, error), = report.failures
        assert path == PurePath("com/example/sample/IBlocked.aidl2")
        assert isinstance(error, OSError)
        assert blocked.is_dir()

    def test_failure_is_logged(self, sample_project, caplog):
        """Test that failures go through the logger"""
        broken = write_source(sample_project, "IBroken", "package com.example.sample;\ninterface IBroken {\n")

        with caplog.at_level("ERROR", logger="aidl2"):
            ProjectGenerator(sample_project).run([broken], [])

        assert "IBroken.aidl2" in caplog.text


class TestStructure:
    """Test cases for package and file name checks"""

    def test_wrong_package(self, sample_project):
        """Test that the package must match the folder"""
        write_source(sample_project, "IOther", "package com.example.other;\ninterface IOther {\n}\n")

        generator = ProjectGenerator(sample_project)
        with pytest.raises(StructuralMismatchError) as exc_info:
            generator.create_java(SAMPLE_REL / "IOther.aidl2")

        assert "Wrong package 'com.example.other' under folder 'com/example/sample'." in str(exc_info.value)

    def test_wrong_interface_name(self, sample_project):
        """Test that the interface must be named after the file"""
        write_source(sample_project, "IFoo", "package com.example.sample;\ninterface IBar {\n}\n")

        generator = ProjectGenerator(sample_project)
        with pytest.raises(StructuralMismatchError) as exc_info:
            generator.create_java(SAMPLE_REL / "IFoo.aidl2")

        assert "Wrong interface name 'IBar' in file 'IFoo.aidl2'." in str(exc_info.value)


class TestFilterSources:
    """Test cases for mapping command line paths to sources"""

    def test_keeps_sources_below_src(self, sample_project):
        """Test that paths are made relative to the source folder"""
        generator = ProjectGenerator(sample_project)
        paths = generator.filter_sources([source_path(sample_project, "IListener")])
        assert paths == [SAMPLE_REL / "IListener.aidl2"]

    def test_ignores_other_extensions(self, sample_project):
        """Test that Java sources and other files are skipped"""
        generator = ProjectGenerator(sample_project)
        paths = generator.filter_sources(
            [
                sample_project / "src" / SAMPLE_REL / "Point.java",
                sample_project / "src" / SAMPLE_REL / "IListener.aidl",
            ]
        )
        assert paths == []

    def test_extension_is_case_insensitive(self, sample_project):
        """Test upper case extensions"""
        generator = ProjectGenerator(sample_project)
        paths = generator.filter_sources([sample_project / "src" / SAMPLE_REL / "IUpper.AIDL2"])
        assert paths == [SAMPLE_REL / "IUpper.AIDL2"]

    def test_ignores_files_outside_src(self, sample_project, tmp_path):
        """Test that files outside the project sources are skipped"""
        generator = ProjectGenerator(sample_project)
        assert generator.filter_sources([tmp_path / "IElsewhere.aidl2"]) == []

    def test_maps_bin_classes_to_src(self, sample_project):
        """Test that copies left in bin/classes are mapped back"""
        generator = ProjectGenerator(sample_project)
        copy = sample_project / "bin" / "classes" / SAMPLE_REL / "IListener.aidl2"
        assert generator.filter_sources([copy]) == [SAMPLE_REL / "IListener.aidl2"]

    def test_relative_to_working_directory(self, sample_project, monkeypatch):
        """Test paths relative to the current directory"""
        monkeypatch.chdir(sample_project)
        generator = ProjectGenerator(sample_project)
        paths = generator.filter_sources(["src/com/example/sample/IListener.aidl2"])
        assert paths == [SAMPLE_REL / "IListener.aidl2"]


class TestConfiguration:
    """Test cases for configuration driven behaviour"""

    def test_gen_dir(self, sample_project):
        """Test a custom output folder"""
        config = CodeGeneratorConfig(gen_dir="generated")
        report = ProjectGenerator(sample_project, config).run([source_path(sample_project, "IListener")], [])
        assert report.generated == [gen_path(sample_project, "IListener", gen_dir="generated")]

    def test_source_dir(self, sample_project):
        """Test a custom source folder"""
        (sample_project / "src").rename(sample_project / "java")
        config = CodeGeneratorConfig(source_dir="java")
        source = sample_project / "java" / SAMPLE_REL / "ISampleService.aidl2"

        report = ProjectGenerator(sample_project, config).run([source], [])

        assert report.ok
        java = gen_path(sample_project, "ISampleService").read_text(encoding="utf-8")
        # Point.java is found in the custom source folder
        assert "_result.writeToParcel(reply, android.os.Parcelable.PARCELABLE_WRITE_RETURN_VALUE);" in java

    def test_without_atomic_write(self, sample_project):
        """Test direct writes"""
        config = CodeGeneratorConfig(output=OutputConfig(atomic_write=False))
        report = ProjectGenerator(sample_project, config).run([source_path(sample_project, "IListener")], [])
        assert report.ok
        assert gen_path(sample_project, "IListener").exists()

    def test_without_banner(self, sample_project):
        """Test that the generation comment can be disabled"""
        config = CodeGeneratorConfig(add_generation_comment=False)
        ProjectGenerator(sample_project, config).run([source_path(sample_project, "IListener")], [])
        java = gen_path(sample_project, "IListener").read_text(encoding="utf-8")
        assert java.startswith("package com.example.sample;")

    def test_extra_known_parcelables(self, sample_project):
        """Test that configured names are treated as Parcelable"""
        write_source(
            sample_project,
            "IShared",
            "package com.example.sample;\n"
            "import com.example.lib.Shared;\n"
            "interface IShared {\n"
            "    Shared get();\n"
            "}\n",
        )
        config = CodeGeneratorConfig(known_parcelables=["com.example.lib.Shared"])

        ProjectGenerator(sample_project, config).run([source_path(sample_project, "IShared")], [])

        java = gen_path(sample_project, "IShared").read_text(encoding="utf-8")
        assert "Shared.CREATOR.createFromParcel(_reply)" in java


if __name__ == "__main__":
    pytest.main([__file__])
