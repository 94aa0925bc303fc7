"""
Project-level driver.

Maps changed ``.aidl2`` files of a project to generated Java files: updated
sources are compiled into ``<prefix>/gen``, removed sources have their
generated file deleted. A failure in one file is logged and reported but
does not stop the others.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePath

from ..log import get_logger
from .analyzer.classifier import SourceTree, load_known_parcelables
from .config import CodeGeneratorConfig
from .errors import Aidl2Error, ParseError, StructuralMismatchError
from .output.atomic_writer import AtomicWriter
from .parser.lexer import Tokenizer
from .parser.parser import Parser
from .writer.java_writer import JavaWriter

logger = get_logger(__name__)


@dataclass
class GenerationReport:
    """Outcome of one run."""

    generated: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ProjectGenerator:
    """
    Generates Java files for one project directory.

    Args:
        prefix: Project directory; sources live in ``prefix/src``
        config: Generator configuration
        command_line: Shown in the banner of generated files
    """

    def __init__(self, prefix: Path | str, config: CodeGeneratorConfig | None = None, command_line: str | None = None):
        self.prefix = Path(prefix)
        self.config = config or CodeGeneratorConfig()
        self.command_line = command_line
        self.writer = AtomicWriter()
        self.known_parcelables = load_known_parcelables(
            self.config.known_parcelables_file or None, self.config.known_parcelables
        )

    @property
    def src_folder(self) -> Path:
        return self.prefix / self.config.source_dir

    def filter_sources(self, paths: list[Path | str]) -> list[PurePath]:
        """
        Keep interface definitions below the source folder.

        Args:
            paths: Absolute paths, or paths relative to the working directory

        Returns:
            The kept paths, relative to the source folder. Copies of sources
            in ``bin/classes`` (left there by Eclipse builds) are mapped back
            to their source-relative path.
        """
        extension = self.config.source_extension.lower()
        src_folder = Path(self.src_folder).absolute()
        classes_folder = (self.prefix / "bin" / "classes").absolute()

        result = []
        for path in paths:
            path = Path(path).absolute()
            if not path.name.lower().endswith(extension):
                continue
            if path.is_relative_to(src_folder):
                result.append(PurePath(path.relative_to(src_folder)))
            elif path.is_relative_to(classes_folder):
                result.append(PurePath(path.relative_to(classes_folder)))
            else:
                logger.debug(f"Ignoring {path}: not below {src_folder}")
        return result

    def to_gen_path(self, rel_path: PurePath) -> Path:
        """Absolute path of the generated Java file."""
        return (self.prefix / self.config.gen_dir / rel_path).with_suffix(self.config.java_extension)

    def to_src_path(self, rel_path: PurePath) -> Path:
        """Absolute path of the interface definition."""
        return self.src_folder / rel_path

    def create_java(self, rel_path: PurePath) -> Path | None:
        """
        Compile one interface definition.

        Returns:
            The generated file, or None when the source holds nothing

        Raises:
            Aidl2Error: On any parse, marshalling or validation error, including
                a source that is not UTF-8
            OSError: When the source cannot be read or the output written
        """
        src_path = self.to_src_path(rel_path)
        gen_path = self.to_gen_path(rel_path)

        try:
            content = src_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Not a UTF-8 file: {e.reason} at byte {e.start}.", str(rel_path)) from e
        if not content:
            return None

        tokens = Tokenizer.tokenize(content, str(rel_path))
        interface = Parser.parse(tokens)
        if interface is None:
            return None

        package_dir = rel_path.parent
        expected_package = ".".join(package_dir.parts)
        if interface.package != expected_package:
            raise StructuralMismatchError(
                f"Wrong package '{interface.package}' under folder '{package_dir}'.", str(rel_path)
            )

        file_stem = rel_path.name[: -len(self.config.source_extension)]
        if interface.name != file_stem:
            raise StructuralMismatchError(
                f"Wrong interface name '{interface.name}' in file '{rel_path.name}'.", str(rel_path)
            )

        writer = JavaWriter(
            interface,
            self.prefix,
            self.config,
            command_line=self.command_line,
            known_parcelables=self.known_parcelables,
            source_lookup=SourceTree(self.prefix, self.config.source_dir, self.config.java_extension),
            source_name=str(rel_path),
        )
        java = writer.encode_interface()

        if self.config.output.atomic_write:
            self.writer.write(gen_path, java, validate=self.config.output.validate_before_write)
        else:
            gen_path.parent.mkdir(parents=True, exist_ok=True)
            gen_path.write_text(java, encoding="utf-8")

        logger.info(f"Generated {gen_path}")
        return gen_path

    def remove_java(self, rel_path: PurePath) -> Path | None:
        """Delete the generated file of a removed source, if it exists."""
        gen_path = self.to_gen_path(rel_path)
        try:
            gen_path.unlink()
        except FileNotFoundError:
            logger.debug(f"{gen_path} already removed")
            return None
        logger.info(f"Removed {gen_path}")
        return gen_path

    def run(self, updated: list[Path | str], removed: list[Path | str]) -> GenerationReport:
        """Process updated and removed sources, one file at a time."""
        report = GenerationReport()

        for rel_path in self.filter_sources(updated):
            try:
                gen_path = self.create_java(rel_path)
            except (Aidl2Error, OSError) as e:
                logger.error(str(e))
                report.failures.append((Path(rel_path), e))
                continue
            if gen_path is not None:
                report.generated.append(gen_path)

        for rel_path in self.filter_sources(removed):
            try:
                gen_path = self.remove_java(rel_path)
            except OSError as e:
                logger.error(f"Cannot remove {self.to_gen_path(rel_path)}: {e}")
                report.failures.append((Path(rel_path), e))
                continue
            if gen_path is not None:
                report.removed.append(gen_path)

        return report
