"""Build a ProjectReflection from Python source files.

Sources are parsed with the standard ``ast`` module; nothing is imported or
executed. Plugins can observe or transform the model through ``hooks``:

    begin(project)                       before any file is read
    create_declaration(reflection, node) after each declaration is attached
    resolve_begin(project)               after all files are read
    resolve(reflection)                  once per reflection, depth first
    end(project)                         conversion finished
"""

import ast
import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..config import Options
from ..logger import Logger
from ..models import ProjectReflection, Reflection, ReflectionKind, SourceReference
from ..utils.hooks import EventHooks

_log = logging.getLogger(__name__)

_FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]

_DECORATOR_FLAGS = ("classmethod", "staticmethod", "property", "abstractmethod")


class ConverterEvent(str, Enum):
    """Extension points fired while building the project model."""

    BEGIN = "begin"
    CREATE_DECLARATION = "create_declaration"
    RESOLVE_BEGIN = "resolve_begin"
    RESOLVE = "resolve"
    END = "end"


class Converter:
    """Turn ``input_files`` into a project model."""

    def __init__(self, logger: Logger, options: Options):
        self.logger = logger
        self.options = options
        self.hooks: EventHooks[ConverterEvent, None] = EventHooks()
        self._file_name = ""

    def convert(self, input_files: list[str]) -> ProjectReflection:
        project = ProjectReflection(name=self.options.get_value("name"))
        project.readme = self._read_readme()

        sources = self.expand_input_files(input_files)
        if not sources:
            self.logger.error("No Python source files found in the given inputs.")

        self.hooks.emit(ConverterEvent.BEGIN, project)

        for root, path in sources:
            self.convert_file(project, root, path)

        self.hooks.emit(ConverterEvent.RESOLVE_BEGIN, project)
        for reflection in project.traverse():
            self.hooks.emit(ConverterEvent.RESOLVE, reflection)
        self.hooks.emit(ConverterEvent.END, project)

        _log.debug("converted %d modules", len(project.modules))
        return project

    def expand_input_files(self, input_files: list[str]) -> list[tuple[Path, Path]]:
        """Resolve inputs to ``(root, file)`` pairs, sorted within each input.

        ``root`` is the directory module names are computed against.
        """
        found = []
        seen = set()
        for entry in input_files:
            path = Path(entry).expanduser()
            if path.is_dir():
                files = sorted(
                    p for p in path.rglob("*.py")
                    if not _is_ignored(p.relative_to(path))
                )
                pairs = [(path, p) for p in files]
            elif path.is_file() and path.suffix == ".py":
                pairs = [(path.parent, path)]
            else:
                self.logger.error(f"Input file {entry} is not a Python file or directory.")
                continue

            for root, file in pairs:
                key = file.resolve()
                if key not in seen:
                    seen.add(key)
                    found.append((root, file))
        return found

    def convert_file(
        self,
        project: ProjectReflection,
        root: Path,
        path: Path,
    ) -> Optional[Reflection]:
        """Parse one file and attach its module reflection to ``project``.

        Returns None, after logging an error, if the file can't be parsed.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Could not read {path}: {e}")
            return None

        relative = path.relative_to(root)
        try:
            tree = ast.parse(text, filename=str(relative))
        except SyntaxError as e:
            self.logger.error(f"{relative.as_posix()}:{e.lineno}: {e.msg}")
            return None

        self._file_name = relative.as_posix()
        module = self._attach(project, Reflection(
            name=_module_name(relative),
            kind=ReflectionKind.MODULE,
            comment=ast.get_docstring(tree) or "",
            source=self._source(1),
        ), tree)
        self._convert_body(module, tree)
        return module

    def _convert_body(self, module: Reflection, tree: ast.Module) -> None:
        for node in tree.body:
            if isinstance(node, ast.ClassDef):
                self._convert_class(module, node)
            elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                self._convert_function(module, node, ReflectionKind.FUNCTION)
            elif isinstance(node, (ast.Assign, ast.AnnAssign)):
                self._convert_variable(module, node, ReflectionKind.VARIABLE)

    def _convert_class(self, parent: Reflection, node: ast.ClassDef) -> None:
        if not self._is_public(node.name):
            return
        bases = ", ".join(ast.unparse(base) for base in node.bases)
        reflection = self._attach(parent, Reflection(
            name=node.name,
            kind=ReflectionKind.CLASS,
            comment=ast.get_docstring(node) or "",
            signature=f"({bases})" if bases else "",
            source=self._source(node.lineno),
        ), node)

        for child in node.body:
            if isinstance(child, (ast.FunctionDef, ast.AsyncFunctionDef)):
                self._convert_function(reflection, child, ReflectionKind.METHOD)
            elif isinstance(child, ast.AnnAssign):
                self._convert_variable(reflection, child, ReflectionKind.PROPERTY)

    def _convert_function(
        self,
        parent: Reflection,
        node: _FunctionNode,
        kind: ReflectionKind,
    ) -> None:
        if not self._is_public(node.name):
            return

        flags = set()
        if isinstance(node, ast.AsyncFunctionDef):
            flags.add("async")
        for decorator in node.decorator_list:
            name = ast.unparse(decorator).rsplit(".", 1)[-1]
            if name in _DECORATOR_FLAGS:
                flags.add(name)
        if kind == ReflectionKind.METHOD and "property" in flags:
            kind = ReflectionKind.PROPERTY

        signature = f"({ast.unparse(node.args)})"
        if node.returns is not None:
            signature += f" -> {ast.unparse(node.returns)}"

        self._attach(parent, Reflection(
            name=node.name,
            kind=kind,
            comment=ast.get_docstring(node) or "",
            signature=signature,
            source=self._source(node.lineno),
            flags=flags,
        ), node)

    def _convert_variable(
        self,
        parent: Reflection,
        node: Union[ast.Assign, ast.AnnAssign],
        kind: ReflectionKind,
    ) -> None:
        if isinstance(node, ast.AnnAssign):
            if not isinstance(node.target, ast.Name):
                return
            names = [node.target.id]
            signature = f": {ast.unparse(node.annotation)}"
            if node.value is not None:
                signature += f" = {ast.unparse(node.value)}"
        else:
            names = [
                target.id for target in node.targets
                if isinstance(target, ast.Name) and target.id.isupper()
            ]
            signature = f" = {ast.unparse(node.value)}"

        for name in names:
            if not self._is_public(name):
                continue
            self._attach(parent, Reflection(
                name=name,
                kind=kind,
                signature=signature,
                source=self._source(node.lineno),
            ), node)

    def _attach(self, parent: Reflection, reflection: Reflection, node: ast.AST) -> Reflection:
        parent.add_child(reflection)
        self.hooks.emit(ConverterEvent.CREATE_DECLARATION, reflection, node)
        return reflection

    def _is_public(self, name: str) -> bool:
        if not self.options.get_value("exclude_private"):
            return True
        return name == "__init__" or not name.startswith("_")

    def _source(self, line: int) -> Optional[SourceReference]:
        if self.options.get_value("disable_sources"):
            return None
        return SourceReference(self._file_name, line)

    def _read_readme(self) -> str:
        readme = self.options.get_value("readme")
        if not readme:
            return ""
        try:
            return Path(readme).read_text(encoding="utf-8")
        except OSError as e:
            self.logger.warn(f"Could not read readme {readme}: {e}")
            return ""


def _is_ignored(relative: Path) -> bool:
    return any(
        part == "__pycache__" or part.startswith(".")
        for part in relative.parts[:-1]
    )


def _module_name(relative: Path) -> str:
    parts = list(relative.with_suffix("").parts)
    if parts[-1] == "__init__" and len(parts) > 1:
        parts.pop()
    return ".".join(parts)
