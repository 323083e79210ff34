"""
Go package loader.

Parses the non-test Go files of one directory with tree-sitter and builds
the SymbolTable the resolver works from: declared types, and every
package-level constant with its static type and exact value.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

import tree_sitter
from tree_sitter_go import language as go_language

from ....logging_config import get_logger
from ...core.errors import ResolutionError
from ...core.symbols import ConstantRecord, SymbolTable, TypeHandle
from .buildtags import BuildContext
from .constexpr import UNSIGNED_BITS, ConstEvaluator, Typed, UnsupportedExpression, normalize

logger = get_logger(__name__)

PREDECLARED_TYPES = {
    "bool",
    "byte",
    "complex64",
    "complex128",
    "float32",
    "float64",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "rune",
    "string",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
}


@dataclass
class ConstDecl:
    """A constant name bound to its spec, before evaluation."""

    name: str
    expression: Optional[object]  # tree_sitter.Node
    type_name: Optional[str]
    iota: int
    unit: str
    order: int
    comment: Optional[str]


def strip_comment_markers(comment: str) -> str:
    """Return comment text without `//` or `/* */` markers and outer whitespace."""
    text = comment.strip()
    if text.startswith("//"):
        text = text[2:]
    elif text.startswith("/*") and text.endswith("*/"):
        text = text[2:-2]
    return text.strip()


class GoPackageLoader:
    """Builds a SymbolTable from the Go sources of one package directory."""

    def __init__(self, build_context: Optional[BuildContext] = None):
        lang = tree_sitter.Language(go_language())
        self.parser = tree_sitter.Parser(lang)
        self.build_context = build_context or BuildContext.from_environment()

        self._types: Dict[str, TypeHandle] = {}
        self._underlying: Dict[str, str] = {}
        self._decls: Dict[str, ConstDecl] = {}
        self._ordered: List[ConstDecl] = []
        self._cache: Dict[str, Typed] = {}
        self._evaluating: Set[str] = set()

    def load_directory(self, directory: Union[str, Path]) -> SymbolTable:
        """
        Load the non-test `.go` files of a directory as one package.

        Files excluded for the target platform by their name suffix or
        their `//go:build` line are skipped. Files are visited in lexical
        path order so constant order is reproducible across runs.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise ResolutionError(f"Not a directory: {directory}")

        files = sorted(
            path
            for path in directory.glob("*.go")
            if path.is_file()
            and not path.name.endswith("_test.go")
            and self.build_context.matches_file_name(path.name)
        )

        sources = {}
        for path in files:
            try:
                content = path.read_bytes()
            except OSError as e:
                raise ResolutionError(f"Failed to read {path}: {e}") from e
            text = content.decode("utf-8", errors="replace")
            if not self.build_context.matches_source(path.name, text):
                logger.debug("Skipping %s: excluded by build constraint", path.name)
                continue
            sources[path.name] = content

        if not sources:
            raise ResolutionError(f"No Go source files in {directory}")

        logger.debug("Loading %d Go files from %s", len(sources), directory)
        return self.load_sources(sources)

    def load_sources(self, sources: Dict[str, Union[str, bytes]]) -> SymbolTable:
        """Load a package from in-memory sources keyed by file name."""
        self._reset()

        package_names = set()
        trees = []
        for unit in sorted(sources):
            content = sources[unit]
            if isinstance(content, str):
                content = content.encode("utf-8")

            tree = self.parser.parse(content)
            root = tree.root_node
            if root.has_error:
                raise ResolutionError(f"Syntax error in {unit}")

            package_names.add(self._package_name(root, unit))
            trees.append((unit, root))

        if len(package_names) != 1:
            raise ResolutionError(
                f"Expected exactly one package, got {len(package_names)}: "
                f"{', '.join(sorted(package_names))}"
            )

        for unit, root in trees:
            self._collect_types(root)
        for unit, root in trees:
            self._collect_constants(unit, root)

        constants = tuple(self._record(decl) for decl in self._ordered)
        package_name = package_names.pop()

        logger.info(
            "Loaded package %s: %d types, %d constants",
            package_name,
            len(self._types),
            len(constants),
        )
        return SymbolTable(package_name, tuple(self._types.values()), constants)

    def _reset(self):
        self._types.clear()
        self._underlying.clear()
        self._decls.clear()
        self._ordered.clear()
        self._cache.clear()
        self._evaluating.clear()

    # Declarations

    @staticmethod
    def _package_name(root, unit: str) -> str:
        for child in root.named_children:
            if child.type == "package_clause":
                for part in child.named_children:
                    if part.type == "package_identifier":
                        return part.text.decode("utf-8")
        raise ResolutionError(f"No package clause in {unit}")

    def _collect_types(self, root):
        for declaration in root.named_children:
            if declaration.type != "type_declaration":
                continue
            for spec in declaration.named_children:
                if spec.type not in ("type_spec", "type_alias"):
                    continue
                name = spec.child_by_field_name("name").text.decode("utf-8")
                target = spec.child_by_field_name("type").text.decode("utf-8")
                if spec.type == "type_alias":
                    self._types[name] = TypeHandle(name, alias_of=target)
                else:
                    self._types[name] = TypeHandle(name)
                    self._underlying[name] = target

    def _collect_constants(self, unit: str, root):
        comments = self._line_comments(root)
        order = 0

        for declaration in root.named_children:
            if declaration.type != "const_declaration":
                continue

            specs = [child for child in declaration.named_children if child.type == "const_spec"]
            previous_type: Optional[str] = None
            previous_values: List[object] = []

            for iota, spec in enumerate(specs):
                type_node = spec.child_by_field_name("type")
                value_node = spec.child_by_field_name("value")

                if value_node is not None:
                    previous_type = type_node.text.decode("utf-8") if type_node else None
                    previous_values = [
                        child for child in value_node.named_children if child.type != "comment"
                    ]
                elif type_node is not None:
                    raise ResolutionError(
                        f"{unit}: constant declaration with type but no value"
                    )
                # Otherwise the previous type and expression list repeat

                end_row, end_column = self._content_end(spec)
                comment = next(
                    (text for column, text in comments.get(end_row, []) if column >= end_column),
                    None,
                )

                names = [
                    node
                    for node in spec.children_by_field_name("name")
                    if node.type == "identifier"
                ]
                for position, name_node in enumerate(names):
                    name = name_node.text.decode("utf-8")
                    expression = (
                        previous_values[position] if position < len(previous_values) else None
                    )
                    decl = ConstDecl(
                        name=name,
                        expression=expression,
                        type_name=previous_type,
                        iota=iota,
                        unit=unit,
                        order=order,
                        comment=comment,
                    )
                    order += 1
                    if name == "_":
                        continue
                    self._decls[name] = decl
                    self._ordered.append(decl)

    @staticmethod
    def _content_end(node) -> Tuple[int, int]:
        """End position of a node ignoring comments attached inside it."""
        ends = [tuple(child.end_point) for child in node.children if child.type != "comment"]
        return max(ends) if ends else tuple(node.end_point)

    @staticmethod
    def _line_comments(root) -> Dict[int, List[Tuple[int, str]]]:
        """Map a row to the comments starting on it as (column, text), left to right."""
        found: Dict[int, List[Tuple[int, str]]] = {}
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                row, column = node.start_point
                text = strip_comment_markers(node.text.decode("utf-8"))
                found.setdefault(row, []).append((column, text))
                continue
            stack.extend(node.children)
        for row_comments in found.values():
            row_comments.sort()
        return found

    # Evaluation

    def _record(self, decl: ConstDecl) -> ConstantRecord:
        try:
            value, type_name = self._evaluate_name(decl.name)
        except (UnsupportedExpression, ResolutionError) as e:
            logger.debug("Constant %s left unevaluated: %s", decl.name, e)
            value, type_name = None, decl.type_name

        return ConstantRecord(
            declared_name=decl.name,
            owner_type=type_name,
            exact_value=value,
            source_unit=decl.unit,
            source_order=decl.order,
            trailing_comment=decl.comment,
        )

    def _evaluate_name(self, name: str) -> Typed:
        if name in self._cache:
            return self._cache[name]

        decl = self._decls.get(name)
        if decl is None:
            raise UnsupportedExpression(f"{name} is not a package constant")
        if decl.expression is None:
            raise UnsupportedExpression(f"missing value for constant {name}")
        if name in self._evaluating:
            raise ResolutionError(f"initialization cycle for constant {name}")

        self._evaluating.add(name)
        try:
            value, inferred_type = self._evaluator().evaluate(decl.expression, decl.iota)
        finally:
            self._evaluating.discard(name)

        result = (normalize(value), decl.type_name or inferred_type)
        self._cache[name] = result
        return result

    def _evaluator(self) -> ConstEvaluator:
        return ConstEvaluator(
            lookup=self._evaluate_name,
            is_type=self._is_type,
            unsigned_bits=self._unsigned_bits,
        )

    def _is_type(self, name: str) -> bool:
        return name in self._types or name in PREDECLARED_TYPES

    def _unsigned_bits(self, type_name: Optional[str]) -> Optional[int]:
        seen = set()
        while type_name is not None and type_name not in seen:
            if type_name in UNSIGNED_BITS:
                return UNSIGNED_BITS[type_name]
            seen.add(type_name)
            handle = self._types.get(type_name)
            if handle is None:
                return None
            type_name = handle.alias_of or self._underlying.get(type_name)
        return None


def load_go_package(directory: Union[str, Path]) -> SymbolTable:
    """Convenience wrapper building a SymbolTable from a package directory."""
    return GoPackageLoader().load_directory(directory)
