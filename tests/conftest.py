"""Shared test fixtures and configuration for lean-search-index test suite."""

import json
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generator

import pytest

from lean_search_index.models import ModuleDescriptor

NAT_ADD_HEADER = (
    '<div class="decl_header"><span class="decl_kind">def</span>\n'
    '<span class="decl_name"><a class="break_within" '
    'href="./Init/Prelude.html#Nat.add"><span class="name">Nat</span>.'
    '<span class="name">add</span></a></span><span class="decl_args">\n'
    '<span class="fn">(<span class="fn">n</span> <span class="fn">m</span> : '
    '<a href="./Init/Prelude.html#Nat">Nat</a>)</span></span>\n'
    '<span class="decl_args"> :</span>\n'
    '<div class="decl_type"><a href="./Init/Prelude.html#Nat">Nat</a></div></div>'
)


def declaration_data(
    name: str, kind: str = "def", header: str = "", doc: str | None = None
) -> dict:
    """Build one declaration entry in doc-gen4's JSON layout."""
    return {
        "info": {
            "name": name,
            "kind": kind,
            "doc": doc,
            "docLink": f"./Test.html#{name}",
            "sourceLink": "https://github.com/leanprover/lean4/blob/master/src/Test.lean#L1-L2",
            "line": 1,
        },
        "header": header,
    }


def header_for(kind: str, name: str, signature: str) -> str:
    """Build a minimal doc-gen4 style header for a signature."""
    return (
        f'<div class="decl_header"><span class="decl_kind">{kind}</span> '
        f'<span class="decl_name">{name}</span> {signature}</div>'
    )


@pytest.fixture
def temp_directory() -> Generator[Path, None, None]:
    """Create a temporary directory for file operations.

    Yields:
        Path: Path object pointing to temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_descriptor() -> Callable[..., ModuleDescriptor]:
    """Return a factory building descriptors from declaration entries.

    Returns:
        Callable taking a module name and declaration dicts.
    """

    def _make(module: str, *declarations: dict) -> ModuleDescriptor:
        return ModuleDescriptor.model_validate(
            {"name": module, "declarations": list(declarations), "imports": []}
        )

    return _make


@pytest.fixture
def sample_descriptor_data() -> dict:
    """Create sample doc-gen4 JSON data for a module.

    Returns:
        dict: Descriptor with one declaration carrying a signature and one
            without.
    """
    return {
        "name": "Init.Prelude",
        "imports": [],
        "declarations": [
            declaration_data("Nat.add", header=NAT_ADD_HEADER, doc="Addition"),
            declaration_data("Nat", kind="inductive"),
        ],
    }


@dataclass
class DocTree:
    """Paths of a generated documentation tree used by pipeline tests."""

    output_root: Path
    html_directory: Path
    data_directory: Path
    asset_path: Path

    @property
    def pattern(self) -> str:
        return str(self.data_directory / "**" / "*.bmp")

    def write_descriptor(self, relative_path: str, data: dict | str) -> Path:
        path = self.data_directory / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path


@pytest.fixture
def doc_tree(temp_directory, sample_descriptor_data) -> DocTree:
    """Create a build directory as doc-gen4 leaves it.

    Returns:
        DocTree: Tree with two HTML pages, one descriptor and a client script.
    """
    output_root = temp_directory / "build"
    html_directory = output_root / "doc"
    (html_directory / "Init").mkdir(parents=True)
    (html_directory / "index.html").write_text(
        "<html><body><h1>Docs</h1></body></html>\n", encoding="utf-8"
    )
    (html_directory / "Init" / "Prelude.html").write_text(
        "<html><body><div>Nat</div></body></html>\n", encoding="utf-8"
    )

    asset_path = temp_directory / "lean-search.js"
    asset_path.write_text("console.log('search');\n", encoding="utf-8")

    tree = DocTree(
        output_root=output_root,
        html_directory=html_directory,
        data_directory=output_root / "doc-data",
        asset_path=asset_path,
    )
    tree.write_descriptor("Init/Prelude.bmp", sample_descriptor_data)
    return tree


@pytest.fixture
def make_declaration() -> Callable[..., dict]:
    """Return the factory building doc-gen4 declaration entries."""
    return declaration_data


@pytest.fixture
def make_header() -> Callable[[str, str, str], str]:
    """Return the factory building doc-gen4 declaration headers."""
    return header_for


@pytest.fixture
def nat_add_header() -> str:
    """Header HTML as doc-gen4 renders it for ``Nat.add``."""
    return NAT_ADD_HEADER
