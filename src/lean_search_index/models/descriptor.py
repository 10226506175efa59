"""Pydantic models for doc-gen4 per-module descriptor files.

doc-gen4 writes one JSON document per Lean module into
``.lake/build/doc-data``. Only the fields needed to build the search index
are modelled; unknown keys are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DeclarationInfo(BaseModel):
    """The ``info`` block doc-gen4 emits for every declaration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    """Fully qualified Lean name (e.g., 'Nat.add')."""

    kind: str
    """Declaration kind (e.g., 'def', 'theorem', 'structure')."""

    doc: str | None = None
    """Documentation string, if available."""

    doc_link: str | None = None
    """Relative link to the declaration in the generated HTML."""

    source_link: str | None = None
    """GitHub URL to the declaration source code."""

    line: int | None = None
    """Line number of the declaration in its source file."""


class DescriptorDeclaration(BaseModel):
    """One declaration entry of a module descriptor."""

    info: DeclarationInfo
    """Name, kind and links of the declaration."""

    header: str = ""
    """Rendered HTML header holding the declaration's signature."""


class ModuleDescriptor(BaseModel):
    """A decoded doc-gen4 module descriptor."""

    name: str
    """Module name (e.g., 'Mathlib.Data.List.Basic')."""

    declarations: list[DescriptorDeclaration] = Field(default_factory=list)
    """Declarations defined in the module."""

    imports: list[str] = Field(default_factory=list)
    """Modules imported by this module."""
