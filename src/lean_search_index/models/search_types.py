"""Type definitions for the records written into the search index."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SearchResult(BaseModel):
    """A search result representing a Lean declaration.

    Instances are immutable and hashable so that result sets can be compared
    as multisets.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    name: str
    """Fully qualified Lean name (e.g., 'Nat.add')."""

    module: str
    """Module name (e.g., 'Mathlib.Data.List.Basic')."""

    kind: str
    """Declaration kind (e.g., 'def', 'theorem')."""

    doc: Optional[str] = None
    """Documentation string from the source code, if available."""

    doc_link: Optional[str] = None
    """Relative link to the declaration in the generated HTML."""

    source_link: Optional[str] = None
    """GitHub URL to the declaration source code."""

    signature: Optional[str] = None
    """Plain-text signature (binders and type), if one could be extracted."""

    def to_json_dict(self) -> dict:
        """Returns the camelCase JSON form written into shard files."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
