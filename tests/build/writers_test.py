"""Tests for the shard, HTML and asset writers."""

import json

from lean_search_index import __version__
from lean_search_index.build.writers import (
    copy_asset,
    patch_html_files,
    render_declaration_shard,
    render_type_shard,
    write_declaration_shards,
    write_type_shards,
)
from lean_search_index.index.shapes import shape_file_key
from lean_search_index.models import SearchResult
from lean_search_index.site.patcher import LOADER_SNIPPET

MAP_A = SearchResult(name="map", module="A", kind="def", doc_link="./A.html#map")
MAP_B = SearchResult(
    name="map", module="B", kind="def", signature="(f : α → β) : List β"
)


def _split_shard(text: str) -> tuple[str, str, object]:
    """Split a shard file into header, assignment target and payload."""
    header, assignment = text.split("\n", 1)
    target, payload = assignment.split(" = ", 1)
    assert payload.endswith(";\n")
    return header, target, json.loads(payload[: -len(";\n")])


class TestRenderShards:
    """Tests for shard serialization."""

    def test_declaration_shard_format(self):
        """Test the header, registry slot and entry list of a name shard."""
        header, target, payload = _split_shard(
            render_declaration_shard(7, [("map", [MAP_A, MAP_B])])
        )

        assert header == f"// Generated by lean-search-index {__version__}"
        assert target == 'window.leanDeclarationIndex["7"]'
        assert payload == [
            [
                "map",
                [
                    {
                        "name": "map",
                        "module": "A",
                        "kind": "def",
                        "docLink": "./A.html#map",
                    },
                    {
                        "name": "map",
                        "module": "B",
                        "kind": "def",
                        "signature": "(f : α → β) : List β",
                    },
                ],
            ]
        ]

    def test_type_shard_keyed_by_shape(self):
        """Test that a type shard assigns into the shape's slot."""
        _, target, payload = _split_shard(render_type_shard("fun -> List", [MAP_B]))

        assert target == 'window.leanTypeIndex["fun -> List"]'
        assert [result["module"] for result in payload] == ["B"]

    def test_non_ascii_kept_verbatim(self):
        """Test that Unicode is written as-is rather than escaped."""
        text = render_type_shard("ℕ", [MAP_B])

        assert '["ℕ"]' in text
        assert "α → β" in text


class TestWriteShards:
    """Tests for writing shard files."""

    async def test_write_declaration_shards(self, temp_directory):
        """Test that one file is written per shard id."""
        shards = {7: [("map", [MAP_A, MAP_B])], 0: [("a", [MAP_A])]}

        count = await write_declaration_shards(shards, temp_directory)

        assert count == 2
        assert sorted(p.name for p in temp_directory.iterdir()) == ["0.js", "7.js"]
        assert 'window.leanDeclarationIndex["7"]' in (
            temp_directory / "7.js"
        ).read_text(encoding="utf-8")

    async def test_write_type_shards(self, temp_directory):
        """Test that one file is written per shape under its file key."""
        type_index = {"fun -> List": [MAP_B], "Nat": [MAP_A]}

        count = await write_type_shards(type_index, temp_directory)

        assert count == 2
        path = temp_directory / f"{shape_file_key('fun -> List')}.js"
        assert path.exists()
        assert (temp_directory / "_4e_at.js").exists()


class TestPatchHtmlFiles:
    """Tests for patching a documentation tree."""

    async def test_patches_nested_pages(self, temp_directory):
        """Test that every page under the directory is patched once."""
        (temp_directory / "Init").mkdir()
        (temp_directory / "index.html").write_text("<body></body>")
        (temp_directory / "Init" / "Prelude.html").write_text("<body>x</body>")

        patched = await patch_html_files(temp_directory)

        assert patched == 2
        for path in temp_directory.rglob("*.html"):
            assert path.read_text().count(LOADER_SNIPPET) == 1

    async def test_second_run_changes_nothing(self, temp_directory):
        """Test that re-running the patch leaves files byte-identical."""
        page = temp_directory / "index.html"
        page.write_text("<body></body>")
        await patch_html_files(temp_directory)
        before = page.read_bytes()

        patched = await patch_html_files(temp_directory)

        assert patched == 0
        assert page.read_bytes() == before

    async def test_skips_non_regular_files(self, temp_directory):
        """Test that a directory named like a page is ignored."""
        (temp_directory / "folder.html").mkdir()
        (temp_directory / "page.html").write_text("<body></body>")

        assert await patch_html_files(temp_directory) == 1

    async def test_page_without_body_left_alone(self, temp_directory):
        """Test that a page without </body> is not rewritten."""
        page = temp_directory / "fragment.html"
        page.write_text("<div>x</div>")

        assert await patch_html_files(temp_directory) == 0
        assert page.read_text() == "<div>x</div>"

    async def test_preserves_line_endings(self, temp_directory):
        """Test that CRLF line endings survive patching."""
        page = temp_directory / "index.html"
        original = b"<html>\r\n<body>\r\n</body>\r\n</html>\r\n"
        page.write_bytes(original)

        await patch_html_files(temp_directory)

        patched = page.read_bytes()
        assert patched.replace(LOADER_SNIPPET.encode("utf-8"), b"", 1) == original


class TestCopyAsset:
    """Tests for copying the client script."""

    async def test_copy_asset(self, temp_directory):
        """Test that the asset is copied byte for byte."""
        source = temp_directory / "client.js"
        source.write_bytes(b"console.log(1);\n")
        destination = temp_directory / "doc" / "lean-search.js"
        destination.parent.mkdir()

        result = await copy_asset(source, destination)

        assert result == destination
        assert destination.read_bytes() == b"console.log(1);\n"
