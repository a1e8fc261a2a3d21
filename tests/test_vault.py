"""
Tests for the filesystem vault
"""
import pytest

from paper2note.core.errors import DocumentError, DuplicateFileError
from paper2note.core.vault import Vault


class TestVault:
    """Test Vault"""

    def test_create_and_read(self, vault: Vault):
        """Created notes can be read back by vault path"""
        path = vault.create("papers/note.md", "hello")
        assert path == "papers/note.md"
        assert vault.read(path) == "hello"

    def test_create_existing_raises(self, vault: Vault):
        """Creating over an existing note fails and keeps it"""
        vault.create("note.md", "one")
        with pytest.raises(DuplicateFileError):
            vault.create("note.md", "two")
        assert vault.read("note.md") == "one"

    def test_modify_missing_raises(self, vault: Vault):
        """Only existing notes can be modified"""
        with pytest.raises(DocumentError):
            vault.modify("missing.md", "x")

    def test_rename_keeps_content(self, vault: Vault):
        """A rename moves the content"""
        vault.create("dir/old.md", "content")
        assert vault.rename("dir/old.md", "dir/new.md") == "dir/new.md"
        assert not vault.exists("dir/old.md")
        assert vault.read("dir/new.md") == "content"

    def test_rename_onto_itself(self, vault: Vault):
        """Renaming to the same path is a no-op"""
        vault.create("same.md", "x")
        assert vault.rename("same.md", "same.md") == "same.md"

    def test_rename_onto_other_file_raises(self, vault: Vault):
        """Renaming onto another note fails"""
        vault.create("a.md", "a")
        vault.create("b.md", "b")
        with pytest.raises(DuplicateFileError):
            vault.rename("a.md", "b.md")
        assert vault.read("a.md") == "a"

    def test_mkdir_is_idempotent(self, vault: Vault):
        """Creating an existing folder is fine"""
        vault.mkdir("papers")
        vault.mkdir("papers")
        assert vault.path("papers").is_dir()

    def test_binary_roundtrip(self, vault: Vault):
        """Binary files are stored unchanged"""
        vault.write_binary("papers/x.pdf", b"%PDF")
        assert vault.read_binary("papers/x.pdf") == b"%PDF"

    def test_read_frontmatter_without_block(self, vault: Vault):
        """A note without frontmatter has an empty mapping"""
        vault.create("n.md", "body")
        assert vault.read_frontmatter("n.md") == {}

    def test_process_frontmatter_preserves_unknown_keys(self, vault: Vault):
        """Untouched keys are written back in order"""
        vault.create("n.md", "---\nfoo: bar\nrating: 3\n---\nbody text\n")
        vault.process_frontmatter("n.md", lambda fm: fm.update({"title": "T"}))
        assert vault.read("n.md") == "---\nfoo: bar\nrating: 3\ntitle: T\n---\nbody text\n"

    def test_process_frontmatter_adds_block(self, vault: Vault):
        """A block is added in front of a plain note"""
        vault.create("n.md", "body")
        vault.process_frontmatter("n.md", lambda fm: fm.update({"title": "T"}))
        assert vault.read("n.md") == "---\ntitle: T\n---\nbody"

    def test_path_helpers(self):
        """Parent and join work on posix vault paths"""
        assert Vault.parent_of("a/b/c.md") == "a/b"
        assert Vault.parent_of("c.md") == ""
        assert Vault.join("", "c.md") == "c.md"
        assert Vault.join("a", "c.md") == "a/c.md"

    def test_invalid_utf8_raises_document_error(self, vault: Vault):
        """Undecodable notes are reported as DocumentError"""
        vault.write_binary("broken.md", b"---\ntitle: \xff\xfe\n---\n")
        with pytest.raises(DocumentError):
            vault.read("broken.md")
        with pytest.raises(DocumentError):
            vault.read_frontmatter("broken.md")
