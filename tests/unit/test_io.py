"""Unit tests for document loading and artifact writing."""

from __future__ import annotations

from pathlib import Path

import pytest

from genalloc.errors import AllocDocumentError, DuplicateAddress
from genalloc.io import extract_alloc, load_alloc_document, read_artifact, write_artifact

ONE = "0x0000000000000000000000000000000000000001"
TWO = "0x0000000000000000000000000000000000000002"


class TestExtractAlloc:
    """Tests for extract_alloc()."""

    def test_flat_mapping(self) -> None:
        assert extract_alloc({ONE: "100"}) == {ONE: "100"}

    def test_genesis_alloc_mapping(self) -> None:
        assert extract_alloc({ONE: {"balance": "100"}}) == {ONE: "100"}

    def test_full_genesis_document(self) -> None:
        doc = {"config": {"chainId": 1}, "alloc": {ONE: {"balance": "7"}}}
        assert extract_alloc(doc) == {ONE: "7"}

    def test_integer_balance_converted(self) -> None:
        assert extract_alloc({ONE: 10**30}) == {ONE: str(10**30)}

    def test_extra_account_fields_ignored(self) -> None:
        assert extract_alloc({ONE: {"balance": "1", "nonce": "0x0"}}) == {ONE: "1"}

    def test_missing_balance_rejected(self) -> None:
        with pytest.raises(AllocDocumentError, match="no 'balance'"):
            extract_alloc({ONE: {"nonce": "0x0"}})

    @pytest.mark.parametrize("balance", [1.5, True, None, ["1"]])
    def test_non_string_balance_rejected(self, balance: object) -> None:
        with pytest.raises(AllocDocumentError, match="balance must be"):
            extract_alloc({ONE: balance})

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(AllocDocumentError, match="must be a mapping"):
            extract_alloc([ONE])

    def test_non_string_key_rejected(self) -> None:
        with pytest.raises(AllocDocumentError, match="quote hex addresses"):
            extract_alloc({1: "100"})


class TestLoadAllocDocument:
    """Tests for load_alloc_document()."""

    def test_json_fixture(self, fixture_dir: Path) -> None:
        alloc = load_alloc_document(fixture_dir / "single_account.json")
        assert alloc == {ONE: "100"}

    def test_genesis_fixture(self, fixture_dir: Path) -> None:
        alloc = load_alloc_document(fixture_dir / "genesis.json")
        assert alloc == {TWO: "7", ONE: "100"}

    def test_yaml_fixture(self, fixture_dir: Path) -> None:
        alloc = load_alloc_document(fixture_dir / "sample_alloc.yaml")
        assert alloc == {ONE: "100", TWO: "7"}

    def test_duplicate_json_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "dup.json"
        path.write_text(f'{{"{ONE}": "1", "{ONE}": "2"}}')
        with pytest.raises(DuplicateAddress):
            load_alloc_document(path)

    def test_invalid_json_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(AllocDocumentError, match="cannot parse"):
            load_alloc_document(path)

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n")
        with pytest.raises(AllocDocumentError, match="cannot parse"):
            load_alloc_document(path)

    def test_unquoted_yaml_address_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "unquoted.yml"
        path.write_text(f"{ONE}: 1\n")
        with pytest.raises(AllocDocumentError, match="must be strings"):
            load_alloc_document(path)

    def test_integer_beyond_digit_limit_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "huge.json"
        path.write_text(f'{{"{ONE}": {"1" * 5000}}}')
        with pytest.raises(AllocDocumentError, match="cannot parse"):
            load_alloc_document(path)

    def test_missing_file_raises_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_alloc_document(tmp_path / "missing.json")


class TestWriteArtifact:
    """Tests for write_artifact()."""

    def test_writes_with_trailing_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "alloc.go"
        write_artifact(path, 'const a = "\\x01"')
        assert path.read_text() == 'const a = "\\x01"\n'

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "alloc.go"
        write_artifact(path, "x")
        assert path.exists()

    def test_no_tmp_file_left_behind(self, tmp_path: Path) -> None:
        path = tmp_path / "alloc.go"
        write_artifact(path, "x")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["alloc.go"]

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "alloc.go"
        path.write_text("old\n")
        write_artifact(path, "new")
        assert read_artifact(path) == "new\n"

    def test_failed_replace_removes_tmp_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail_replace(self: Path, target: Path) -> Path:
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", fail_replace)
        path = tmp_path / "alloc.go"
        with pytest.raises(OSError, match="disk full"):
            write_artifact(path, "x")
        assert list(tmp_path.iterdir()) == []
